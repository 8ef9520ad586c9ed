"""Notification repository."""
from typing import Optional, List

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.notifications.models import Notification, NotificationType
from petmagic.infra.db.models.notification import NotificationModel


class NotificationRepository:
    """Notification repository. Writes are flushed; the caller owns the commit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, notification: Notification) -> Notification:
        """Persist a notification."""
        model = NotificationModel.from_entity(notification)
        self.session.add(model)
        await self.session.flush()
        return model.to_entity()

    async def get(self, notification_id: str) -> Optional[Notification]:
        """Get a notification by ID."""
        model = await self.session.get(NotificationModel, notification_id)
        return model.to_entity() if model else None

    async def list_by_user(self, user_id: int, unread_only: bool = False) -> List[Notification]:
        """List notifications addressed to a user, newest first."""
        q = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc())
        )
        if unread_only:
            q = q.where(NotificationModel.is_read.is_(False))
        result = await self.session.execute(q)
        return [m.to_entity() for m in result.scalars().all()]

    async def count_unread(self, user_id: int) -> int:
        """Count unread notifications for a user."""
        result = await self.session.execute(
            select(func.count()).select_from(NotificationModel).where(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
        )
        return result.scalar() or 0

    async def find_unread_interest(self, pet_id: int, from_user_id: int) -> Optional[Notification]:
        """Return the pending interest of from_user_id in pet_id, if any."""
        result = await self.session.execute(
            select(NotificationModel).where(
                NotificationModel.type == NotificationType.INTEREST.value,
                NotificationModel.pet_id == pet_id,
                NotificationModel.from_user_id == from_user_id,
                NotificationModel.is_read.is_(False),
            )
        )
        model = result.scalars().first()
        return model.to_entity() if model else None

    async def mark_read(self, notification_id: str) -> int:
        """Mark one notification as read. Returns the number of rows that changed."""
        result = await self.session.execute(
            update(NotificationModel)
            .where(
                NotificationModel.id == notification_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True)
        )
        return result.rowcount or 0

    async def mark_all_read(self, user_id: int) -> int:
        """Mark all unread notifications of a user as read. Returns count updated."""
        result = await self.session.execute(
            update(NotificationModel)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .values(is_read=True)
        )
        return result.rowcount or 0
