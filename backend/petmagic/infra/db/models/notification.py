"""Notification database model."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, text

from petmagic.domain.common.types import utcnow
from petmagic.domain.notifications.models import Notification as NotificationEntity, NotificationType
from petmagic.infra.db.base import Base

# At most one unread interest per (pet, prospective adopter).
UNREAD_INTEREST_INDEX = "uq_notifications_unread_interest"


class NotificationModel(Base):
    """Notification addressed to user_id (the recipient)."""

    __tablename__ = "notifications"

    id = Column(String, primary_key=True)
    type = Column(String, nullable=False)  # interest, adoption, confirmation, rejection, system
    message = Column(Text, nullable=False)
    pet_id = Column(Integer, ForeignKey("pets.id", ondelete="SET NULL"), nullable=True)
    from_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index(
            UNREAD_INTEREST_INDEX,
            "pet_id",
            "from_user_id",
            unique=True,
            postgresql_where=text("type = 'interest' AND NOT is_read"),
            sqlite_where=text("type = 'interest' AND is_read = 0"),
        ),
        Index("ix_notifications_user_created", "user_id", "created_at"),
    )

    def to_entity(self) -> NotificationEntity:
        """Convert to domain entity."""
        return NotificationEntity(
            id=self.id,
            type=NotificationType(self.type),
            message=self.message,
            pet_id=self.pet_id,
            from_user_id=self.from_user_id,
            to_user_id=self.user_id,
            is_read=self.is_read,
            created_at=self.created_at,
        )

    @classmethod
    def from_entity(cls, entity: NotificationEntity) -> "NotificationModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            type=entity.type.value,
            message=entity.message,
            pet_id=entity.pet_id,
            from_user_id=entity.from_user_id,
            user_id=entity.to_user_id,
            is_read=entity.is_read,
            created_at=entity.created_at,
        )
