"""Notification workflow: create, list, mark read, express interest, respond to requests."""
import logging
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.common.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    SelfInterestError,
    ValidationError,
)
from petmagic.domain.notifications.models import (
    DEFAULT_NOTIFICATION_TYPE,
    Decision,
    Notification,
    NotificationType,
)
from petmagic.domain.users.models import User
from petmagic.infra.db.repositories.notification_repo import NotificationRepository
from petmagic.infra.db.repositories.pet_repo import PetRepository
from petmagic.infra.db.repositories.user_repo import UserRepository
from petmagic.infra.db.session import transaction

logger = logging.getLogger(__name__)

DUPLICATE_INTEREST_MESSAGE = "You have already expressed interest in this pet"


def _parse_type(type: Union[str, NotificationType, None]) -> NotificationType:
    if type is None or (isinstance(type, str) and not type.strip()):
        return DEFAULT_NOTIFICATION_TYPE
    try:
        return NotificationType(type)
    except ValueError:
        allowed = ", ".join(t.value for t in NotificationType)
        raise ValidationError(f"Unknown notification type '{type}' (expected one of: {allowed})")


class NotificationService:
    """Notification workflow engine.

    Every mutating call is one transaction against the session it was built with.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.notifications = NotificationRepository(db)
        self.pets = PetRepository(db)
        self.users = UserRepository(db)

    async def create_notification(
        self,
        message: Optional[str],
        to_user_id: Optional[int],
        type: Union[str, NotificationType, None] = None,
        pet_id: Optional[int] = None,
        from_user_id: Optional[int] = None,
    ) -> Notification:
        """Create an unread notification for to_user_id. type defaults to interest."""
        if not message or not message.strip():
            raise ValidationError("Missing required fields for notification: message")
        if to_user_id is None:
            raise ValidationError("Missing required fields for notification: toUserId")
        notification_type = _parse_type(type)

        if not await self.users.get_by_id(to_user_id):
            raise NotFoundError("User", to_user_id)
        if from_user_id is not None and not await self.users.get_by_id(from_user_id):
            raise NotFoundError("User", from_user_id)
        if pet_id is not None and not await self.pets.get(pet_id):
            raise NotFoundError("Pet", pet_id)

        notification = Notification.create(
            type=notification_type,
            message=message.strip(),
            to_user_id=to_user_id,
            pet_id=pet_id,
            from_user_id=from_user_id,
        )
        # Only the unread-interest index can reject an interest insert once the references exist.
        conflict = DUPLICATE_INTEREST_MESSAGE if notification_type is NotificationType.INTEREST else None
        async with transaction(self.db, conflict_message=conflict):
            created = await self.notifications.create(notification)
        logger.info(
            "Notification %s created: type=%s to=%s pet=%s from=%s",
            created.id, created.type.value, to_user_id, pet_id, from_user_id,
        )
        return created

    async def list_notifications(self, user_id: int, unread_only: bool = False) -> list[Notification]:
        """All notifications addressed to user_id, newest first."""
        return await self.notifications.list_by_user(user_id, unread_only=unread_only)

    async def count_unread(self, user_id: int) -> int:
        return await self.notifications.count_unread(user_id)

    async def mark_read(self, notification_id: str) -> Notification:
        """Mark one notification read. Already-read notifications are left as they are."""
        async with transaction(self.db):
            existing = await self.notifications.get(notification_id)
            if existing is None:
                raise NotFoundError("Notification", notification_id)
            if not existing.is_read:
                await self.notifications.mark_read(notification_id)
        return existing.model_copy(update={"is_read": True})

    async def mark_all_read(self, user_id: int) -> int:
        """Mark every notification addressed to user_id read. Returns how many changed."""
        async with transaction(self.db):
            updated = await self.notifications.mark_all_read(user_id)
        logger.info("Marked %d notifications read for user %s", updated, user_id)
        return updated

    async def express_interest(self, pet_id: int, from_user: User) -> Notification:
        """Notify a pet's owner that from_user would like to adopt it."""
        pet = await self.pets.get(pet_id)
        if pet is None:
            raise NotFoundError("Pet", pet_id)
        if pet.owner_id == from_user.id:
            logger.warning("User %s tried to express interest in own pet %s", from_user.id, pet_id)
            raise SelfInterestError()
        if pet.owner_id is None:
            raise ValidationError(f"{pet.name} has no owner to notify")
        # Advisory only; the unread-interest index decides under concurrency.
        if await self.notifications.find_unread_interest(pet.id, from_user.id):
            raise ConflictError(DUPLICATE_INTEREST_MESSAGE)

        return await self.create_notification(
            type=NotificationType.INTEREST,
            message=f"{from_user.name} expressed interest in adopting {pet.name}.",
            to_user_id=pet.owner_id,
            pet_id=pet.id,
            from_user_id=from_user.id,
        )

    async def respond_to_adoption_request(
        self,
        notification_id: str,
        decision: Union[str, Decision],
        responder: User,
    ) -> Notification:
        """Answer an interest notification.

        Creates a confirmation (accept) or rejection (reject) for the interested
        user and marks the interest read, both in one transaction.
        """
        try:
            decision = Decision(decision)
        except ValueError:
            raise ValidationError(f"Unknown decision '{decision}' (expected accept or reject)")

        async with transaction(self.db):
            request = await self.notifications.get(notification_id)
            if request is None:
                raise NotFoundError("Notification", notification_id)
            if request.type is not NotificationType.INTEREST:
                raise ValidationError("Only interest notifications can be accepted or rejected")
            if request.to_user_id != responder.id:
                raise AuthorizationError("Only the pet owner can respond to this request")
            if request.from_user_id is None:
                raise ValidationError("This request has no sender to respond to")
            # Read means already answered (or dismissed); the conditional update guards the race.
            if request.is_read or await self.notifications.mark_read(request.id) == 0:
                raise ConflictError("This adoption request has already been handled")

            pet = await self.pets.get(request.pet_id) if request.pet_id is not None else None
            pet_name = pet.name if pet else "the pet"
            if decision is Decision.ACCEPT:
                text = f"{responder.name} accepted your adoption request for {pet_name}."
            else:
                text = f"{responder.name} declined your adoption request for {pet_name}."
            response = await self.notifications.create(
                Notification.create(
                    type=decision.response_type,
                    message=text,
                    to_user_id=request.from_user_id,
                    pet_id=request.pet_id,
                    from_user_id=responder.id,
                )
            )
        logger.info(
            "Adoption request %s %sed by user %s; %s %s sent to user %s",
            notification_id, decision.value, responder.id,
            response.type.value, response.id, response.to_user_id,
        )
        return response
