"""Notification domain models."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from petmagic.domain.common.types import generate_id, utcnow


class NotificationType(str, Enum):
    """Notification kinds. The type of a stored notification never changes."""
    INTEREST = "interest"
    ADOPTION = "adoption"
    CONFIRMATION = "confirmation"
    REJECTION = "rejection"
    SYSTEM = "system"


# Used when a caller omits the type on create.
DEFAULT_NOTIFICATION_TYPE = NotificationType.INTEREST


class Decision(str, Enum):
    """Owner's answer to an interest notification."""
    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def response_type(self) -> NotificationType:
        if self is Decision.ACCEPT:
            return NotificationType.CONFIRMATION
        return NotificationType.REJECTION


class Notification(BaseModel):
    """Notification domain model."""

    id: str
    type: NotificationType
    message: str
    pet_id: Optional[int] = None
    from_user_id: Optional[int] = None
    to_user_id: int
    is_read: bool = False
    created_at: datetime

    @classmethod
    def create(
        cls,
        type: NotificationType,
        message: str,
        to_user_id: int,
        pet_id: Optional[int] = None,
        from_user_id: Optional[int] = None,
    ) -> "Notification":
        """Create a new unread notification."""
        return cls(
            id=generate_id(),
            type=type,
            message=message,
            pet_id=pet_id,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            is_read=False,
            created_at=utcnow(),
        )
