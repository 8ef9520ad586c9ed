"""Database models."""
from petmagic.infra.db.models.user import UserModel
from petmagic.infra.db.models.pet import PetModel
from petmagic.infra.db.models.notification import NotificationModel, UNREAD_INTEREST_INDEX
from petmagic.infra.db.models.message import MessageModel

__all__ = [
    "UserModel",
    "PetModel",
    "NotificationModel",
    "UNREAD_INTEREST_INDEX",
    "MessageModel",
]
