"""API dependencies."""
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.common.errors import AuthenticationError
from petmagic.domain.conversations.services import ConversationService
from petmagic.domain.notifications.services import NotificationService
from petmagic.domain.pets.services import PetService
from petmagic.domain.users.models import User
from petmagic.domain.users.services import UserService
from petmagic.infra.db.repositories.user_repo import UserRepository
from petmagic.infra.db.session import get_db

__all__ = [
    "get_db",
    "get_current_user",
    "get_notification_service",
    "get_conversation_service",
    "get_pet_service",
    "get_user_service",
]


async def get_current_user(
    x_user_id: Optional[int] = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the acting user from the X-User-Id header."""
    if x_user_id is None:
        raise AuthenticationError("Missing X-User-Id header")
    user = await UserRepository(db).get_by_id(x_user_id)
    if user is None:
        raise AuthenticationError(f"Unknown user {x_user_id}")
    return user


def get_notification_service(db: AsyncSession = Depends(get_db)) -> NotificationService:
    return NotificationService(db)


def get_conversation_service(db: AsyncSession = Depends(get_db)) -> ConversationService:
    return ConversationService(db)


def get_pet_service(db: AsyncSession = Depends(get_db)) -> PetService:
    return PetService(db)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)
