"""User directory: signup, login, profile."""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.common.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from petmagic.domain.users.models import User
from petmagic.infra.db.repositories.user_repo import UserRepository
from petmagic.infra.db.session import transaction

logger = logging.getLogger(__name__)


class UserService:
    """User service. Passwords are compared as given; there is no credential hashing."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def signup(
        self, name: str, email: str, password: str, profile_image: Optional[str] = None
    ) -> User:
        if not name.strip() or not email.strip() or not password:
            raise ValidationError("Name, email and password are required")
        email = email.strip().lower()
        if await self.users.get_by_email(email):
            raise ConflictError("Email already registered")
        async with transaction(self.db, conflict_message="Email already registered"):
            user = await self.users.create(
                name=name.strip(), email=email, password=password, profile_image=profile_image
            )
        logger.info("User %s signed up", user.id)
        return user

    async def login(self, email: str, password: str) -> User:
        user = await self.users.get_by_email(email)
        if user is None or user.password != password:
            logger.warning("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")
        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def update_profile(
        self,
        user_id: int,
        acting_user: User,
        name: Optional[str] = None,
        profile_image: Optional[str] = None,
    ) -> User:
        """Update name / profile image. Users may only edit their own profile."""
        if acting_user.id != user_id:
            raise AuthorizationError("You can only edit your own profile")
        if name is not None and not name.strip():
            raise ValidationError("Name cannot be empty")
        async with transaction(self.db):
            user = await self.users.update_profile(
                user_id, name=name.strip() if name else None, profile_image=profile_image
            )
            if user is None:
                raise NotFoundError("User", user_id)
        return user
