"""User repository."""
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.users.models import User
from petmagic.infra.db.models.user import UserModel


class UserRepository:
    """User repository. Writes are flushed; the caller owns the commit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self, name: str, email: str, password: str, profile_image: Optional[str] = None
    ) -> User:
        """Create a user."""
        model = UserModel(name=name, email=email, password=password, profile_image=profile_image)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return model.to_entity()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email.strip().lower())
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def exist(self, user_ids: Iterable[int]) -> set[int]:
        """Return the subset of user_ids that exist."""
        ids = set(user_ids)
        if not ids:
            return set()
        result = await self.session.execute(select(UserModel.id).where(UserModel.id.in_(ids)))
        return set(result.scalars().all())

    async def update_profile(
        self, user_id: int, name: Optional[str] = None, profile_image: Optional[str] = None
    ) -> Optional[User]:
        """Update the mutable profile fields. Returns None if the user does not exist."""
        model = await self.session.get(UserModel, user_id)
        if model is None:
            return None
        if name is not None:
            model.name = name
        if profile_image is not None:
            model.profile_image = profile_image
        await self.session.flush()
        return model.to_entity()
