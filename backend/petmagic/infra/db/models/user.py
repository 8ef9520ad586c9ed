"""User database model."""
from sqlalchemy import Column, DateTime, Integer, String

from petmagic.domain.common.types import utcnow
from petmagic.domain.users.models import User as UserEntity
from petmagic.infra.db.base import Base


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    profile_image = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_entity(self) -> UserEntity:
        """Convert to domain entity."""
        return UserEntity(
            id=self.id,
            name=self.name,
            email=self.email,
            password=self.password,
            profile_image=self.profile_image,
            created_at=self.created_at,
        )
