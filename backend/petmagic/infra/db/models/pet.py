"""Pet listing database model."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from petmagic.domain.common.types import utcnow
from petmagic.domain.pets.models import Pet as PetEntity, PetType
from petmagic.infra.db.base import Base


class PetModel(Base):
    """Pet listing. Owned by the user who created it."""

    __tablename__ = "pets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    breed = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    type = Column(String, nullable=False, index=True)  # dog | cat | bird | rabbit | other
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    image = Column(String, nullable=False, default="")
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_entity(self) -> PetEntity:
        """Convert to domain entity."""
        return PetEntity(
            id=self.id,
            name=self.name,
            age=self.age,
            breed=self.breed,
            type=PetType(self.type),
            description=self.description,
            location=self.location,
            image=self.image or "",
            owner_id=self.owner_id,
            created_at=self.created_at,
        )
