"""Pet catalog repository."""
from typing import Any, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.pets.models import Pet, PetType
from petmagic.infra.db.models.pet import PetModel


class PetRepository:
    """Pet repository. Writes are flushed; the caller owns the commit."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        name: str,
        breed: str,
        age: int,
        type: PetType,
        description: str,
        location: str,
        image: str = "",
        owner_id: Optional[int] = None,
    ) -> Pet:
        """Create a pet listing."""
        model = PetModel(
            name=name,
            breed=breed,
            age=age,
            type=type.value,
            description=description,
            location=location,
            image=image or "",
            owner_id=owner_id,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return model.to_entity()

    async def get(self, pet_id: int) -> Optional[Pet]:
        """Get a pet by ID."""
        model = await self.session.get(PetModel, pet_id)
        return model.to_entity() if model else None

    async def list_filtered(
        self,
        type: Optional[PetType] = None,
        search: Optional[str] = None,
        owner_id: Optional[int] = None,
    ) -> list[Pet]:
        """List pets, newest first. search matches name, breed or location (case-insensitive)."""
        q = select(PetModel).order_by(PetModel.created_at.desc(), PetModel.id.desc())
        if type is not None:
            q = q.where(PetModel.type == type.value)
        if owner_id is not None:
            q = q.where(PetModel.owner_id == owner_id)
        if search:
            pattern = f"%{search.strip()}%"
            q = q.where(
                or_(
                    PetModel.name.ilike(pattern),
                    PetModel.breed.ilike(pattern),
                    PetModel.location.ilike(pattern),
                )
            )
        result = await self.session.execute(q)
        return [m.to_entity() for m in result.scalars().all()]

    async def update(self, pet_id: int, changes: dict[str, Any]) -> Optional[Pet]:
        """Apply field changes. Returns None if the pet does not exist."""
        model = await self.session.get(PetModel, pet_id)
        if model is None:
            return None
        for field, value in changes.items():
            if isinstance(value, PetType):
                value = value.value
            setattr(model, field, value)
        await self.session.flush()
        return model.to_entity()

    async def delete(self, pet_id: int) -> bool:
        """Delete a pet. Returns True if a row was removed."""
        result = await self.session.execute(delete(PetModel).where(PetModel.id == pet_id))
        return (result.rowcount or 0) > 0
