"""Pet catalog service."""
import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.common.errors import AuthorizationError, NotFoundError, ValidationError
from petmagic.domain.pets.models import Pet, PetType
from petmagic.infra.db.repositories.pet_repo import PetRepository
from petmagic.infra.db.repositories.user_repo import UserRepository
from petmagic.infra.db.session import transaction

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "breed", "age", "type", "description", "location")
EDITABLE_FIELDS = REQUIRED_FIELDS + ("image",)


def _require_fields(data: dict[str, Any], fields) -> None:
    missing = [f for f in fields if data.get(f) is None or (isinstance(data[f], str) and not data[f].strip())]
    if missing:
        raise ValidationError(f"All required fields must be filled (missing: {', '.join(missing)})")


def _check_values(data: dict[str, Any]) -> dict[str, Any]:
    clean = dict(data)
    if "type" in clean and clean["type"] is not None:
        try:
            clean["type"] = PetType(clean["type"])
        except ValueError:
            allowed = ", ".join(t.value for t in PetType)
            raise ValidationError(f"Unknown pet type '{clean['type']}' (expected one of: {allowed})")
    if "age" in clean and clean["age"] is not None and clean["age"] < 0:
        raise ValidationError("Age cannot be negative")
    return clean


class PetService:
    """Pet catalog: list, get, create, update and delete listings."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.pets = PetRepository(db)
        self.users = UserRepository(db)

    async def list_pets(
        self,
        type: Optional[str] = None,
        search: Optional[str] = None,
        owner_id: Optional[int] = None,
    ) -> list[Pet]:
        pet_type = _check_values({"type": type})["type"] if type and type != "all" else None
        return await self.pets.list_filtered(type=pet_type, search=search, owner_id=owner_id)

    async def get_pet(self, pet_id: int) -> Pet:
        pet = await self.pets.get(pet_id)
        if pet is None:
            raise NotFoundError("Pet", pet_id)
        return pet

    async def create_pet(self, data: dict[str, Any], owner_id: Optional[int] = None) -> Pet:
        """Create a listing. owner_id must reference an existing user when given."""
        _require_fields(data, REQUIRED_FIELDS)
        clean = _check_values(data)
        if owner_id is not None and not await self.users.get_by_id(owner_id):
            raise NotFoundError("User", owner_id)
        async with transaction(self.db):
            pet = await self.pets.create(
                name=clean["name"],
                breed=clean["breed"],
                age=clean["age"],
                type=clean["type"],
                description=clean["description"],
                location=clean["location"],
                image=clean.get("image") or "",
                owner_id=owner_id,
            )
        logger.info("Pet %s (%s) listed by user %s", pet.id, pet.name, owner_id)
        return pet

    async def _owned_pet(self, pet_id: int, user_id: int) -> Pet:
        pet = await self.get_pet(pet_id)
        if pet.owner_id != user_id:
            logger.warning("User %s attempted to modify pet %s owned by %s", user_id, pet_id, pet.owner_id)
            raise AuthorizationError("Only the owner can modify this pet")
        return pet

    async def update_pet(self, pet_id: int, changes: dict[str, Any], user_id: int) -> Pet:
        """Apply a partial update. Only the owner may update."""
        await self._owned_pet(pet_id, user_id)
        changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
        for field in REQUIRED_FIELDS:
            if isinstance(changes.get(field), str) and not changes[field].strip():
                raise ValidationError(f"{field} cannot be empty")
        clean = _check_values(changes)
        async with transaction(self.db):
            pet = await self.pets.update(pet_id, clean)
        logger.info("Pet %s updated by owner %s: %s", pet_id, user_id, sorted(clean))
        return pet

    async def delete_pet(self, pet_id: int, user_id: int) -> None:
        """Delete a listing. Only the owner may delete."""
        await self._owned_pet(pet_id, user_id)
        async with transaction(self.db):
            await self.pets.delete(pet_id)
        logger.info("Pet %s removed by owner %s", pet_id, user_id)
