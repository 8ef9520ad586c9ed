"""Pet catalog API routes, plus expressing adoption interest in a pet."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from petmagic.api.deps import (
    get_current_user,
    get_notification_service,
    get_pet_service,
)
from petmagic.api.schemas import Ack, CamelModel, NotificationResponse, PetResponse
from petmagic.domain.notifications.services import NotificationService
from petmagic.domain.pets.services import PetService
from petmagic.domain.users.models import User

router = APIRouter()


class PetCreateRequest(CamelModel):
    """Pet listing request. Required fields are checked by the service."""
    name: Optional[str] = None
    breed: Optional[str] = None
    age: Optional[int] = None
    type: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None
    owner_id: Optional[int] = None


class PetUpdateRequest(CamelModel):
    name: Optional[str] = None
    breed: Optional[str] = None
    age: Optional[int] = None
    type: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None


@router.get("", response_model=List[PetResponse])
async def list_pets(
    type: Optional[str] = None,
    q: Optional[str] = None,
    owner_id: Optional[int] = Query(None, alias="ownerId"),
    service: PetService = Depends(get_pet_service),
):
    """Browse listings, newest first. Optional type filter and search over name/breed/location."""
    pets = await service.list_pets(type=type, search=q, owner_id=owner_id)
    return [PetResponse.model_validate(p) for p in pets]


@router.get("/{pet_id}", response_model=PetResponse)
async def get_pet(pet_id: int, service: PetService = Depends(get_pet_service)):
    pet = await service.get_pet(pet_id)
    return PetResponse.model_validate(pet)


@router.post("", response_model=PetResponse, status_code=status.HTTP_201_CREATED)
async def create_pet(request: PetCreateRequest, service: PetService = Depends(get_pet_service)):
    """List a new pet for adoption."""
    data = request.model_dump(exclude={"owner_id"})
    pet = await service.create_pet(data, owner_id=request.owner_id)
    return PetResponse.model_validate(pet)


@router.put("/{pet_id}", response_model=PetResponse)
async def update_pet(
    pet_id: int,
    request: PetUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    """Update a listing. Only its owner may do so."""
    pet = await service.update_pet(pet_id, request.model_dump(exclude_unset=True), user_id=current_user.id)
    return PetResponse.model_validate(pet)


@router.delete("/{pet_id}", response_model=Ack)
async def delete_pet(
    pet_id: int,
    current_user: User = Depends(get_current_user),
    service: PetService = Depends(get_pet_service),
):
    """Remove a listing. Only its owner may do so."""
    await service.delete_pet(pet_id, user_id=current_user.id)
    return Ack(message="Pet deleted", id=pet_id)


@router.post(
    "/{pet_id}/interest",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def express_interest(
    pet_id: int,
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    """Tell the pet's owner that the current user would like to adopt it."""
    notification = await service.express_interest(pet_id, from_user=current_user)
    return NotificationResponse.model_validate(notification)
