"""User API routes: signup, login, profile."""
from typing import Optional

from fastapi import APIRouter, Depends, status

from petmagic.api.deps import get_current_user, get_user_service
from petmagic.api.schemas import CamelModel, UserResponse
from petmagic.domain.users.models import User
from petmagic.domain.users.services import UserService

router = APIRouter()


class SignupRequest(CamelModel):
    name: str
    email: str
    password: str
    profile_image: Optional[str] = None


class LoginRequest(CamelModel):
    email: str
    password: str


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = None
    profile_image: Optional[str] = None


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, service: UserService = Depends(get_user_service)):
    user = await service.signup(request.name, request.email, request.password, request.profile_image)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
async def login(request: LoginRequest, service: UserService = Depends(get_user_service)):
    user = await service.login(request.email, request.password)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    user = await service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_profile(
    user_id: int,
    request: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update the current user's name or profile image."""
    user = await service.update_profile(
        user_id, current_user, name=request.name, profile_image=request.profile_image
    )
    return UserResponse.model_validate(user)
