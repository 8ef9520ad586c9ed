"""API response schemas: camelCase on the wire, snake_case in Python.

Shared by the routes and by petmagic.client, which parses responses with them.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from petmagic.domain.notifications.models import NotificationType
from petmagic.domain.pets.models import PetType


class CamelModel(BaseModel):
    """Request/response model serialized with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Ack(CamelModel):
    """Acknowledgement returned by write endpoints."""

    message: str
    id: str | int | None = None
    updated: int | None = None


class UserResponse(CamelModel):
    """Public user fields (password is never returned)."""

    id: int
    name: str
    email: str
    profile_image: Optional[str] = None
    created_at: datetime


class PetResponse(CamelModel):
    id: int
    name: str
    age: int
    breed: str
    type: PetType
    description: str
    location: str
    image: str
    owner_id: Optional[int] = None
    created_at: datetime


class NotificationResponse(CamelModel):
    id: str
    type: NotificationType
    message: str
    pet_id: Optional[int] = None
    from_user_id: Optional[int] = None
    to_user_id: int
    is_read: bool
    created_at: datetime


class UnreadCountResponse(CamelModel):
    unread: int


class MessageResponse(CamelModel):
    id: str
    sender_id: int
    receiver_id: int
    content: str
    sequence: int
    created_at: datetime


class ThreadResponse(CamelModel):
    counterpart_id: int
    name: str
    profile_image: Optional[str] = None
    last_message_at: Optional[datetime] = None
