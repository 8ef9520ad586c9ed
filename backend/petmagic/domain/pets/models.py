"""Pet catalog domain models."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PetType(str, Enum):
    """Kinds of pets that can be listed."""
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    OTHER = "other"


class Pet(BaseModel):
    """Pet listing domain model."""

    id: int
    name: str
    age: int
    breed: str
    type: PetType
    description: str
    location: str
    image: str = ""
    owner_id: Optional[int] = None
    created_at: datetime
