"""User domain models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """User domain model."""

    id: int
    name: str
    email: str
    password: str
    profile_image: Optional[str] = None
    created_at: datetime
