"""1:1 chat domain models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Message(BaseModel):
    """Chat message domain model. Immutable once created."""

    id: str
    sender_id: int
    receiver_id: int
    content: str
    sequence: int
    created_at: datetime


class Thread(BaseModel):
    """Derived, unpersisted grouping of messages by counterpart."""

    counterpart_id: int
    name: str
    profile_image: Optional[str] = None
    last_message_at: Optional[datetime] = None
