"""Common domain types."""
from datetime import datetime, timezone
from uuid import uuid4


def generate_id() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def conversation_key(user_a: int, user_b: int) -> str:
    """Order-independent key for the 1:1 conversation between two users."""
    low, high = sorted((int(user_a), int(user_b)))
    return f"{low}:{high}"
