"""Domain error types."""
from typing import Optional


class DomainError(Exception):
    """Base domain error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Resource not found."""

    def __init__(self, resource: str, identifier, message: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} with id {identifier} not found")


class ValidationError(DomainError):
    """Missing or malformed required field."""


class AuthenticationError(DomainError):
    """Acting user is missing or could not be identified."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class AuthorizationError(DomainError):
    """Authorization error."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class ConflictError(DomainError):
    """Resource conflict error."""


class SelfInterestError(ConflictError):
    """Owner tried to express interest in their own pet."""

    def __init__(self, message: str = "You cannot express interest in your own pet"):
        super().__init__(message)


class StoreError(DomainError):
    """Persistence collaborator unavailable or rejected the write."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message)
