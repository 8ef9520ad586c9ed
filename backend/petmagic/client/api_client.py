"""Async HTTP client for the PetMagic API."""
import logging
from typing import Any, Optional

import httpx

from petmagic.api.schemas import (
    Ack,
    MessageResponse,
    NotificationResponse,
    PetResponse,
    ThreadResponse,
    UnreadCountResponse,
    UserResponse,
)
from petmagic.domain.common.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    SelfInterestError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ApiError(DomainError):
    """Error response whose status has no matching domain error."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


def _error_from_response(response: httpx.Response) -> DomainError:
    """Translate the {"error": ...} envelope back into a domain error."""
    try:
        message = response.json().get("error") or response.reason_phrase
    except ValueError:
        message = response.text or response.reason_phrase
    status_code = response.status_code
    if status_code == 400:
        return ValidationError(message)
    if status_code == 401:
        return AuthenticationError(message)
    if status_code == 403:
        return AuthorizationError(message)
    if status_code == 404:
        return NotFoundError("Resource", response.request.url.path, message=message)
    if status_code == 409:
        if message == SelfInterestError().message:
            return SelfInterestError(message)
        return ConflictError(message)
    if status_code == 500:
        return StoreError(message)
    return ApiError(status_code, message)


class PetMagicClient:
    """Client for the PetMagic REST API.

    The acting user is sent as the X-User-Id header once user_id is set
    (login/signup set it). Pass transport=httpx.ASGITransport(app=app) to
    talk to an in-process app.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_prefix: str = "/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
        user_id: Optional[int] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix.rstrip("/")
        self.user_id = user_id
        self._http = httpx.AsyncClient(base_url=self.base_url, transport=transport, timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "PetMagicClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        headers = {"X-User-Id": str(self.user_id)} if self.user_id is not None else {}
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        url = f"{self.api_prefix}{path}"
        response = await self._http.request(method, url, json=json, params=params, headers=headers)
        if response.is_error:
            error = _error_from_response(response)
            logger.debug("%s %s -> %s: %s", method, url, response.status_code, error.message)
            raise error
        return response.json()

    # Users

    async def signup(
        self, name: str, email: str, password: str, profile_image: Optional[str] = None
    ) -> UserResponse:
        data = await self._request(
            "POST",
            "/users/signup",
            json={"name": name, "email": email, "password": password, "profileImage": profile_image},
        )
        user = UserResponse.model_validate(data)
        self.user_id = user.id
        return user

    async def login(self, email: str, password: str) -> UserResponse:
        data = await self._request("POST", "/users/login", json={"email": email, "password": password})
        user = UserResponse.model_validate(data)
        self.user_id = user.id
        return user

    async def get_user(self, user_id: int) -> UserResponse:
        return UserResponse.model_validate(await self._request("GET", f"/users/{user_id}"))

    async def update_profile(
        self, user_id: int, name: Optional[str] = None, profile_image: Optional[str] = None
    ) -> UserResponse:
        data = await self._request(
            "PUT", f"/users/{user_id}", json={"name": name, "profileImage": profile_image}
        )
        return UserResponse.model_validate(data)

    # Pets

    async def list_pets(
        self,
        type: Optional[str] = None,
        q: Optional[str] = None,
        owner_id: Optional[int] = None,
    ) -> list[PetResponse]:
        data = await self._request("GET", "/pets", params={"type": type, "q": q, "ownerId": owner_id})
        return [PetResponse.model_validate(p) for p in data]

    async def get_pet(self, pet_id: int) -> PetResponse:
        return PetResponse.model_validate(await self._request("GET", f"/pets/{pet_id}"))

    async def create_pet(self, **fields: Any) -> PetResponse:
        """Create a listing. Keyword names are snake_case; owner defaults to the current user."""
        fields.setdefault("owner_id", self.user_id)
        body = {_camel(k): v for k, v in fields.items()}
        return PetResponse.model_validate(await self._request("POST", "/pets", json=body))

    async def update_pet(self, pet_id: int, **changes: Any) -> PetResponse:
        body = {_camel(k): v for k, v in changes.items()}
        return PetResponse.model_validate(await self._request("PUT", f"/pets/{pet_id}", json=body))

    async def delete_pet(self, pet_id: int) -> Ack:
        return Ack.model_validate(await self._request("DELETE", f"/pets/{pet_id}"))

    async def express_interest(self, pet_id: int) -> NotificationResponse:
        data = await self._request("POST", f"/pets/{pet_id}/interest")
        return NotificationResponse.model_validate(data)

    # Notifications

    async def create_notification(
        self,
        message: str,
        to_user_id: int,
        type: Optional[str] = None,
        pet_id: Optional[int] = None,
        from_user_id: Optional[int] = None,
    ) -> Ack:
        body = {
            "type": type,
            "message": message,
            "toUserId": to_user_id,
            "petId": pet_id,
            "fromUserId": from_user_id,
        }
        return Ack.model_validate(await self._request("POST", "/notifications", json=body))

    async def list_notifications(self, user_id: int, unread_only: bool = False) -> list[NotificationResponse]:
        params = {"unreadOnly": "true"} if unread_only else None
        data = await self._request("GET", f"/notifications/{user_id}", params=params)
        return [NotificationResponse.model_validate(n) for n in data]

    async def unread_count(self, user_id: int) -> int:
        data = await self._request("GET", f"/notifications/{user_id}/unread-count")
        return UnreadCountResponse.model_validate(data).unread

    async def mark_read(self, notification_id: str) -> Ack:
        return Ack.model_validate(await self._request("PUT", f"/notifications/{notification_id}"))

    async def mark_all_read(self, user_id: int) -> Ack:
        return Ack.model_validate(await self._request("PUT", f"/notifications/mark-all/{user_id}"))

    async def respond(self, notification_id: str, decision: str) -> NotificationResponse:
        data = await self._request(
            "POST", f"/notifications/{notification_id}/respond", json={"decision": decision}
        )
        return NotificationResponse.model_validate(data)

    # Messages

    async def send_message(self, sender_id: int, receiver_id: int, content: str) -> Ack:
        body = {"senderId": sender_id, "receiverId": receiver_id, "content": content}
        return Ack.model_validate(await self._request("POST", "/messages", json=body))

    async def fetch_conversation(
        self, user_a: int, user_b: int, after_sequence: Optional[int] = None
    ) -> list[MessageResponse]:
        data = await self._request(
            "GET", f"/messages/{user_a}/{user_b}", params={"afterSequence": after_sequence}
        )
        return [MessageResponse.model_validate(m) for m in data]

    async def list_threads(self, user_id: int) -> list[ThreadResponse]:
        data = await self._request("GET", f"/messages/threads/{user_id}")
        return [ThreadResponse.model_validate(t) for t in data]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
