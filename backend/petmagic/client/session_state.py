"""Session-scoped application state for a PetMagic client.

One SessionState per signed-in session; nothing here is module-global.
"""
import logging
from typing import Any, Optional

from petmagic.api.schemas import NotificationResponse, PetResponse, UserResponse
from petmagic.client.api_client import PetMagicClient
from petmagic.client.conversation_feed import PollingConversationFeed
from petmagic.domain.common.errors import AuthenticationError, ConflictError, SelfInterestError
from petmagic.domain.notifications.services import DUPLICATE_INTEREST_MESSAGE

logger = logging.getLogger(__name__)


class SessionState:
    """Current user, pet catalog cache, wishlist and notification cache."""

    def __init__(self, client: PetMagicClient, poll_interval_seconds: Optional[float] = None):
        self.client = client
        # None reads chat_poll_interval_seconds from config each time a conversation opens.
        self.poll_interval_seconds = poll_interval_seconds
        self.current_user: Optional[UserResponse] = None
        self.pets: list[PetResponse] = []
        self.wishlist: set[int] = set()
        self.notifications: list[NotificationResponse] = []
        # Pets this session already asked about; the server stays authoritative.
        self.interest_sent: set[int] = set()

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    @property
    def user_pets(self) -> list[PetResponse]:
        if self.current_user is None:
            return []
        return [p for p in self.pets if p.owner_id == self.current_user.id]

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    def _require_user(self) -> UserResponse:
        if self.current_user is None:
            raise AuthenticationError("Please log in first")
        return self.current_user

    # Session

    async def login(self, email: str, password: str) -> UserResponse:
        user = await self.client.login(email, password)
        self.current_user = user
        self.wishlist = set()
        self.interest_sent = set()
        await self.refresh_pets()
        await self.refresh_notifications()
        logger.info("Session started for user %s", user.id)
        return user

    async def signup(
        self, name: str, email: str, password: str, profile_image: Optional[str] = None
    ) -> UserResponse:
        user = await self.client.signup(name, email, password, profile_image)
        self.current_user = user
        self.wishlist = set()
        self.interest_sent = set()
        await self.refresh_pets()
        self.notifications = []
        return user

    def logout(self) -> None:
        """Drop everything tied to the session."""
        if self.current_user is not None:
            logger.info("Session ended for user %s", self.current_user.id)
        self.current_user = None
        self.client.user_id = None
        self.pets = []
        self.wishlist = set()
        self.notifications = []
        self.interest_sent = set()

    async def update_profile(
        self, name: Optional[str] = None, profile_image: Optional[str] = None
    ) -> UserResponse:
        user = self._require_user()
        self.current_user = await self.client.update_profile(user.id, name=name, profile_image=profile_image)
        return self.current_user

    # Pets

    async def refresh_pets(self, type: Optional[str] = None, q: Optional[str] = None) -> list[PetResponse]:
        self.pets = await self.client.list_pets(type=type, q=q)
        return self.pets

    def get_pet_by_id(self, pet_id: int) -> Optional[PetResponse]:
        return next((p for p in self.pets if p.id == pet_id), None)

    async def add_pet(self, **fields: Any) -> PetResponse:
        user = self._require_user()
        pet = await self.client.create_pet(owner_id=user.id, **fields)
        self.pets = [pet] + self.pets
        return pet

    async def update_pet(self, pet_id: int, **changes: Any) -> PetResponse:
        self._require_user()
        pet = await self.client.update_pet(pet_id, **changes)
        self.pets = [pet if p.id == pet_id else p for p in self.pets]
        return pet

    async def delete_pet(self, pet_id: int) -> None:
        self._require_user()
        await self.client.delete_pet(pet_id)
        self.pets = [p for p in self.pets if p.id != pet_id]
        self.wishlist.discard(pet_id)

    # Wishlist

    def toggle_wishlist(self, pet_id: int) -> bool:
        """Add or remove pet_id. Returns True when the pet is now on the wishlist."""
        self._require_user()
        if pet_id in self.wishlist:
            self.wishlist.discard(pet_id)
            return False
        self.wishlist.add(pet_id)
        return True

    def is_in_wishlist(self, pet_id: int) -> bool:
        return pet_id in self.wishlist

    def wishlist_pets(self) -> list[PetResponse]:
        return [p for p in self.pets if p.id in self.wishlist]

    # Notifications

    async def refresh_notifications(self) -> list[NotificationResponse]:
        user = self._require_user()
        self.notifications = await self.client.list_notifications(user.id)
        return self.notifications

    async def express_interest(self, pet_id: int) -> NotificationResponse:
        """Ask the pet's owner to adopt. Cheap local checks run before the server call."""
        user = self._require_user()
        pet = self.get_pet_by_id(pet_id)
        if pet is not None and pet.owner_id == user.id:
            raise SelfInterestError()
        if pet_id in self.interest_sent:
            raise ConflictError(DUPLICATE_INTEREST_MESSAGE)
        try:
            notification = await self.client.express_interest(pet_id)
        except ConflictError as e:
            if e.message == DUPLICATE_INTEREST_MESSAGE:
                self.interest_sent.add(pet_id)
            raise
        self.interest_sent.add(pet_id)
        return notification

    async def mark_read(self, notification_id: str) -> None:
        self._require_user()
        await self.client.mark_read(notification_id)
        self.notifications = [
            n.model_copy(update={"is_read": True}) if n.id == notification_id else n
            for n in self.notifications
        ]

    async def mark_all_read(self) -> int:
        user = self._require_user()
        ack = await self.client.mark_all_read(user.id)
        self.notifications = [n.model_copy(update={"is_read": True}) for n in self.notifications]
        return ack.updated or 0

    async def respond(self, notification_id: str, decision: str) -> NotificationResponse:
        """Accept or reject an interest notification, then mark it read in the cache."""
        self._require_user()
        response = await self.client.respond(notification_id, decision)
        self.notifications = [
            n.model_copy(update={"is_read": True}) if n.id == notification_id else n
            for n in self.notifications
        ]
        return response

    # Chat

    def open_conversation(self, counterpart_id: int) -> PollingConversationFeed:
        """Feed for the chat with counterpart_id. The caller starts and stops it."""
        user = self._require_user()
        return PollingConversationFeed(
            self.client, user.id, counterpart_id, poll_interval_seconds=self.poll_interval_seconds
        )
