"""Python client for the PetMagic API: HTTP client, conversation feed, session state."""
from petmagic.client.api_client import ApiError, PetMagicClient
from petmagic.client.conversation_feed import ConversationFeed, PollingConversationFeed
from petmagic.client.session_state import SessionState

__all__ = [
    "ApiError",
    "PetMagicClient",
    "ConversationFeed",
    "PollingConversationFeed",
    "SessionState",
]
