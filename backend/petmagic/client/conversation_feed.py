"""Conversation feeds: deliver snapshots of a 1:1 conversation to subscribers."""
import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from petmagic.api.schemas import MessageResponse
from petmagic.domain.common.errors import DomainError, ValidationError
from petmagic.settings import get_settings

logger = logging.getLogger(__name__)

Snapshot = list[MessageResponse]
Subscriber = Callable[[Snapshot], Union[None, Awaitable[None]]]


class ConversationFeed(ABC):
    """Source of conversation snapshots.

    Subscribers receive the full ordered message list each time it is refreshed.
    A push-based feed can replace the polling one without changing callers.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback; returns a function that removes it again."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def _publish(self, snapshot: Snapshot) -> None:
        for callback in list(self._subscribers):
            try:
                result = callback(snapshot)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Conversation subscriber %r failed", callback)

    @abstractmethod
    async def start(self) -> None:
        ...

    @abstractmethod
    async def stop(self) -> None:
        ...

    async def __aenter__(self) -> "ConversationFeed":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()


class PollingConversationFeed(ConversationFeed):
    """Fetches the conversation between user_id and counterpart_id on a fixed interval.

    The interval defaults to the configured chat_poll_interval_seconds.
    The first fetch happens on start(). A failed fetch is logged and retried on
    the next tick. After stop() no callback fires, including for a fetch that
    was already in flight.
    """

    def __init__(
        self,
        client: Any,
        user_id: int,
        counterpart_id: int,
        poll_interval_seconds: Optional[float] = None,
    ):
        super().__init__()
        if poll_interval_seconds is None:
            poll_interval_seconds = get_settings().chat_poll_interval_seconds
        if poll_interval_seconds <= 0:
            raise ValidationError("poll_interval_seconds must be positive")
        self.client = client
        self.user_id = user_id
        self.counterpart_id = counterpart_id
        self.poll_interval_seconds = poll_interval_seconds
        self.messages: Snapshot = []
        self._task: Optional[asyncio.Task] = None
        # Bumped by stop(); a fetch started under an older generation is discarded.
        self._generation = 0
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._stopped = False
        self._task = asyncio.create_task(self._poll_forever(self._generation))
        logger.debug(
            "Polling conversation %s<->%s every %.1fs",
            self.user_id, self.counterpart_id, self.poll_interval_seconds,
        )

    async def stop(self) -> None:
        self._stopped = True
        self._generation += 1
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def refresh(self) -> Snapshot:
        """Fetch once and publish the result. Raises on fetch failure."""
        generation = self._generation
        snapshot = await self.client.fetch_conversation(self.user_id, self.counterpart_id)
        if self._stopped or generation != self._generation:
            logger.debug("Discarding conversation snapshot fetched before stop()")
            return self.messages
        self.messages = snapshot
        await self._publish(snapshot)
        return snapshot

    async def send(self, content: str) -> Snapshot:
        """Send a message to the counterpart, then refresh without waiting for the next tick."""
        await self.client.send_message(self.user_id, self.counterpart_id, content)
        return await self.refresh()

    async def _poll_forever(self, generation: int) -> None:
        while generation == self._generation:
            try:
                await self.refresh()
            except (httpx.HTTPError, DomainError) as e:
                logger.warning(
                    "Conversation poll %s<->%s failed, retrying in %.1fs: %s",
                    self.user_id, self.counterpart_id, self.poll_interval_seconds, e,
                )
            await asyncio.sleep(self.poll_interval_seconds)
