"""Domain event bus for publishing and subscribing to events."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from share_it.domain.shared.datetime_utils import utcnow
from share_it.domain.shared.messages import LogTemplates
from share_it.domain.shared.types import (
    NonEmptyStr,
    NonNegativeInt,
    SongIdInt,
    UserIdInt,
    UtcDatetimeField,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DomainEvent")
EventHandler = Callable[[T], Awaitable[None]]


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = ConfigDict(frozen=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)


# === Chatroom Events ===


class ChatroomCreated(DomainEvent):
    chatroom_id: str = ""
    name: str = ""
    moderator_id: UserIdInt = 0


class ChatroomJoined(DomainEvent):
    chatroom_id: str = ""
    user_id: UserIdInt = 0
    username: str = ""


class ChatroomLeft(DomainEvent):
    chatroom_id: str = ""
    user_id: UserIdInt = 0


class ModeratorChanged(DomainEvent):
    chatroom_id: str = ""
    moderator_id: UserIdInt = 0


# === Waitlist Events ===


class DjJoinedWaitlist(DomainEvent):
    chatroom_id: str = ""
    user_id: UserIdInt = 0
    position: NonNegativeInt = 0


class DjLeftWaitlist(DomainEvent):
    chatroom_id: str = ""
    user_id: UserIdInt = 0


class DjSkipped(DomainEvent):
    chatroom_id: str = ""
    user_id: UserIdInt = 0


class DjTurnStarted(DomainEvent):
    chatroom_id: str = ""
    user_id: UserIdInt = 0
    song_id: SongIdInt | None = None
    song_title: str = ""


class WaitlistExhausted(DomainEvent):
    chatroom_id: str = ""


# === Event Bus ===


class EventBus:
    """In-memory pub/sub event bus for domain events.

    Handlers are called concurrently. Exceptions in handlers are logged
    but do not prevent other handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler[Any]]] = defaultdict(list)

    def subscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        self._handlers[event_type].append(handler)
        logger.debug(LogTemplates.EVENT_SUBSCRIBED, event_type.__name__)

    def unsubscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(LogTemplates.EVENT_UNSUBSCRIBED, event_type.__name__)

    async def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(LogTemplates.EVENT_NO_HANDLERS, event_type.__name__)
            return

        logger.debug(LogTemplates.EVENT_PUBLISHING, event_type.__name__, len(handlers))

        async def safe_call(handler: EventHandler[Any]) -> None:
            try:
                await handler(event)
            except Exception as e:
                logger.exception(LogTemplates.EVENT_HANDLER_FAILED, event_type.__name__, e)

        async with asyncio.TaskGroup() as tg:
            for handler in handlers:
                tg.create_task(safe_call(handler))

    async def publish_all(self, events: list[DomainEvent]) -> None:
        """Publish events one after another, preserving their order."""
        for event in events:
            await self.publish(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        logger.debug(LogTemplates.EVENT_HANDLERS_CLEARED)


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get or create the global event bus singleton."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the global event bus (for testing)."""
    global _event_bus
    if _event_bus is not None:
        _event_bus.clear()
    _event_bus = None
