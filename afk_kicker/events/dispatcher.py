"""Event dispatcher - dispatches typed events to registered handlers.

Each event type has its own registration and dispatch method so handlers
stay properly typed. Nothing is persisted.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, TypeVar, Union

from ..logger import logger
from .base import (
    BaseEvent,
    PlayerDisconnectedEvent,
    PlayerSquadChangedEvent,
    RoundStartedEvent,
)
from .types import EventType

EventT = TypeVar("EventT", bound=BaseEvent)

# Handlers may be sync or async
EventHandler = Union[Callable[[EventT], None], Callable[[EventT], Awaitable[None]]]


class EventDispatcher:
    """Dispatches events to registered handlers.

    Handlers of one event run concurrently; a failing handler is logged and
    does not affect the others.
    """

    def __init__(self):
        self._handlers: dict[EventType, list[Callable]] = {
            event_type: [] for event_type in EventType
        }

    # Registration methods

    def on_round_started(self, handler: EventHandler[RoundStartedEvent]) -> None:
        """Register handler for round started events."""
        self._handlers[EventType.ROUND_STARTED].append(handler)

    def on_player_squad_changed(
        self, handler: EventHandler[PlayerSquadChangedEvent]
    ) -> None:
        """Register handler for player squad change events."""
        self._handlers[EventType.PLAYER_SQUAD_CHANGED].append(handler)

    def on_player_disconnected(
        self, handler: EventHandler[PlayerDisconnectedEvent]
    ) -> None:
        """Register handler for player disconnect events."""
        self._handlers[EventType.PLAYER_DISCONNECTED].append(handler)

    # Dispatch methods

    async def dispatch_round_started(self, event: RoundStartedEvent) -> None:
        """Dispatch round started event."""
        await self._dispatch_event(event)

    async def dispatch_player_squad_changed(
        self, event: PlayerSquadChangedEvent
    ) -> None:
        """Dispatch player squad change event."""
        await self._dispatch_event(event)

    async def dispatch_player_disconnected(
        self, event: PlayerDisconnectedEvent
    ) -> None:
        """Dispatch player disconnect event."""
        await self._dispatch_event(event)

    async def _dispatch_event(self, event: BaseEvent) -> None:
        handlers = list(self._handlers.get(event.event_type, []))

        if not handlers:
            logger.debug(f"No handlers registered for event: {event.event_type}")
            return

        tasks = []
        for handler in handlers:
            if inspect.iscoroutinefunction(handler):
                tasks.append(asyncio.create_task(handler(event)))
            else:
                tasks.append(asyncio.create_task(asyncio.to_thread(handler, event)))

        results = await asyncio.gather(*tasks, return_exceptions=True)
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    f"Handler {handler.__name__} failed for event {event.event_type}: {result}",
                    exc_info=result,
                )


# Global event dispatcher instance
event_dispatcher = EventDispatcher()
