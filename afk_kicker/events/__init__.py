"""
Event system for the auto-kick core.

Game server notifications are turned into typed events and dispatched to
the handlers registered by the tracking components.
"""

from .base import (
    BaseEvent,
    PlayerDisconnectedEvent,
    PlayerSquadChangedEvent,
    RoundStartedEvent,
)
from .dispatcher import EventDispatcher, event_dispatcher
from .types import EventType

__all__ = [
    "BaseEvent",
    "RoundStartedEvent",
    "PlayerSquadChangedEvent",
    "PlayerDisconnectedEvent",
    "EventDispatcher",
    "event_dispatcher",
    "EventType",
]
