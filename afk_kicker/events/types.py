"""Event type definitions."""

from enum import Enum


class EventType(str, Enum):
    """All event types the auto-kick core listens to."""

    # Game events
    ROUND_STARTED = "round.started"

    # Player events
    PLAYER_SQUAD_CHANGED = "player.squad_changed"
    PLAYER_DISCONNECTED = "player.disconnected"
