"""Base event model for all events."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from .types import EventType


class BaseEvent(BaseModel):
    """Base class for all events."""

    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RoundStartedEvent(BaseEvent):
    """Fired when a new round (game) starts on the server."""

    event_type: EventType = EventType.ROUND_STARTED
    layer: str = Field(default="", description="Name of the layer being played")


class PlayerSquadChangedEvent(BaseEvent):
    """Fired when a player joins, leaves or switches squad."""

    event_type: EventType = EventType.PLAYER_SQUAD_CHANGED
    player_id: str = Field(..., description="Platform account id of the player")
    squad_id: Optional[int] = Field(
        default=None, description="New squad id, None when the player is unassigned"
    )


class PlayerDisconnectedEvent(BaseEvent):
    """Fired when a player leaves the server."""

    event_type: EventType = EventType.PLAYER_DISCONNECTED
    player_id: str = Field(..., description="Platform account id of the player")
