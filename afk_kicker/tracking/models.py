"""Status models describing the tracking state."""

from typing import Optional

from pydantic import BaseModel, Field


class TrackedPlayerStatus(BaseModel):
    """Point-in-time view of one tracked player."""

    player_id: str
    tracked_seconds: float = Field(..., description="Time since tracking started")
    remaining_seconds: float = Field(..., description="Time left before the kick")
    warnings_sent: int = 0


class AutoKickStatus(BaseModel):
    """Point-in-time view of the whole auto-kick system."""

    enabled: bool
    running: bool
    between_rounds: bool
    grace_remaining_seconds: Optional[float] = None
    tracked: list[TrackedPlayerStatus] = Field(default_factory=list)
