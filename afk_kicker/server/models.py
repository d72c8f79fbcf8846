"""Roster data supplied by the game server."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class RosterPlayer(BaseModel):
    """A connected player as reported by the server."""

    player_id: str = Field(..., description="Platform account id (e.g. Steam id)")
    name: str = Field(default="", description="Display name")
    squad_id: Optional[int] = Field(
        default=None, description="Squad id, None when the player is unassigned"
    )

    @property
    def is_unassigned(self) -> bool:
        return self.squad_id is None


class RosterSnapshot(BaseModel):
    """Read-only view of the server population for one reconciliation pass."""

    players: list[RosterPlayer] = Field(default_factory=list)
    player_count: int = Field(
        default=-1, description="Connected player count, defaults to len(players)"
    )
    public_queue: int = Field(default=0, ge=0)
    reserve_queue: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _default_player_count(self) -> "RosterSnapshot":
        if self.player_count < 0:
            self.player_count = len(self.players)
        return self

    @property
    def queue_size(self) -> int:
        return self.public_queue + self.reserve_queue

    @property
    def player_ids(self) -> frozenset[str]:
        return frozenset(player.player_id for player in self.players)
