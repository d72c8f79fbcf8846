"""Interface to the game server used by the auto-kick core."""

from typing import Protocol

from .models import RosterSnapshot


class ServerGateway(Protocol):
    """Narrow view of the game server connection.

    Implementations wrap the RCON client and player list of the host
    application. ``warn`` and ``kick`` may fail when the player already
    left; callers treat them as best effort.
    """

    async def get_roster(self) -> RosterSnapshot: ...

    async def warn(self, player_id: str, message: str) -> None: ...

    async def kick(self, player_id: str, message: str) -> None: ...
