"""Best-effort warn/kick actions backed by the server gateway."""

from ..logger import log_exception
from ..server.gateway import ServerGateway


class GatewayActions:
    """Sends warnings and kicks through a ``ServerGateway``.

    Each action returns whether it reached the server. Failures (typically
    the player already left) are logged and swallowed; the tracked entry is
    torn down by the caller either way.
    """

    def __init__(self, gateway: ServerGateway):
        self.gateway = gateway

    @log_exception("Failed to warn player {player_id}", default_return=False)
    async def send_warning(self, player_id: str, message: str) -> bool:
        await self.gateway.warn(player_id, message)
        return True

    @log_exception("Failed to kick player {player_id}", default_return=False)
    async def kick_player(self, player_id: str, message: str) -> bool:
        await self.gateway.kick(player_id, message)
        return True
