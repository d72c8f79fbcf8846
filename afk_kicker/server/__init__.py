"""Game server collaborator interfaces."""

from .gateway import ServerGateway
from .models import RosterPlayer, RosterSnapshot

__all__ = [
    "ServerGateway",
    "RosterPlayer",
    "RosterSnapshot",
]
