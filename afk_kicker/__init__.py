"""
Automatic warning and kicking of players that stay out of a squad.

Usage:
    from afk_kicker import AutoKickManager, event_dispatcher

    manager = AutoKickManager(gateway, event_dispatcher)
    await manager.start()
"""

from .errors import AutoKickError, InvalidConfigurationError, RosterUnavailableError
from .events import event_dispatcher
from .manager import AutoKickManager

__all__ = [
    "AutoKickManager",
    "AutoKickError",
    "InvalidConfigurationError",
    "RosterUnavailableError",
    "event_dispatcher",
]
