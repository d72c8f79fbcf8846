"""
Tracking of unassigned players.

Keeps one warn/kick timer pair per unassigned player and reconciles the
tracked set against the server roster.
"""

from .actions import GatewayActions
from .conditions import RoundPhase, RoundPhaseTracker, should_track
from .models import AutoKickStatus, TrackedPlayerStatus
from .reconciler import ListReconciler, ReconcileResult
from .registry import TrackedPlayer, TrackingRegistry
from .timer import PlayerActions, PlayerTimer, format_remaining

__all__ = [
    "GatewayActions",
    "RoundPhase",
    "RoundPhaseTracker",
    "should_track",
    "AutoKickStatus",
    "TrackedPlayerStatus",
    "ListReconciler",
    "ReconcileResult",
    "TrackedPlayer",
    "TrackingRegistry",
    "PlayerActions",
    "PlayerTimer",
    "format_remaining",
]
