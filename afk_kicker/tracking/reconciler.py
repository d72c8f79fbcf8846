"""Reconciles the server roster against the tracking registry."""

import asyncio
from dataclasses import dataclass, field

from ..config import AutoKickSettings
from ..errors import RosterUnavailableError
from ..logger import logger
from ..server.gateway import ServerGateway
from ..server.models import RosterSnapshot
from .conditions import RoundPhaseTracker, should_track
from .registry import TrackingRegistry


@dataclass
class ReconcileResult:
    started: list[str] = field(default_factory=list)
    stopped: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.started or self.stopped)


class ListReconciler:
    """Starts and stops tracking so the registry matches the roster.

    A pass tracks every unassigned player, releases players that joined a
    squad, and releases tracked players missing from the roster. When the
    run condition does not hold every tracked player is released instead.
    Passes are serialized and idempotent.
    """

    def __init__(
        self,
        registry: TrackingRegistry,
        round_phase: RoundPhaseTracker,
        gateway: ServerGateway,
        settings: AutoKickSettings,
    ):
        self.registry = registry
        self.round_phase = round_phase
        self.gateway = gateway
        self.settings = settings
        self._lock = asyncio.Lock()

    async def reconcile(self) -> ReconcileResult:
        """Fetch the roster and run one reconciliation pass."""
        async with self._lock:
            snapshot = await self._fetch_roster()
            return self.apply(snapshot)

    async def cleanup(self) -> list[str]:
        """Fetch the roster and release tracked players that left the server."""
        async with self._lock:
            snapshot = await self._fetch_roster()
            return self.remove_orphans(snapshot)

    async def _fetch_roster(self) -> RosterSnapshot:
        # Runs under the lock, so a stalled request must not hold it forever
        timeout = self.settings.roster_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                return await self.gateway.get_roster()
        except TimeoutError as e:
            raise RosterUnavailableError(
                f"Roster request timed out after {timeout:g}s"
            ) from e

    def apply(self, snapshot: RosterSnapshot) -> ReconcileResult:
        result = ReconcileResult()

        phase = self.round_phase.poll()
        if not should_track(phase, snapshot, self.settings):
            result.stopped.extend(self.registry.stop_all())
            return result

        for player in snapshot.players:
            tracked = self.registry.is_tracked(player.player_id)
            if player.is_unassigned and not tracked:
                if self.registry.start_tracking(player.player_id):
                    result.started.append(player.player_id)
            elif not player.is_unassigned and tracked:
                if self.registry.stop_tracking(player.player_id):
                    result.stopped.append(player.player_id)

        result.stopped.extend(self.remove_orphans(snapshot))

        if result.changed:
            logger.debug(
                f"Reconciled roster of {len(snapshot.players)}: "
                f"started {result.started}, stopped {result.stopped}, "
                f"{len(self.registry)} tracked"
            )
        return result

    def remove_orphans(self, snapshot: RosterSnapshot) -> list[str]:
        orphans = self.registry.all_tracked_ids() - snapshot.player_ids
        stopped = [
            player_id
            for player_id in sorted(orphans)
            if self.registry.stop_tracking(player_id)
        ]
        if stopped:
            logger.info(f"Released {len(stopped)} tracked players no longer on the server")
        return stopped
