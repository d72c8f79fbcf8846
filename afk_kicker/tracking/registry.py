"""Registry of tracked unassigned players and their timers."""

from dataclasses import dataclass

from ..clock import Clock
from ..config import AutoKickSettings
from ..errors import InvalidConfigurationError
from ..logger import logger
from .models import TrackedPlayerStatus
from .timer import PlayerActions, PlayerTimer


@dataclass
class TrackedPlayer:
    player_id: str
    track_started_at: float
    timer: PlayerTimer


class TrackingRegistry:
    """Authoritative set of tracked players.

    Every entry owns exactly one running ``PlayerTimer``; entries are only
    created and torn down here. All methods are synchronous and must be
    called from the event loop thread, which makes each of them atomic.
    """

    def __init__(
        self, settings: AutoKickSettings, clock: Clock, actions: PlayerActions
    ):
        if settings.warn_interval <= 0 or settings.kick_timeout <= 0:
            raise InvalidConfigurationError(
                "Warning interval and kick timeout must be positive "
                f"(got {settings.warn_interval}s and {settings.kick_timeout}s)"
            )

        self.settings = settings
        self.clock = clock
        self.actions = actions
        self._tracked: dict[str, TrackedPlayer] = {}

    def __len__(self) -> int:
        return len(self._tracked)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._tracked

    def start_tracking(self, player_id: str) -> bool:
        """Start the warn/kick timers for a player.

        Returns:
            False if the player was already tracked
        """
        if player_id in self._tracked:
            logger.warning(f"Player {player_id} is already tracked")
            return False

        started_at = self.clock.now()
        timer = PlayerTimer(
            player_id,
            started_at,
            warn_interval=self.settings.warn_interval,
            kick_timeout=self.settings.kick_timeout,
            warning_message=self.settings.warning_message,
            kick_message=self.settings.kick_message,
            clock=self.clock,
            actions=self.actions,
            on_kicked=self._handle_kicked,
        )
        timer.start()
        self._tracked[player_id] = TrackedPlayer(player_id, started_at, timer)

        logger.info(f"Tracking unassigned player {player_id}")
        return True

    def stop_tracking(self, player_id: str) -> bool:
        """Cancel a player's timers and forget them.

        Returns:
            False if the player was not tracked
        """
        tracked = self._tracked.pop(player_id, None)
        if tracked is None:
            logger.warning(f"Player {player_id} is not tracked")
            return False

        tracked.timer.cancel()
        logger.info(f"Stopped tracking player {player_id}")
        return True

    def stop_all(self) -> list[str]:
        """Stop tracking every player, returning the ids that were removed."""
        stopped = [
            player_id
            for player_id in sorted(self._tracked)
            if self.stop_tracking(player_id)
        ]
        if stopped:
            logger.info(f"Cleared {len(stopped)} tracked players")
        return stopped

    def is_tracked(self, player_id: str) -> bool:
        return player_id in self._tracked

    def all_tracked_ids(self) -> frozenset[str]:
        return frozenset(self._tracked)

    def get(self, player_id: str) -> TrackedPlayer | None:
        return self._tracked.get(player_id)

    def statuses(self) -> list[TrackedPlayerStatus]:
        return [
            TrackedPlayerStatus(
                player_id=tracked.player_id,
                tracked_seconds=tracked.timer.elapsed(),
                remaining_seconds=tracked.timer.remaining(),
                warnings_sent=tracked.timer.warnings_sent,
            )
            for tracked in sorted(
                self._tracked.values(), key=lambda t: t.track_started_at
            )
        ]

    def _handle_kicked(self, timer: PlayerTimer) -> None:
        tracked = self._tracked.get(timer.player_id)
        # The entry may already be gone, or replaced by a newer one
        if tracked is None or tracked.timer is not timer:
            return
        self.stop_tracking(timer.player_id)
