"""Round phase state and the run condition for tracking."""

from typing import Optional

from pydantic import BaseModel

from ..clock import Clock
from ..config import AutoKickSettings
from ..logger import logger
from ..server.models import RosterSnapshot


class RoundPhase(BaseModel):
    """Whether the server is inside the grace period after a round start."""

    between_rounds: bool = False
    grace_deadline: Optional[float] = None


class RoundPhaseTracker:
    """Owns the between-rounds flag.

    The flag is derived from the deadline on every read without changing
    any state, so it turns false by itself once the grace period has
    elapsed and a later round start simply moves the deadline.
    """

    def __init__(self, clock: Clock, grace_period: float):
        self.clock = clock
        self.grace_period = grace_period
        self._grace_deadline: Optional[float] = None

    def begin_round(self) -> RoundPhase:
        """Enter the grace period of a freshly started round."""
        self._grace_deadline = self.clock.now() + self.grace_period
        logger.info(
            f"Round started, unassigned tracking paused for {self.grace_period:.0f}s"
        )
        return self.current()

    def current(self) -> RoundPhase:
        deadline = self._grace_deadline
        if deadline is None or self.clock.now() >= deadline:
            return RoundPhase()
        return RoundPhase(between_rounds=True, grace_deadline=deadline)

    def poll(self) -> RoundPhase:
        """Like ``current``, but retires an expired grace period.

        Called once per reconciliation pass so the end of the grace period
        is logged by the pass that resumes tracking.
        """
        phase = self.current()
        if not phase.between_rounds and self._grace_deadline is not None:
            self._grace_deadline = None
            logger.info("Round start grace period over, unassigned tracking resumed")
        return phase


def should_track(
    phase: RoundPhase, snapshot: RosterSnapshot, settings: AutoKickSettings
) -> bool:
    """Decide whether unassigned players should be tracked right now.

    Outside the round start grace period tracking is always on. Inside it,
    a population or queue above its threshold keeps tracking on. A
    threshold of zero or less disables that override.
    """
    if not phase.between_rounds:
        return True

    player_threshold = settings.player_threshold
    if player_threshold > 0 and snapshot.player_count > player_threshold:
        return True

    queue_threshold = settings.queue_threshold
    if queue_threshold > 0 and snapshot.queue_size > queue_threshold:
        return True

    return False
