"""Warning and kick timers for a single tracked player."""

import asyncio
import math
from typing import Callable, Optional, Protocol

from ..clock import Clock, sleep_until
from ..errors import InvalidConfigurationError
from ..logger import logger


class PlayerActions(Protocol):
    """Administrative actions a timer issues against its player."""

    async def send_warning(self, player_id: str, message: str) -> bool: ...

    async def kick_player(self, player_id: str, message: str) -> bool: ...


def format_remaining(remaining: float) -> str:
    """Format seconds left before the kick as ``M:SS``."""
    remaining_ms = max(remaining, 0) * 1000
    minutes = math.floor(remaining_ms / 60000)
    seconds = math.floor(remaining_ms / 1000) % 60
    return f"{minutes}:{seconds:02d}"


class PlayerTimer:
    """Repeating warning plus a one-shot kick for one unassigned player.

    Both schedules are anchored at ``started_at``: warnings fire at every
    multiple of ``warn_interval`` strictly before the kick, the kick fires
    once at ``started_at + kick_timeout``. ``cancel`` sets a flag that every
    fire checks before acting, so nothing is sent after it returns.

    After its last warning the warn task stays parked until the kick
    fires, so a pending timer always has both tasks alive.
    """

    def __init__(
        self,
        player_id: str,
        started_at: float,
        *,
        warn_interval: float,
        kick_timeout: float,
        warning_message: str,
        kick_message: str,
        clock: Clock,
        actions: PlayerActions,
        on_kicked: Callable[["PlayerTimer"], None],
    ):
        if warn_interval <= 0:
            raise InvalidConfigurationError(
                f"Warning interval must be positive, got {warn_interval}"
            )
        if kick_timeout <= 0:
            raise InvalidConfigurationError(
                f"Kick timeout must be positive, got {kick_timeout}"
            )

        self.player_id = player_id
        self.started_at = started_at
        self.warn_interval = warn_interval
        self.kick_timeout = kick_timeout
        self.warning_message = warning_message
        self.kick_message = kick_message
        self.clock = clock
        self.actions = actions
        self.on_kicked = on_kicked

        self.warnings_sent = 0
        self.kicked = False
        self._cancelled = False
        self._warn_task: Optional[asyncio.Task] = None
        self._kick_task: Optional[asyncio.Task] = None

    @property
    def kick_at(self) -> float:
        return self.started_at + self.kick_timeout

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        """True while the kick is still pending."""
        return (
            not self._cancelled
            and self._kick_task is not None
            and not self._kick_task.done()
            and self._warn_task is not None
            and not self._warn_task.done()
        )

    def elapsed(self) -> float:
        return self.clock.now() - self.started_at

    def remaining(self) -> float:
        return max(self.kick_at - self.clock.now(), 0)

    def start(self) -> None:
        """Schedule the warning and kick tasks on the running loop."""
        if self._kick_task is not None:
            raise RuntimeError(f"Timer for {self.player_id} already started")
        if self._cancelled:
            raise RuntimeError(f"Timer for {self.player_id} was cancelled")

        self._warn_task = asyncio.create_task(
            self._warn_loop(), name=f"afk-warn-{self.player_id}"
        )
        self._kick_task = asyncio.create_task(
            self._kick_once(), name=f"afk-kick-{self.player_id}"
        )

    def cancel(self) -> None:
        """Stop both schedules. Safe to call repeatedly and from a fire."""
        self._cancelled = True

        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None

        for task in (self._warn_task, self._kick_task):
            # The kick fire tears its own entry down; it must finish normally
            if task is not None and task is not current and not task.done():
                task.cancel()

    async def _warn_loop(self) -> None:
        fire = 1
        while True:
            due = self.started_at + fire * self.warn_interval
            if due >= self.kick_at:
                # No warning at or after the kick, the kick fire cancels us
                await sleep_until(self.clock, self.kick_at)
                return

            await sleep_until(self.clock, due)
            if self._cancelled:
                return

            left = format_remaining(self.kick_at - self.clock.now())
            logger.info(f"Warning unassigned player {self.player_id} ({left} left)")
            if await self.actions.send_warning(
                self.player_id, f"{self.warning_message} - {left}"
            ):
                self.warnings_sent += 1
            fire += 1

    async def _kick_once(self) -> None:
        await sleep_until(self.clock, self.kick_at)
        if self._cancelled:
            return

        self._cancelled = True
        if self._warn_task is not None and not self._warn_task.done():
            self._warn_task.cancel()

        logger.info(
            f"Kicking player {self.player_id}, unassigned for {self.kick_timeout:.0f}s"
        )
        try:
            self.kicked = bool(
                await self.actions.kick_player(self.player_id, self.kick_message)
            )
        finally:
            self.on_kicked(self)
