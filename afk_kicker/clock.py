"""Time source used by timers and periodic loops."""

import asyncio
import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic clock in seconds with a matching sleep."""

    def now(self) -> float: ...

    async def sleep(self, seconds: float) -> None: ...


class SystemClock:
    """Clock backed by ``time.monotonic`` and ``asyncio.sleep``."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(max(seconds, 0))


async def sleep_until(clock: Clock, deadline: float) -> None:
    """Sleep on ``clock`` until ``deadline`` has been reached."""
    delay = deadline - clock.now()
    await clock.sleep(delay if delay > 0 else 0)
