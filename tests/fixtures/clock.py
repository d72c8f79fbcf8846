"""
Manually driven clock for deterministic timer tests.

Sleepers park on futures that are released in deadline order when the test
advances time, so minutes of virtual time run instantly.
"""

import asyncio
import heapq
import itertools


async def settle(rounds: int = 20) -> None:
    """Let every ready task on the loop run until it blocks again."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class ManualClock:
    def __init__(self, start: float = 0.0):
        self._now = start
        self._sleepers: list[tuple[float, int, asyncio.Future]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    async def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            await asyncio.sleep(0)
            return

        future = asyncio.get_running_loop().create_future()
        heapq.heappush(
            self._sleepers, (self._now + seconds, next(self._counter), future)
        )
        await future

    async def advance(self, seconds: float) -> None:
        await self.advance_to(self._now + seconds)

    async def advance_to(self, target: float) -> None:
        await settle()
        while self._sleepers and self._sleepers[0][0] <= target:
            deadline, _, future = heapq.heappop(self._sleepers)
            self._now = max(self._now, deadline)
            if not future.done():
                future.set_result(None)
            await settle()
        self._now = max(self._now, target)
        await settle()
