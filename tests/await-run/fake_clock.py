"""FakeClock: virtual millisecond clock for deterministic timing tests."""

import asyncio
import heapq
import itertools

_SETTLE_ROUNDS = 50


async def settle():
    """Let every runnable task on the event loop proceed until it blocks."""
    for _ in range(_SETTLE_ROUNDS):
        await asyncio.sleep(0)


class FakeClock:
    """Time only moves when a test calls advance().

    Usage:
        clock = FakeClock()
        task = asyncio.ensure_future(code_under_test(clock=clock))
        await clock.advance(1000)
        assert task.done()
    """

    def __init__(self, start_ms=0.0):
        self._now = start_ms
        self._sleepers = []
        self._sequence = itertools.count()
        self.sleeps = []

    def now(self):
        return self._now

    async def sleep(self, ms):
        self.sleeps.append(ms)
        future = asyncio.get_running_loop().create_future()
        heapq.heappush(self._sleepers, (self._now + ms, next(self._sequence), future))
        await future

    async def advance(self, ms):
        """Move time forward by ms, waking sleepers in deadline order."""
        target = self._now + ms
        await settle()
        while self._sleepers and self._sleepers[0][0] <= target:
            wake_at, _, future = heapq.heappop(self._sleepers)
            self._now = wake_at
            if not future.done():
                future.set_result(None)
            await settle()
        self._now = target
        await settle()
