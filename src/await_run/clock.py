"""SystemClock: millisecond time source backed by the running event loop."""

import asyncio
import time


class SystemClock:
    """Reads monotonic time and sleeps on the asyncio event loop.

    Retry and polling loops take any object with the same two methods,
    so tests can substitute a virtual clock.
    """

    def now(self) -> float:
        return time.monotonic() * 1000

    async def sleep(self, ms: float) -> None:
        await asyncio.sleep(ms / 1000)
