import asyncio
import time
from typing import Awaitable, Callable


class Rate:
    """
    Fixed-rate pacing for a control loop.

    Sleeps until the next deadline instead of a plain `dt`, so time spent
    inside the tick does not stretch the period. If a tick overruns, the
    schedule restarts from the current time rather than bursting.
    """

    def __init__(
        self,
        rate_hz: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.period = 1.0 / rate_hz
        self._clock = clock
        self._sleep = sleep
        self._deadline = None

    async def sleep(self) -> None:
        now = self._clock()
        if self._deadline is None:
            self._deadline = now
        self._deadline += self.period

        delay = self._deadline - now
        if delay <= 0.0:
            self._deadline = now
            delay = 0.0
        await self._sleep(delay)
