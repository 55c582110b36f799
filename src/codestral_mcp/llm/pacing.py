"""
pacing.py

PURPOSE: Minimum spacing between outbound request start times.
DEPENDENCIES: None (pure Python + asyncio)

ARCHITECTURE NOTES:
The last start time is shared by every call on a client. The lock is held
across read, sleep and write so concurrent callers cannot both observe a
stale timestamp; the effect is that request starts are spaced at least
min_interval apart. Only the timing is serialized: the requests themselves
still run concurrently once started.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class RequestPacer:
    """Enforces a floor on the gap between successive request starts."""

    def __init__(
        self,
        min_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the pacer.

        Args:
            min_interval: Minimum seconds between request starts.
            clock: Monotonic clock in seconds.
            sleep: Coroutine used to wait.
        """
        if min_interval < 0:
            raise ValueError("min_interval must be non-negative")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_request_time: float | None = None

    @property
    def last_request_time(self) -> float | None:
        """Clock reading of the most recent request start, None before the first."""
        return self._last_request_time

    async def wait(self) -> float:
        """
        Wait until a request may start, then record the start.

        Returns:
            The recorded start time.
        """
        async with self._lock:
            if self._last_request_time is not None:
                # Loop because sleep may return fractionally early.
                while True:
                    elapsed = self._clock() - self._last_request_time
                    remaining = self.min_interval - elapsed
                    if remaining <= 0:
                        break
                    logger.debug(f"Pacing request for {remaining * 1000:.1f}ms")
                    await self._sleep(remaining)

            self._last_request_time = self._clock()
            return self._last_request_time
