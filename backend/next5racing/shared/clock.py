"""
Clock and periodic timer primitives.

Provides:
- Clock: wall-clock source in whole epoch seconds (injectable for tests)
- PeriodicTask: cancellable asyncio loop that fires a callback at a fixed interval

Usage:
    ticker = PeriodicTask(1.0, on_tick, name="race-tick")
    ticker.start()
    # ... later ...
    await ticker.stop()
"""

import asyncio
import inspect
import logging
import time
from typing import Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Union[None, Awaitable[None]]]


class Clock:
    """Wall clock returning integer epoch seconds."""

    def now(self) -> int:
        return int(time.time())


# Default clock instance
system_clock = Clock()


class PeriodicTask:
    """
    Runs a callback every `interval` seconds on the event loop.

    The first call happens one interval after `start()`. Sync and async
    callbacks are both accepted. A failing callback is logged and the loop
    keeps running; only `stop()` ends it.
    """

    def __init__(self, interval: float, callback: TickCallback, name: str = "periodic"):
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        self.interval = interval
        self.name = name
        self._callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        """Start the loop. Must be called from a running event loop."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run_loop(), name=self.name)
        logger.debug(f"Periodic task {self.name} started (every {self.interval}s)")

    async def stop(self):
        """Cancel the loop and wait until it has exited."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug(f"Periodic task {self.name} stopped")

    async def _run_loop(self):
        """Main timer loop."""
        while True:
            await asyncio.sleep(self.interval)
            try:
                result = self._callback()
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Periodic task {self.name} failed: {e}")
