"""
Cancellable fixed-cadence scheduler.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional


class RepeatingTask:
    """
    Runs a coroutine function immediately and then once per interval.

    Ticks are scheduled against the start time, so the cadence does not drift
    with run duration. A tick that arrives while the previous run is still in
    flight is skipped. stop() prevents further ticks; a run already in flight
    is left to finish.
    """

    def __init__(self, func: Callable[[], Awaitable[None]], interval: float, name: str = "repeating-task"):
        """
        Initialize the task.

        Args:
            func: Coroutine function to run on every tick
            interval: Seconds between ticks
            name: Name used in log messages
        """
        if interval <= 0:
            raise ValueError("Interval must be positive")

        self.func = func
        self.interval = interval
        self.name = name
        self.runs = 0
        self.skipped = 0
        self._ticker: Optional[asyncio.Task] = None
        self._current: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        """Whether ticks are being scheduled."""
        return self._ticker is not None and not self._ticker.done()

    @property
    def in_flight(self) -> bool:
        """Whether a run is currently executing."""
        return self._current is not None and not self._current.done()

    def start(self) -> bool:
        """
        Start ticking. Must be called from a running event loop.

        Returns:
            False if already running
        """
        if self.is_running:
            return False
        self._ticker = asyncio.get_running_loop().create_task(self._tick_loop())
        return True

    def stop(self) -> None:
        """Cancel future ticks."""
        if self._ticker:
            self._ticker.cancel()
            self._ticker = None

    def fire(self) -> bool:
        """
        Start one run now unless another run is in flight.

        Returns:
            True if a run was started
        """
        if self.in_flight:
            self.skipped += 1
            logging.warning(f"{self.name}: previous run still in progress, skipping")
            return False

        self._current = asyncio.get_running_loop().create_task(self._invoke())
        return True

    async def wait(self) -> None:
        """Wait for the in-flight run, if any."""
        if self._current:
            await asyncio.shield(self._current)

    async def _tick_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            self.fire()
            next_tick += self.interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

    async def _invoke(self) -> None:
        self.runs += 1
        try:
            await self.func()
        except Exception as e:
            logging.error(f"{self.name} error: {e}")
