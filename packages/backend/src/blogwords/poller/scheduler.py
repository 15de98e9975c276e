"""Periodic task scheduling with a cancellation handle.

Learn: PeriodicTask fires its callback once immediately and then every
`interval` seconds. Each firing runs as its own asyncio task, so a slow
callback does not push back the next scheduled fire — deadlines are
computed from the event loop clock, not from when the last call ended.

Exceptions from a firing are logged and swallowed here; the schedule
only ends when cancel() is called.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

logger = structlog.get_logger()


class PeriodicTask:
    """Run an async callback on a fixed schedule until cancelled.

    Usage:
        task = PeriodicTask(loop.tick, interval=10.0, name="poller")
        task.start()
        ...
        await task.cancel()
    """

    def __init__(
        self,
        func: Callable[[], Awaitable[object]],
        interval: float,
        *,
        name: str = "periodic",
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.func = func
        self.interval = interval
        self.name = name
        self.fired = 0
        self._runner: Optional[asyncio.Task] = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._runner is not None and not self._runner.done()

    def start(self) -> None:
        """Schedule the first firing now. Must be called inside a running loop."""
        if self.running:
            raise RuntimeError(f"{self.name} is already running")
        self._runner = asyncio.create_task(self._run(), name=f"{self.name}-schedule")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while True:
            self.fire()
            deadline += self.interval
            await asyncio.sleep(max(0.0, deadline - loop.time()))

    def fire(self) -> asyncio.Task:
        """Start one firing right now, outside the regular schedule."""
        self.fired += 1
        task = asyncio.create_task(self._invoke(), name=f"{self.name}-{self.fired}")
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _invoke(self) -> None:
        try:
            await self.func()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("scheduler.callback_failed", task=self.name)

    async def wait_idle(self) -> None:
        """Wait for every in-flight firing to finish."""
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def cancel(self) -> None:
        """Stop the schedule and cancel any firing still in flight."""
        pending = list(self._in_flight)
        if self._runner is not None:
            pending.append(self._runner)
            self._runner = None
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
