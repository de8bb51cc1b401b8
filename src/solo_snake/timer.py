"""Periodic tick scheduling on the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TickTimer:
    """Calls *callback* every ``interval_ms`` milliseconds.

    The running loop is an ``asyncio.Task`` held in :attr:`handle`. A period
    change never edits the running task: :meth:`restart` cancels it and
    schedules a fresh one, so the new period applies from the next tick.
    When :meth:`restart` is called from inside the callback, the current task
    finishes that iteration and then exits on its own.
    """

    def __init__(self, callback: Callable[[], object]) -> None:
        self._callback = callback
        self.handle: asyncio.Task | None = None
        self.interval_ms: int | None = None

    @property
    def running(self) -> bool:
        return self.handle is not None and not self.handle.done()

    def start(self, interval_ms: int) -> None:
        """Schedule ticks at *interval_ms*, replacing any running loop."""
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        previous = self.handle
        self.interval_ms = interval_ms
        self.handle = asyncio.get_running_loop().create_task(
            self._run(interval_ms / 1000.0),
        )
        self._cancel(previous)
        logger.debug("Tick timer scheduled every %d ms.", interval_ms)

    def restart(self, interval_ms: int) -> None:
        self.start(interval_ms)

    def stop(self) -> None:
        """Cancel the running loop, if any."""
        previous = self.handle
        self.handle = None
        self._cancel(previous)

    async def aclose(self) -> None:
        """Stop and wait for the loop to unwind."""
        task = self.handle
        self.stop()
        if task is not None and task is not asyncio.current_task():
            await asyncio.gather(task, return_exceptions=True)

    @staticmethod
    def _cancel(task: asyncio.Task | None) -> None:
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            # Exits by itself once the callback returns.
            return
        task.cancel()

    async def _run(self, interval: float) -> None:
        me = asyncio.current_task()
        try:
            while self.handle is me:
                await asyncio.sleep(interval)
                if self.handle is not me:
                    break
                self._callback()
        except asyncio.CancelledError:
            logger.debug("Tick timer cancelled.")
        except Exception:
            logger.exception("Tick callback failed; stopping timer.")
            if self.handle is me:
                self.handle = None
