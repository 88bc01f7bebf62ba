"""Debounce primitive — coalesces bursts of calls into one delayed call."""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


# (delay_seconds, callback) -> handle. asyncio's loop.call_later fits this shape.
TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def asyncio_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Default timer: schedule on the running event loop."""
    return asyncio.get_running_loop().call_later(delay, callback)


class Debouncer:
    """Runs ``callback`` once ``delay`` seconds have passed since the last ``schedule()``.

    Every ``schedule()`` cancels the pending timer and starts a new one.
    ``flush()`` cancels the timer and runs the callback right away. If the
    callback is a coroutine function, firing from the timer spawns a task;
    the latest task is kept on ``pending_task`` so callers can await it.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[], Awaitable[None] | None],
        *,
        timer: TimerFactory | None = None,
    ):
        self._delay = delay
        self._callback = callback
        self._timer = timer or asyncio_timer
        self._handle: TimerHandle | None = None
        self.pending_task: asyncio.Task | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def is_scheduled(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        self.cancel()
        self._handle = self._timer(self._delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def flush(self) -> None:
        self.cancel()
        result = self._callback()
        if inspect.isawaitable(result):
            await result

    def _fire(self) -> None:
        self._handle = None
        result = self._callback()
        if inspect.isawaitable(result):
            self.pending_task = asyncio.ensure_future(result)
            self.pending_task.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Debounced callback failed", exc_info=task.exception())
