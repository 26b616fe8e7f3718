import asyncio
import inspect
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesce rapid calls into one delayed call with the last arguments.

    Calls are not queued: each call resets the quiet window and replaces the
    pending arguments. Coroutine callbacks are scheduled as tasks once the
    window elapses. Must be called from inside a running event loop.
    """

    def __init__(self, callback: Callable[..., Any], delay: float):
        self._callback = callback
        self._delay = delay
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def __call__(self, *args, **kwargs) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._timer = loop.call_later(self._delay, self._fire, args, kwargs)

    def cancel(self) -> None:
        """Drop the pending call. Callbacks already running are left alone."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, args: tuple, kwargs: dict) -> None:
        self._timer = None
        result = self._callback(*args, **kwargs)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced callback failed: %s", exc, exc_info=exc)


def debounce(callback: Callable[..., Any], delay: float) -> Debouncer:
    return Debouncer(callback, delay)
