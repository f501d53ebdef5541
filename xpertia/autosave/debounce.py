"""Per-key debounced callbacks on the asyncio event loop."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Any

import sentry_sdk

logger = logging.getLogger(__name__)


class KeyedDebouncer:
    """Coalesce rapid calls into one delayed call per key.

    ``call(key)`` (re)starts the timer for ``key``; when it fires,
    ``callback(key)`` runs. Callers keep the latest state themselves and read
    it in the callback. Once the callback has started it is detached from the
    timer table, so ``cancel`` only ever cancels waiting timers, never a
    running callback.
    """

    def __init__(self, callback: Callable[[Hashable], Awaitable[Any]], delay: float):
        self._callback = callback
        self.delay = delay
        self._timers: dict[Hashable, asyncio.Task] = {}
        # Fired callbacks; asyncio only keeps weak references to tasks
        self._running: set[asyncio.Task] = set()

    def call(self, key: Hashable) -> None:
        self._cancel_timer(key)
        task = asyncio.create_task(self._wait_and_fire(key), name=f"debounce-{key}")
        self._timers[key] = task

    def pending(self, key: Hashable) -> bool:
        task = self._timers.get(key)
        return task is not None and not task.done()

    def cancel(self, key: Hashable | None = None) -> None:
        """Cancel the pending timer for ``key``, or every timer if key is None."""
        if key is not None:
            self._cancel_timer(key)
            return
        for pending_key in list(self._timers):
            self._cancel_timer(pending_key)

    async def wait_idle(self) -> None:
        """Wait for every fired callback to finish."""
        while self._running:
            await asyncio.gather(*self._running, return_exceptions=True)

    def _cancel_timer(self, key: Hashable) -> None:
        task = self._timers.pop(key, None)
        if task is not None and not task.done():
            task.cancel()

    async def _wait_and_fire(self, key: Hashable) -> None:
        await asyncio.sleep(self.delay)
        # Detach before running so cancel() cannot interrupt the callback
        if self._timers.get(key) is asyncio.current_task():
            del self._timers[key]
        task = asyncio.create_task(self._callback(key), name=f"fire-{key}")
        self._running.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        """Clean up fired callbacks and log errors."""
        self._running.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc:
            logger.error(f"Debounced task {task.get_name()} failed: {exc}")
            sentry_sdk.capture_exception(exc)
