"""Debounced auto-save of exercise work-in-progress.

Rapid edits to an exercise are coalesced into one write per debounce window:

- every ``update()`` while enabled restarts that exercise's single timer
- when the timer fires, the payload is serialized and compared with the last
  payload that was saved successfully; unchanged payloads are skipped
- at most one save per exercise is in flight; a tick that lands while one is
  in flight is skipped, not queued (last write wins)
- a failed save goes to ``on_error`` and does not update the saved snapshot,
  so the next tick writes the same payload again
- ``save_now()`` cancels the timer and writes immediately; its failures are
  raised to the caller as AutoSaveError

Everything runs on one asyncio event loop, so no locking is needed.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import sentry_sdk

from xpertia.config import get_autosave_interval
from .debounce import KeyedDebouncer

logger = logging.getLogger(__name__)

SaveFn = Callable[[str, Any], Awaitable[Any]]


class AutoSaveError(Exception):
    """Raised by save_now() when the write fails."""

    def __init__(self, exercise_id: str, cause: Exception):
        super().__init__(f"Failed to save exercise {exercise_id}: {cause}")
        self.exercise_id = exercise_id
        self.cause = cause


def serialize_payload(data: Any) -> str:
    """Stable serialization used to detect unchanged payloads."""
    return json.dumps(data, sort_keys=True, default=str)


class AutoSaveCoordinator:
    """Debounced, idempotent, best-effort persistence of exercise drafts.

    Args:
        save: Async callable ``save(exercise_id, data)`` performing the write
            (e.g. ``StudentApi.save_progress``)
        interval: Debounce interval in seconds (default: AUTOSAVE_INTERVAL_S, 10s)
        on_save: Called with ``exercise_id`` after a successful write
        on_error: Called with ``(exercise_id, exception)`` after a failed write
    """

    def __init__(
        self,
        save: SaveFn,
        interval: float | None = None,
        on_save: Callable[[str], Any] | None = None,
        on_error: Callable[[str, Exception], Any] | None = None,
    ):
        self._save = save
        self.interval = interval if interval is not None else get_autosave_interval()
        self.on_save = on_save
        self.on_error = on_error
        self._debouncer = KeyedDebouncer(self._on_tick, self.interval)
        self._data: dict[str, Any] = {}
        self._last_saved: dict[str, str] = {}
        self._in_flight: set[str] = set()

    # -------------------------------------------------------------------------
    # Triggers
    # -------------------------------------------------------------------------

    def update(self, exercise_id: str, data: Any, enabled: bool = True) -> None:
        """Record new working data for an exercise and (re)start its timer."""
        self._data[exercise_id] = data
        if not enabled:
            self._debouncer.cancel(exercise_id)
            return
        self._debouncer.call(exercise_id)

    async def save_now(self, exercise_id: str, data: Any = None) -> bool:
        """Cancel the pending timer and save immediately.

        Returns:
            True if a write happened, False if it was skipped (unchanged
            payload, nothing recorded, or a save already in flight)

        Raises:
            AutoSaveError: If the write fails
        """
        if data is not None:
            self._data[exercise_id] = data
        self._debouncer.cancel(exercise_id)
        return await self._perform(exercise_id, raise_errors=True)

    def cancel(self, exercise_id: str) -> None:
        """Drop the pending timer, e.g. when navigating away from the exercise.

        A save already in flight is not interrupted.
        """
        self._debouncer.cancel(exercise_id)

    def close(self) -> None:
        """Cancel every pending timer."""
        self._debouncer.cancel()

    async def wait_idle(self) -> None:
        """Wait until every background save that has fired has finished."""
        await self._debouncer.wait_idle()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def is_pending(self, exercise_id: str) -> bool:
        return self._debouncer.pending(exercise_id)

    def is_saving(self, exercise_id: str) -> bool:
        return exercise_id in self._in_flight

    def is_dirty(self, exercise_id: str) -> bool:
        if exercise_id not in self._data:
            return False
        current = serialize_payload(self._data[exercise_id])
        return current != self._last_saved.get(exercise_id)

    def last_saved(self, exercise_id: str) -> str | None:
        """Serialized snapshot of the last successfully saved payload."""
        return self._last_saved.get(exercise_id)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _on_tick(self, exercise_id: str) -> None:
        await self._perform(exercise_id, raise_errors=False)

    async def _perform(self, exercise_id: str, raise_errors: bool) -> bool:
        if exercise_id in self._in_flight:
            logger.debug(f"Save already in flight for {exercise_id}, skipping")
            return False
        if exercise_id not in self._data:
            return False

        data = self._data[exercise_id]
        snapshot = serialize_payload(data)
        if snapshot == self._last_saved.get(exercise_id):
            return False

        self._in_flight.add(exercise_id)
        try:
            await self._save(exercise_id, data)
        except Exception as e:
            logger.warning(f"Auto-save failed for {exercise_id}: {e}")
            self._notify(self.on_error, exercise_id, e)
            if raise_errors:
                raise AutoSaveError(exercise_id, e) from e
            return False
        finally:
            self._in_flight.discard(exercise_id)

        self._last_saved[exercise_id] = snapshot
        self._notify(self.on_save, exercise_id)
        return True

    def _notify(self, callback: Callable | None, *args) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.error(f"Auto-save callback {callback!r} failed: {e}")
            sentry_sdk.capture_exception(e)
