"""Debounced auto-save of exercise drafts."""

from .coordinator import AutoSaveCoordinator, AutoSaveError, serialize_payload
from .debounce import KeyedDebouncer

__all__ = ["AutoSaveCoordinator", "AutoSaveError", "KeyedDebouncer", "serialize_payload"]
