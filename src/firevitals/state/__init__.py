"""State/store layer.

This package is the single source of truth for the application state:
loading and migrating the persisted blob, applying transitions, and
writing every change straight back to device storage.
"""

from firevitals.state.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from firevitals.state.store import StateStore
from firevitals.state.transitions import Transition

__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "StateStore",
    "Transition",
]
