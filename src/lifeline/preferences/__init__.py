"""
User preferences for Lifeline.

Holds the selected provider and resolves per-provider API keys.
"""

from lifeline.preferences.storage import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    StorageError,
)
from lifeline.preferences.store import PreferenceLookup, PreferenceStore

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "PreferenceLookup",
    "PreferenceStore",
    "StorageError",
]
