"""
Durable storage for the Digital Asset Desk.

Provides key-value backends, the named storage slots and JSON serialization.
"""

from asset_desk.storage.backend import (
    FileStore,
    KeyValueStore,
    MemoryStore,
    PersistenceError,
)
from asset_desk.storage.slots import (
    ASSETS_KEY,
    PROFILE_KEY,
    USER_KEY,
    StorageSlots,
)

__all__ = [
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "PersistenceError",
    "StorageSlots",
    "ASSETS_KEY",
    "PROFILE_KEY",
    "USER_KEY",
]
