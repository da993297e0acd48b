"""Storage infrastructure for Domo.

EntityStore implementations returning Result types for explicit error
handling.
"""

from domo.infrastructure.storage.json_storage import JsonStorage
from domo.infrastructure.storage.json_store import JsonStore
from domo.infrastructure.storage.memory_store import MemoryStore

__all__ = [
    "JsonStorage",
    "JsonStore",
    "MemoryStore",
]
