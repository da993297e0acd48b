"""Infrastructure layer for Domo.

Exports:
    Storage:
        - JsonStorage: Low-level atomic JSON file I/O
        - JsonStore: Per-user JSON document store
        - MemoryStore: In-process store
"""

from domo.infrastructure.storage import JsonStorage, JsonStore, MemoryStore

__all__ = [
    "JsonStorage",
    "JsonStore",
    "MemoryStore",
]
