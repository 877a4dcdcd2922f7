# Record stores usable by the search engine.

from .memory import InMemoryRecordStore
from .sqlite import SqliteRecordStore

__all__ = ["InMemoryRecordStore", "SqliteRecordStore"]
