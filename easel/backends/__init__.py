"""Canvas persistence backends."""

from easel.backends.base import (
    GraphBackend,
    SpeechRecordStore,
    SpeechRecord,
    load_store,
    save_store,
)
from easel.backends.memory import MemoryBackend
from easel.backends.sqlite import SQLiteBackend

__all__ = [
    "GraphBackend",
    "SpeechRecordStore",
    "SpeechRecord",
    "load_store",
    "save_store",
    "MemoryBackend",
    "SQLiteBackend",
]
