from .schema import STORAGE_KEY, ProgressRecord
from .store import JsonFileBackend, KeyValueBackend, MemoryBackend, ProgressStore
from .tracker import record_answer

__all__ = [
    "STORAGE_KEY",
    "ProgressRecord",
    "JsonFileBackend",
    "KeyValueBackend",
    "MemoryBackend",
    "ProgressStore",
    "record_answer",
]
