"""Mutation store and its persistence collaborators."""

from .persistence import DEFAULT_STORAGE_KEY, JsonFileStorage, MemoryStorage, StorageBackend
from .results import CommandResult
from .resume_store import ResumeStore, make_id, now_ms, splice_move

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "JsonFileStorage",
    "MemoryStorage",
    "StorageBackend",
    "CommandResult",
    "ResumeStore",
    "make_id",
    "now_ms",
    "splice_move",
]
