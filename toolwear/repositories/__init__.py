"""Data access layer."""

from .record_store import BaseRepository, ToolRecordStore

__all__ = ["BaseRepository", "ToolRecordStore"]
