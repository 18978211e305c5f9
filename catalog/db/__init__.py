"""Database helpers (engine/session export)."""

from .session import Base, StorageNotConfiguredError, get_engine, get_session

__all__ = ["Base", "StorageNotConfiguredError", "get_engine", "get_session"]
