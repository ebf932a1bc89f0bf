"""Application-wide constants."""

from __future__ import annotations


class SQLPragmas:
    """SQLite PRAGMA statements for database configuration.

    These pragmas are applied to each connection to ensure consistent behavior.
    """

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"


class StorageSchemes:
    """URL schemes accepted for the storage backend."""

    SQLITE = "sqlite://"
    MEMORY = "memory://"

    ALL = (SQLITE, MEMORY)
