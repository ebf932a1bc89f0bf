"""Repository implementations: SQLite-backed and in-memory."""

from share_it.infrastructure.persistence.repositories.chatroom_repository import (
    SQLiteChatroomRepository,
)
from share_it.infrastructure.persistence.repositories.memory_repository import (
    InMemoryChatroomRepository,
    InMemoryUserRepository,
)
from share_it.infrastructure.persistence.repositories.user_repository import (
    SQLiteUserRepository,
)

__all__ = [
    "SQLiteUserRepository",
    "SQLiteChatroomRepository",
    "InMemoryUserRepository",
    "InMemoryChatroomRepository",
]
