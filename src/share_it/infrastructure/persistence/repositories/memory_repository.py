"""Dict-backed repository implementations.

Entities are deep-copied on the way in and out, so callers never share
state with the store.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from pydantic import BaseModel

from share_it.domain.library.entities import User
from share_it.domain.library.repository import UserRepository
from share_it.domain.rooms.entities import Chatroom
from share_it.domain.rooms.repository import ChatroomRepository
from share_it.domain.shared.exceptions import ConcurrencyError
from share_it.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

K = TypeVar("K", int, str)
V = TypeVar("V", bound=BaseModel)


class _DictStore(Generic[K, V]):
    def __init__(self) -> None:
        self._items: dict[K, V] = {}

    def __len__(self) -> int:
        return len(self._items)

    def put_new(self, key: K, entity: V) -> bool:
        if key in self._items:
            return False
        self._items[key] = entity.model_copy(deep=True)
        return True

    def replace(self, key: K, entity: V) -> bool:
        if key not in self._items:
            return False
        self._items[key] = entity.model_copy(deep=True)
        return True

    def read(self, key: K) -> V | None:
        entity = self._items.get(key)
        return entity.model_copy(deep=True) if entity is not None else None

    def peek(self, key: K) -> V | None:
        return self._items.get(key)

    def pop(self, key: K) -> V | None:
        return self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._store: _DictStore[int, User] = _DictStore()

    def __len__(self) -> int:
        return len(self._store)

    async def insert(self, entity: User) -> int | None:
        if not self._store.put_new(entity.id, entity):
            return None
        logger.debug(LogTemplates.USER_SAVED, entity.id)
        return entity.id

    async def get(self, key: int) -> User | None:
        return self._store.read(key)

    async def update(self, entity: User) -> int | None:
        if not self._store.replace(entity.id, entity):
            return None
        logger.debug(LogTemplates.USER_SAVED, entity.id)
        return entity.id

    async def remove(self, key: int) -> int | None:
        if self._store.pop(key) is None:
            return None
        logger.debug(LogTemplates.USER_DELETED, key)
        return key

    def clear(self) -> None:
        self._store.clear()


class InMemoryChatroomRepository(ChatroomRepository):
    def __init__(self) -> None:
        self._store: _DictStore[str, Chatroom] = _DictStore()

    def __len__(self) -> int:
        return len(self._store)

    async def insert(self, entity: Chatroom) -> str | None:
        if not self._store.put_new(entity.id, entity):
            return None
        logger.debug(LogTemplates.CHATROOM_SAVED, entity.id, entity.version)
        return entity.id

    async def get(self, key: str) -> Chatroom | None:
        return self._store.read(key)

    async def update(self, entity: Chatroom) -> str | None:
        stored = self._store.peek(entity.id)
        if stored is None:
            return None

        if stored.version != entity.version:
            raise ConcurrencyError(
                "Chatroom",
                ErrorMessages.STALE_CHATROOM.format(chatroom_id=entity.id, version=entity.version),
            )

        entity.version += 1
        self._store.replace(entity.id, entity)
        logger.debug(LogTemplates.CHATROOM_SAVED, entity.id, entity.version)
        return entity.id

    async def remove(self, key: str) -> str | None:
        if self._store.pop(key) is None:
            return None
        logger.debug(LogTemplates.CHATROOM_DELETED, key)
        return key

    def clear(self) -> None:
        self._store.clear()
