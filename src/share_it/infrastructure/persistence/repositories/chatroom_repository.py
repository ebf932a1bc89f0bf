"""SQLite implementation of the chatroom repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from share_it.domain.rooms.entities import Chatroom
from share_it.domain.rooms.repository import ChatroomRepository
from share_it.domain.shared.exceptions import ConcurrencyError
from share_it.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteChatroomRepository(ChatroomRepository):
    """Stores each chatroom aggregate as a JSON document next to its version."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def insert(self, entity: Chatroom) -> str | None:
        inserted = await self._db.execute(
            """
            INSERT INTO chatrooms (id, name, moderator_id, version, state_json)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO NOTHING
            """,
            (
                entity.id,
                entity.name,
                entity.moderator_id,
                entity.version,
                self._state_json(entity),
            ),
        )
        if inserted == 0:
            return None

        logger.debug(LogTemplates.CHATROOM_SAVED, entity.id, entity.version)
        return entity.id

    async def get(self, key: str) -> Chatroom | None:
        row = await self._db.fetch_one(
            "SELECT state_json, version FROM chatrooms WHERE id = ?",
            (key,),
        )
        if row is None:
            return None
        return self._row_to_chatroom(row)

    async def update(self, entity: Chatroom) -> str | None:
        updated = await self._db.execute(
            """
            UPDATE chatrooms SET
                name = ?,
                moderator_id = ?,
                state_json = ?,
                version = version + 1
            WHERE id = ? AND version = ?
            """,
            (
                entity.name,
                entity.moderator_id,
                self._state_json(entity),
                entity.id,
                entity.version,
            ),
        )

        if updated == 0:
            if await self.contains(entity.id):
                raise ConcurrencyError(
                    "Chatroom",
                    ErrorMessages.STALE_CHATROOM.format(
                        chatroom_id=entity.id, version=entity.version
                    ),
                )
            return None

        entity.version += 1
        logger.debug(LogTemplates.CHATROOM_SAVED, entity.id, entity.version)
        return entity.id

    async def remove(self, key: str) -> str | None:
        deleted = await self._db.execute(
            "DELETE FROM chatrooms WHERE id = ?",
            (key,),
        )
        if deleted == 0:
            return None

        logger.debug(LogTemplates.CHATROOM_DELETED, key)
        return key

    async def contains(self, key: str) -> bool:
        row = await self._db.fetch_one(
            "SELECT 1 FROM chatrooms WHERE id = ?",
            (key,),
        )
        return row is not None

    @staticmethod
    def _state_json(chatroom: Chatroom) -> str:
        return chatroom.model_dump_json(exclude={"version"})

    @staticmethod
    def _row_to_chatroom(row: dict[str, Any]) -> Chatroom:
        chatroom = Chatroom.model_validate_json(row["state_json"])
        chatroom.version = row["version"]
        return chatroom
