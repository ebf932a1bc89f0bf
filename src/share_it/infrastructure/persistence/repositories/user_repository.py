"""SQLite implementation of the user repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

from share_it.domain.library.entities import Playlist, User
from share_it.domain.library.repository import UserRepository
from share_it.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)

_PLAYLISTS = TypeAdapter(dict[str, Playlist])


class SQLiteUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def insert(self, entity: User) -> int | None:
        inserted = await self._db.execute(
            """
            INSERT INTO users (
                id, username, avatar_url, permalink_url,
                active_playlist_id, playlists_json
            ) VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO NOTHING
            """,
            self._user_to_params(entity),
        )
        if inserted == 0:
            return None

        logger.debug(LogTemplates.USER_SAVED, entity.id)
        return entity.id

    async def get(self, key: int) -> User | None:
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE id = ?",
            (key,),
        )
        if row is None:
            return None
        return self._row_to_user(row)

    async def update(self, entity: User) -> int | None:
        params = self._user_to_params(entity)
        updated = await self._db.execute(
            """
            UPDATE users SET
                username = ?,
                avatar_url = ?,
                permalink_url = ?,
                active_playlist_id = ?,
                playlists_json = ?
            WHERE id = ?
            """,
            (*params[1:], entity.id),
        )
        if updated == 0:
            return None

        logger.debug(LogTemplates.USER_SAVED, entity.id)
        return entity.id

    async def remove(self, key: int) -> int | None:
        deleted = await self._db.execute(
            "DELETE FROM users WHERE id = ?",
            (key,),
        )
        if deleted == 0:
            return None

        logger.debug(LogTemplates.USER_DELETED, key)
        return key

    async def contains(self, key: int) -> bool:
        row = await self._db.fetch_one(
            "SELECT 1 FROM users WHERE id = ?",
            (key,),
        )
        return row is not None

    @staticmethod
    def _user_to_params(user: User) -> tuple[Any, ...]:
        return (
            user.id,
            user.username,
            user.avatar_url,
            user.permalink_url,
            user.active_playlist_id,
            _PLAYLISTS.dump_json(user.playlists).decode(),
        )

    @staticmethod
    def _row_to_user(row: dict[str, Any]) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            avatar_url=row["avatar_url"],
            permalink_url=row["permalink_url"],
            active_playlist_id=row["active_playlist_id"],
            playlists=_PLAYLISTS.validate_json(row["playlists_json"]),
        )
