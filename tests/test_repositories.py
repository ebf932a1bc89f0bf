"""
Repository Tests

Contract tests run against both the in-memory and the SQLite backends:
- insert / get / contains / update / remove semantics
- aggregate state (playlists, roster, waitlist) survives storage
- optimistic version check on chatroom updates
Plus SQLite-only tests for schema setup and driver error translation.
"""

import json

import pytest
from pydantic import ValidationError

from conftest import new_test_song, new_test_user, seed_users
from share_it.domain.library.entities import Playlist
from share_it.domain.rooms.entities import Chatroom
from share_it.domain.rooms.value_objects import ChatUser
from share_it.domain.shared.exceptions import ConcurrencyError, DomainError, PersistenceError
from share_it.infrastructure.persistence.database import Database

# =============================================================================
# User Repository Contract
# =============================================================================


class TestUserRepositoryContract:
    async def test_insert_and_get(self, user_repository):
        user = new_test_user(0)

        assert await user_repository.insert(user) == 0

        stored = await user_repository.get(0)
        assert stored is not None
        assert stored.username == user.username
        assert stored.avatar_url == user.avatar_url

    async def test_cannot_insert_duplicate(self, user_repository):
        user = new_test_user(0)

        assert await user_repository.insert(user) == 0
        assert await user_repository.insert(user) is None

    async def test_get_missing(self, user_repository):
        assert await user_repository.get(12345) is None

    async def test_contains(self, user_repository):
        await user_repository.insert(new_test_user(3))

        assert await user_repository.contains(3)
        assert not await user_repository.contains(4)

    async def test_remove(self, user_repository):
        await user_repository.insert(new_test_user(0))

        assert await user_repository.contains(0)
        assert await user_repository.remove(0) == 0
        assert not await user_repository.contains(0)

    async def test_remove_missing(self, user_repository):
        assert await user_repository.remove(77) is None

    async def test_update_missing(self, user_repository):
        assert await user_repository.update(new_test_user(9)) is None
        assert not await user_repository.contains(9)

    async def test_update_persists_playlists(self, user_repository):
        user = new_test_user(0)
        await user_repository.insert(user)

        playlist = Playlist(name="Late Night")
        playlist.add(new_test_song(1, 0))
        playlist.add(new_test_song(2, 0))
        user.add_playlist(playlist)
        user.set_active_playlist(playlist.id)
        assert await user_repository.update(user) == 0

        stored = await user_repository.get(0)
        assert stored.playlist_count == 1
        assert stored.active_playlist_id == playlist.id
        assert [s.id for s in stored.active_playlist.songs] == [1, 2]
        assert stored.active_playlist.top_song() == new_test_song(1, 0)

    async def test_stored_copy_is_detached(self, user_repository):
        user = new_test_user(0)
        await user_repository.insert(user)

        user.username = "changed locally"
        fetched = await user_repository.get(0)
        fetched.username = "changed on the copy"

        assert (await user_repository.get(0)).username == "dj_0"

    async def test_user_id_zero_is_valid(self, user_repository):
        await seed_users(user_repository, user_count=1)

        assert await user_repository.contains(0)


# =============================================================================
# Chatroom Repository Contract
# =============================================================================


class TestChatroomRepositoryContract:
    async def test_insert_and_get(self, chatroom_repository):
        room = Chatroom.create("Room", 1)

        assert await chatroom_repository.insert(room) == room.id

        stored = await chatroom_repository.get(room.id)
        assert stored.name == "Room"
        assert stored.moderator_id == 1
        assert stored.version == 0

    async def test_cannot_insert_duplicate(self, chatroom_repository):
        room = Chatroom.create("Room", 1)
        await chatroom_repository.insert(room)

        assert await chatroom_repository.insert(room) is None

    async def test_get_missing(self, chatroom_repository):
        assert await chatroom_repository.get("nope") is None

    async def test_update_missing(self, chatroom_repository):
        assert await chatroom_repository.update(Chatroom.create("Room", 1)) is None

    async def test_remove(self, chatroom_repository):
        room = Chatroom.create("Room", 1)
        await chatroom_repository.insert(room)

        assert await chatroom_repository.remove(room.id) == room.id
        assert await chatroom_repository.remove(room.id) is None
        assert not await chatroom_repository.contains(room.id)

    async def test_update_bumps_version(self, chatroom_repository):
        room = Chatroom.create("Room", 1)
        await chatroom_repository.insert(room)

        room.join(ChatUser(user_id=2, username="guest"))
        assert await chatroom_repository.update(room) == room.id

        assert room.version == 1
        stored = await chatroom_repository.get(room.id)
        assert stored.version == 1
        assert stored.is_member(2)

    async def test_stale_update_raises(self, chatroom_repository):
        room = Chatroom.create("Room", 1)
        await chatroom_repository.insert(room)

        first = await chatroom_repository.get(room.id)
        second = await chatroom_repository.get(room.id)

        first.join(ChatUser(user_id=2, username="a"))
        await chatroom_repository.update(first)

        second.join(ChatUser(user_id=3, username="b"))
        with pytest.raises(ConcurrencyError):
            await chatroom_repository.update(second)

        stored = await chatroom_repository.get(room.id)
        assert stored.is_member(2)
        assert not stored.is_member(3)
        assert second.version == 0

    async def test_concurrency_error_is_a_domain_error(self, chatroom_repository):
        room = Chatroom.create("Room", 1)
        await chatroom_repository.insert(room)
        stale = await chatroom_repository.get(room.id)
        await chatroom_repository.update(room)

        with pytest.raises(DomainError) as exc_info:
            await chatroom_repository.update(stale)

        assert exc_info.value.code == "CONCURRENCY_ERROR"

    async def test_waitlist_state_survives_storage(self, chatroom_factory, chatroom_repository):
        room = await chatroom_factory(which_joined_waitlist=(2, 1, 4))

        stored = await chatroom_repository.get(room.id)

        assert [dj.user_id for dj in stored.waitlist_djs()] == [1, 0, 3]
        assert [m.user_id for m in stored.members] == [0, 1, 2, 3]
        assert stored.waitlist.id == room.waitlist.id

    async def test_turn_state_survives_storage(
        self, chatroom_factory, chatroom_repository, user_repository
    ):
        room = await chatroom_factory(which_joined_waitlist=(1, 2, 3))

        await room.play_next(user_repository)
        await chatroom_repository.update(room)

        stored = await chatroom_repository.get(room.id)
        assert stored.waitlist.current_dj.id == 0
        assert stored.waitlist.current_playlist_id == room.waitlist.current_playlist_id

        # The next turn continues from the stored state.
        song = await stored.play_next(user_repository)
        assert song.user_id == 1
        assert len(stored.waitlist) == 2


# =============================================================================
# Scenario Tests Across Backends
# =============================================================================


class TestRotationAcrossBackends:
    async def test_persisted_rotation(self, chatroom_factory, user_repository):
        room = await chatroom_factory(which_joined_waitlist=(1, 2, 3, 4))

        await room.play_next(user_repository)
        await room.play_next(user_repository)

        stored = await user_repository.get(0)
        assert [s.id for s in stored.active_playlist.songs] == [1, 0]
        assert stored.playlist_count == 1

    async def test_skip_and_exhaustion(self, chatroom_factory, user_repository):
        room = await chatroom_factory(which_joined_waitlist=(1, 2, 3, 4), which_forgot_active=3)

        songs = [await room.play_next(user_repository) for _ in range(3)]

        assert [s.user_id for s in songs] == [0, 1, 3]
        assert await room.play_next(user_repository) is None
        assert len(room.waitlist) == 0


# =============================================================================
# SQLite Database Tests
# =============================================================================


class TestDatabase:
    async def test_initialize_is_idempotent(self, in_memory_database):
        await in_memory_database.initialize()

        assert in_memory_database.is_initialized

    async def test_schema_tables_exist(self, in_memory_database):
        for table in ("chatrooms", "users"):
            row = await in_memory_database.fetch_one(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
                (table,),
            )
            assert row is not None

    async def test_sqlite_url_prefix_is_stripped(self, tmp_path):
        db = Database(f"sqlite:///{tmp_path}/nested/share_it.db")

        await db.initialize()
        try:
            assert db.db_path == f"{tmp_path}/nested/share_it.db"
            assert (tmp_path / "nested" / "share_it.db").exists()
        finally:
            await db.close()

    async def test_separate_memory_databases_are_isolated(self):
        first = Database(":memory:")
        second = Database(":memory:")
        await first.initialize()
        await second.initialize()
        try:
            await first.execute("INSERT INTO users (id, username) VALUES (1, 'a')")

            assert await second.fetch_one("SELECT 1 FROM users WHERE id = 1") is None
        finally:
            await first.close()
            await second.close()

    async def test_execute_returns_rowcount(self, in_memory_database):
        await in_memory_database.execute("INSERT INTO users (id, username) VALUES (1, 'a')")
        await in_memory_database.execute("INSERT INTO users (id, username) VALUES (2, 'b')")

        assert await in_memory_database.execute("DELETE FROM users") == 2

    async def test_driver_error_becomes_persistence_error(self, in_memory_database):
        with pytest.raises(PersistenceError) as exc_info:
            await in_memory_database.execute("INSERT INTO no_such_table VALUES (1)")

        assert exc_info.value.code == "PERSISTENCE_ERROR"
        assert exc_info.value.__cause__ is not None

    async def test_failed_transaction_rolls_back(self, in_memory_database):
        with pytest.raises(PersistenceError):
            async with in_memory_database.transaction() as conn:
                await conn.execute("INSERT INTO users (id, username) VALUES (1, 'a')")
                await conn.execute("INSERT INTO users (id, username) VALUES (1, 'dup')")

        assert await in_memory_database.fetch_one("SELECT 1 FROM users") is None

    async def test_unreachable_storage(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        db = Database(str(blocker / "db.sqlite"))

        with pytest.raises(PersistenceError):
            await db.fetch_one("SELECT 1")

    async def test_repository_surfaces_persistence_error(self, tmp_path):
        from share_it.infrastructure.persistence.repositories import SQLiteUserRepository

        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        repo = SQLiteUserRepository(Database(str(blocker / "db.sqlite")))

        with pytest.raises(PersistenceError):
            await repo.get(0)

    async def test_stored_playlist_under_wrong_key_is_rejected(self, in_memory_database):
        from share_it.infrastructure.persistence.repositories import SQLiteUserRepository

        playlist = Playlist(name="Misfiled")
        playlists_json = json.dumps({"other-key": playlist.model_dump(mode="json")})
        await in_memory_database.execute(
            "INSERT INTO users (id, username, playlists_json) VALUES (?, ?, ?)",
            (1, "a", playlists_json),
        )

        with pytest.raises(ValidationError, match="stored under key other-key"):
            await SQLiteUserRepository(in_memory_database).get(1)


# =============================================================================
# In-Memory Backend Tests
# =============================================================================


class TestInMemoryRepositories:
    async def test_len_and_clear(self, memory_user_repository):
        await seed_users(memory_user_repository, user_count=3)

        assert len(memory_user_repository) == 3

        memory_user_repository.clear()

        assert len(memory_user_repository) == 0
        assert await memory_user_repository.get(0) is None

    async def test_chatroom_clear(self):
        from share_it.infrastructure.persistence.repositories import InMemoryChatroomRepository

        repo = InMemoryChatroomRepository()
        room = Chatroom.create("Room", 1)
        await repo.insert(room)

        assert len(repo) == 1
        repo.clear()
        assert not await repo.contains(room.id)
