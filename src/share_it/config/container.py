"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the database, repositories, event bus and
command/query handlers. Components are created on first access and cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.commands.change_moderator import ChangeModeratorHandler
    from ..application.commands.create_chatroom import CreateChatroomHandler
    from ..application.commands.join_chatroom import JoinChatroomHandler
    from ..application.commands.join_waitlist import JoinWaitlistHandler
    from ..application.commands.leave_chatroom import LeaveChatroomHandler
    from ..application.commands.leave_waitlist import LeaveWaitlistHandler
    from ..application.commands.play_next import PlayNextHandler
    from ..application.queries.list_waitlist import ListWaitlistHandler
    from ..domain.library.repository import UserRepository
    from ..domain.rooms.repository import ChatroomRepository
    from ..domain.shared.events import EventBus
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    ``settings.database.url`` picks the backend: ``memory://`` wires the
    dict-backed repositories and never touches SQLite; any ``sqlite://`` URL
    wires the SQLite repositories over a shared :class:`Database`.
    """

    settings: Settings

    # Persistence layer
    _database: Database | None = None
    _user_repository: UserRepository | None = None
    _chatroom_repository: ChatroomRepository | None = None

    _event_bus: EventBus | None = None

    # Command handlers
    _create_chatroom_handler: CreateChatroomHandler | None = None
    _join_chatroom_handler: JoinChatroomHandler | None = None
    _leave_chatroom_handler: LeaveChatroomHandler | None = None
    _change_moderator_handler: ChangeModeratorHandler | None = None
    _join_waitlist_handler: JoinWaitlistHandler | None = None
    _leave_waitlist_handler: LeaveWaitlistHandler | None = None
    _play_next_handler: PlayNextHandler | None = None

    # Query handlers
    _list_waitlist_handler: ListWaitlistHandler | None = None

    @property
    def uses_memory_storage(self) -> bool:
        return self.settings.database.is_memory

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def user_repository(self) -> UserRepository:
        """Get the user repository."""
        if self._user_repository is None:
            if self.uses_memory_storage:
                from ..infrastructure.persistence.repositories.memory_repository import (
                    InMemoryUserRepository,
                )

                self._user_repository = InMemoryUserRepository()
            else:
                from ..infrastructure.persistence.repositories.user_repository import (
                    SQLiteUserRepository,
                )

                self._user_repository = SQLiteUserRepository(self.database)
        return self._user_repository

    @property
    def chatroom_repository(self) -> ChatroomRepository:
        """Get the chatroom repository."""
        if self._chatroom_repository is None:
            if self.uses_memory_storage:
                from ..infrastructure.persistence.repositories.memory_repository import (
                    InMemoryChatroomRepository,
                )

                self._chatroom_repository = InMemoryChatroomRepository()
            else:
                from ..infrastructure.persistence.repositories.chatroom_repository import (
                    SQLiteChatroomRepository,
                )

                self._chatroom_repository = SQLiteChatroomRepository(self.database)
        return self._chatroom_repository

    # === Events ===

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            from ..domain.shared.events import get_event_bus

            self._event_bus = get_event_bus()
        return self._event_bus

    # === Command Handlers ===

    @property
    def create_chatroom_handler(self) -> CreateChatroomHandler:
        if self._create_chatroom_handler is None:
            from ..application.commands.create_chatroom import CreateChatroomHandler

            self._create_chatroom_handler = CreateChatroomHandler(
                chatroom_repository=self.chatroom_repository,
                event_bus=self.event_bus,
            )
        return self._create_chatroom_handler

    @property
    def join_chatroom_handler(self) -> JoinChatroomHandler:
        if self._join_chatroom_handler is None:
            from ..application.commands.join_chatroom import JoinChatroomHandler

            self._join_chatroom_handler = JoinChatroomHandler(
                chatroom_repository=self.chatroom_repository,
                user_repository=self.user_repository,
                event_bus=self.event_bus,
            )
        return self._join_chatroom_handler

    @property
    def leave_chatroom_handler(self) -> LeaveChatroomHandler:
        if self._leave_chatroom_handler is None:
            from ..application.commands.leave_chatroom import LeaveChatroomHandler

            self._leave_chatroom_handler = LeaveChatroomHandler(
                chatroom_repository=self.chatroom_repository,
                event_bus=self.event_bus,
            )
        return self._leave_chatroom_handler

    @property
    def change_moderator_handler(self) -> ChangeModeratorHandler:
        if self._change_moderator_handler is None:
            from ..application.commands.change_moderator import ChangeModeratorHandler

            self._change_moderator_handler = ChangeModeratorHandler(
                chatroom_repository=self.chatroom_repository,
                event_bus=self.event_bus,
            )
        return self._change_moderator_handler

    @property
    def join_waitlist_handler(self) -> JoinWaitlistHandler:
        if self._join_waitlist_handler is None:
            from ..application.commands.join_waitlist import JoinWaitlistHandler

            self._join_waitlist_handler = JoinWaitlistHandler(
                chatroom_repository=self.chatroom_repository,
                user_repository=self.user_repository,
                event_bus=self.event_bus,
            )
        return self._join_waitlist_handler

    @property
    def leave_waitlist_handler(self) -> LeaveWaitlistHandler:
        if self._leave_waitlist_handler is None:
            from ..application.commands.leave_waitlist import LeaveWaitlistHandler

            self._leave_waitlist_handler = LeaveWaitlistHandler(
                chatroom_repository=self.chatroom_repository,
                user_repository=self.user_repository,
                event_bus=self.event_bus,
            )
        return self._leave_waitlist_handler

    @property
    def play_next_handler(self) -> PlayNextHandler:
        if self._play_next_handler is None:
            from ..application.commands.play_next import PlayNextHandler

            self._play_next_handler = PlayNextHandler(
                chatroom_repository=self.chatroom_repository,
                user_repository=self.user_repository,
                event_bus=self.event_bus,
            )
        return self._play_next_handler

    # === Query Handlers ===

    @property
    def list_waitlist_handler(self) -> ListWaitlistHandler:
        if self._list_waitlist_handler is None:
            from ..application.queries.list_waitlist import ListWaitlistHandler

            self._list_waitlist_handler = ListWaitlistHandler(
                chatroom_repository=self.chatroom_repository,
            )
        return self._list_waitlist_handler

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        if not self.uses_memory_storage:
            await self.database.initialize()
        logger.info(
            LogTemplates.CONTAINER_INITIALIZED,
            "memory" if self.uses_memory_storage else "sqlite",
        )

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._database is not None:
            await self._database.close()
        logger.info(LogTemplates.CONTAINER_SHUTDOWN)


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
