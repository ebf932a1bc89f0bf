"""Command and handler for joining a chatroom's roster."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from share_it.domain.rooms.value_objects import ChatUser
from share_it.domain.shared.events import ChatroomJoined, get_event_bus
from share_it.domain.shared.messages import LogTemplates
from share_it.domain.shared.types import EntityIdStr, UserIdInt

if TYPE_CHECKING:
    from ...domain.library.repository import UserRepository
    from ...domain.rooms.repository import ChatroomRepository
    from ...domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class JoinChatroomStatus(Enum):
    SUCCESS = "success"
    ALREADY_MEMBER = "already_member"
    CHATROOM_NOT_FOUND = "chatroom_not_found"
    USER_NOT_FOUND = "user_not_found"


class JoinChatroomCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    chatroom_id: EntityIdStr
    user_id: UserIdInt


class JoinChatroomResult(BaseModel):

    status: JoinChatroomStatus
    message: str

    @property
    def is_success(self) -> bool:
        return self.status == JoinChatroomStatus.SUCCESS

    @classmethod
    def success(cls, username: str) -> JoinChatroomResult:
        return cls(status=JoinChatroomStatus.SUCCESS, message=f"{username} joined the room.")

    @classmethod
    def error(cls, status: JoinChatroomStatus, message: str) -> JoinChatroomResult:
        return cls(status=status, message=message)


class JoinChatroomHandler:

    def __init__(
        self,
        *,
        chatroom_repository: ChatroomRepository,
        user_repository: UserRepository,
        event_bus: EventBus | None = None,
    ) -> None:
        self._chatroom_repo = chatroom_repository
        self._user_repo = user_repository
        self._bus = event_bus if event_bus is not None else get_event_bus()

    async def handle(self, command: JoinChatroomCommand) -> JoinChatroomResult:
        chatroom = await self._chatroom_repo.get(command.chatroom_id)
        if chatroom is None:
            return JoinChatroomResult.error(
                JoinChatroomStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        user = await self._user_repo.get(command.user_id)
        if user is None:
            return JoinChatroomResult.error(JoinChatroomStatus.USER_NOT_FOUND, "User not found")

        # The roster keeps the username as it was at join time.
        if not chatroom.join(ChatUser(user_id=user.id, username=user.username)):
            return JoinChatroomResult.error(
                JoinChatroomStatus.ALREADY_MEMBER, "Already a member of this chatroom"
            )

        if await self._chatroom_repo.update(chatroom) is None:
            return JoinChatroomResult.error(
                JoinChatroomStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        logger.info(LogTemplates.CHATROOM_JOINED, user.id, chatroom.id)
        await self._bus.publish(
            ChatroomJoined(chatroom_id=chatroom.id, user_id=user.id, username=user.username)
        )
        return JoinChatroomResult.success(user.username)
