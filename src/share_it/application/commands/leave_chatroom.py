"""Command and handler for leaving a chatroom's roster."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from share_it.domain.shared.events import ChatroomLeft, get_event_bus
from share_it.domain.shared.messages import LogTemplates
from share_it.domain.shared.types import EntityIdStr, UserIdInt

if TYPE_CHECKING:
    from ...domain.rooms.repository import ChatroomRepository
    from ...domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class LeaveChatroomStatus(Enum):
    SUCCESS = "success"
    NOT_A_MEMBER = "not_a_member"
    CHATROOM_NOT_FOUND = "chatroom_not_found"


class LeaveChatroomCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    chatroom_id: EntityIdStr
    user_id: UserIdInt


class LeaveChatroomResult(BaseModel):

    status: LeaveChatroomStatus
    message: str

    @property
    def is_success(self) -> bool:
        return self.status == LeaveChatroomStatus.SUCCESS

    @classmethod
    def success(cls) -> LeaveChatroomResult:
        return cls(status=LeaveChatroomStatus.SUCCESS, message="Left the room.")

    @classmethod
    def error(cls, status: LeaveChatroomStatus, message: str) -> LeaveChatroomResult:
        return cls(status=status, message=message)


class LeaveChatroomHandler:
    """Removes a user from the roster.

    A waitlist slot held by the user is left in place; the scheduler skips
    or plays it like any other entry.
    """

    def __init__(
        self,
        *,
        chatroom_repository: ChatroomRepository,
        event_bus: EventBus | None = None,
    ) -> None:
        self._chatroom_repo = chatroom_repository
        self._bus = event_bus if event_bus is not None else get_event_bus()

    async def handle(self, command: LeaveChatroomCommand) -> LeaveChatroomResult:
        chatroom = await self._chatroom_repo.get(command.chatroom_id)
        if chatroom is None:
            return LeaveChatroomResult.error(
                LeaveChatroomStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        if not chatroom.leave(command.user_id):
            return LeaveChatroomResult.error(
                LeaveChatroomStatus.NOT_A_MEMBER, "Not a member of this chatroom"
            )

        if await self._chatroom_repo.update(chatroom) is None:
            return LeaveChatroomResult.error(
                LeaveChatroomStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        logger.info(LogTemplates.CHATROOM_LEFT, command.user_id, chatroom.id)
        await self._bus.publish(ChatroomLeft(chatroom_id=chatroom.id, user_id=command.user_id))
        return LeaveChatroomResult.success()
