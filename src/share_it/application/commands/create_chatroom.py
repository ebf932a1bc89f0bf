"""Command and handler for opening a new chatroom."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from share_it.domain.rooms.entities import Chatroom
from share_it.domain.shared.events import ChatroomCreated, get_event_bus
from share_it.domain.shared.messages import LogTemplates
from share_it.domain.shared.types import ChatroomNameStr, EntityIdStr, UserIdInt

if TYPE_CHECKING:
    from ...domain.rooms.repository import ChatroomRepository
    from ...domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class CreateChatroomStatus(Enum):
    SUCCESS = "success"
    ALREADY_EXISTS = "already_exists"


class CreateChatroomCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: ChatroomNameStr
    creating_user_id: UserIdInt


class CreateChatroomResult(BaseModel):

    status: CreateChatroomStatus
    message: str
    chatroom_id: EntityIdStr | None = None

    @property
    def is_success(self) -> bool:
        return self.status == CreateChatroomStatus.SUCCESS

    @classmethod
    def success(cls, chatroom: Chatroom) -> CreateChatroomResult:
        return cls(
            status=CreateChatroomStatus.SUCCESS,
            message=f"Created chatroom {chatroom.name}.",
            chatroom_id=chatroom.id,
        )

    @classmethod
    def error(cls, status: CreateChatroomStatus, message: str) -> CreateChatroomResult:
        return cls(status=status, message=message)


class CreateChatroomHandler:
    """Creates a chatroom moderated by the requesting user.

    The creator is not added to the roster; they join like anyone else.
    """

    def __init__(
        self,
        *,
        chatroom_repository: ChatroomRepository,
        event_bus: EventBus | None = None,
    ) -> None:
        self._chatroom_repo = chatroom_repository
        self._bus = event_bus if event_bus is not None else get_event_bus()

    async def handle(self, command: CreateChatroomCommand) -> CreateChatroomResult:
        chatroom = Chatroom.create(command.name, command.creating_user_id)

        if await self._chatroom_repo.insert(chatroom) is None:
            return CreateChatroomResult.error(
                CreateChatroomStatus.ALREADY_EXISTS, "A chatroom with this id already exists"
            )

        logger.info(
            LogTemplates.CHATROOM_CREATED, chatroom.id, chatroom.name, command.creating_user_id
        )
        await self._bus.publish(
            ChatroomCreated(
                chatroom_id=chatroom.id,
                name=chatroom.name,
                moderator_id=chatroom.moderator_id,
            )
        )
        return CreateChatroomResult.success(chatroom)
