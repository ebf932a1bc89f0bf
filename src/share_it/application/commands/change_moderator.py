"""Command and handler for handing a chatroom's moderation to another member."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from share_it.domain.shared.events import ModeratorChanged, get_event_bus
from share_it.domain.shared.messages import LogTemplates
from share_it.domain.shared.types import EntityIdStr, UserIdInt

if TYPE_CHECKING:
    from ...domain.rooms.repository import ChatroomRepository
    from ...domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class ChangeModeratorStatus(Enum):
    SUCCESS = "success"
    ALREADY_MODERATOR = "already_moderator"
    NOT_A_MEMBER = "not_a_member"
    CHATROOM_NOT_FOUND = "chatroom_not_found"


class ChangeModeratorCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    chatroom_id: EntityIdStr
    moderator_id: UserIdInt


class ChangeModeratorResult(BaseModel):

    status: ChangeModeratorStatus
    message: str

    @property
    def is_success(self) -> bool:
        return self.status == ChangeModeratorStatus.SUCCESS

    @classmethod
    def success(cls, moderator_id: int) -> ChangeModeratorResult:
        return cls(
            status=ChangeModeratorStatus.SUCCESS,
            message=f"User {moderator_id} is now the moderator.",
        )

    @classmethod
    def error(cls, status: ChangeModeratorStatus, message: str) -> ChangeModeratorResult:
        return cls(status=status, message=message)


class ChangeModeratorHandler:
    """Makes a roster member the room's moderator."""

    def __init__(
        self,
        *,
        chatroom_repository: ChatroomRepository,
        event_bus: EventBus | None = None,
    ) -> None:
        self._chatroom_repo = chatroom_repository
        self._bus = event_bus if event_bus is not None else get_event_bus()

    async def handle(self, command: ChangeModeratorCommand) -> ChangeModeratorResult:
        chatroom = await self._chatroom_repo.get(command.chatroom_id)
        if chatroom is None:
            return ChangeModeratorResult.error(
                ChangeModeratorStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        if chatroom.is_moderator(command.moderator_id):
            return ChangeModeratorResult.error(
                ChangeModeratorStatus.ALREADY_MODERATOR, "User already moderates this chatroom"
            )

        if not chatroom.is_member(command.moderator_id):
            return ChangeModeratorResult.error(
                ChangeModeratorStatus.NOT_A_MEMBER, "Only members can moderate a chatroom"
            )

        chatroom.change_moderator(command.moderator_id)
        if await self._chatroom_repo.update(chatroom) is None:
            return ChangeModeratorResult.error(
                ChangeModeratorStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        logger.info(LogTemplates.CHATROOM_MODERATOR_CHANGED, chatroom.id, command.moderator_id)
        await self._bus.publish(
            ModeratorChanged(chatroom_id=chatroom.id, moderator_id=command.moderator_id)
        )
        return ChangeModeratorResult.success(command.moderator_id)
