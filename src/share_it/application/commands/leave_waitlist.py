"""Command and handler for giving up a waitlist slot."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from share_it.domain.shared.events import DjLeftWaitlist, get_event_bus
from share_it.domain.shared.messages import LogTemplates
from share_it.domain.shared.types import EntityIdStr, UserIdInt

if TYPE_CHECKING:
    from ...domain.library.repository import UserRepository
    from ...domain.rooms.repository import ChatroomRepository
    from ...domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class LeaveWaitlistStatus(Enum):
    SUCCESS = "success"
    NOT_QUEUED = "not_queued"
    CHATROOM_NOT_FOUND = "chatroom_not_found"
    USER_NOT_FOUND = "user_not_found"


class LeaveWaitlistCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    chatroom_id: EntityIdStr
    user_id: UserIdInt


class LeaveWaitlistResult(BaseModel):

    status: LeaveWaitlistStatus
    message: str

    @property
    def is_success(self) -> bool:
        return self.status == LeaveWaitlistStatus.SUCCESS

    @classmethod
    def success(cls) -> LeaveWaitlistResult:
        return cls(status=LeaveWaitlistStatus.SUCCESS, message="Left the waitlist.")

    @classmethod
    def error(cls, status: LeaveWaitlistStatus, message: str) -> LeaveWaitlistResult:
        return cls(status=status, message=message)


class LeaveWaitlistHandler:

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

    async def handle(self, command: LeaveWaitlistCommand) -> LeaveWaitlistResult:
        chatroom = await self._chatroom_repo.get(command.chatroom_id)
        if chatroom is None:
            return LeaveWaitlistResult.error(
                LeaveWaitlistStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        if not await self._user_repo.contains(command.user_id):
            return LeaveWaitlistResult.error(LeaveWaitlistStatus.USER_NOT_FOUND, "User not found")

        if not chatroom.leave_waitlist(command.user_id):
            return LeaveWaitlistResult.error(LeaveWaitlistStatus.NOT_QUEUED, "Not in the waitlist")

        if await self._chatroom_repo.update(chatroom) is None:
            return LeaveWaitlistResult.error(
                LeaveWaitlistStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        logger.info(LogTemplates.WAITLIST_LEFT, command.user_id, chatroom.id)
        await self._bus.publish(DjLeftWaitlist(chatroom_id=chatroom.id, user_id=command.user_id))
        return LeaveWaitlistResult.success()
