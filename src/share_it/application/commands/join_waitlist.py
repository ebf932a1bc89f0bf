"""Command and handler for queueing a room member as a DJ."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from share_it.domain.shared.events import DjJoinedWaitlist, get_event_bus
from share_it.domain.shared.messages import LogTemplates
from share_it.domain.shared.types import EntityIdStr, NonNegativeInt, UserIdInt

if TYPE_CHECKING:
    from ...domain.library.repository import UserRepository
    from ...domain.rooms.repository import ChatroomRepository
    from ...domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class JoinWaitlistStatus(Enum):
    SUCCESS = "success"
    ALREADY_QUEUED = "already_queued"
    NOT_A_MEMBER = "not_a_member"
    CHATROOM_NOT_FOUND = "chatroom_not_found"
    USER_NOT_FOUND = "user_not_found"


class JoinWaitlistCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    chatroom_id: EntityIdStr
    user_id: UserIdInt


class JoinWaitlistResult(BaseModel):

    status: JoinWaitlistStatus
    message: str
    position: NonNegativeInt | None = None

    @property
    def is_success(self) -> bool:
        return self.status == JoinWaitlistStatus.SUCCESS

    @classmethod
    def success(cls, position: int) -> JoinWaitlistResult:
        return cls(
            status=JoinWaitlistStatus.SUCCESS,
            message=f"Joined the waitlist at position {position}.",
            position=position,
        )

    @classmethod
    def error(cls, status: JoinWaitlistStatus, message: str) -> JoinWaitlistResult:
        return cls(status=status, message=message)


class JoinWaitlistHandler:
    """Appends a roster member to the back of the room's waitlist.

    ``position`` in the result is 1-based.
    """

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

    async def handle(self, command: JoinWaitlistCommand) -> JoinWaitlistResult:
        chatroom = await self._chatroom_repo.get(command.chatroom_id)
        if chatroom is None:
            return JoinWaitlistResult.error(
                JoinWaitlistStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        if not await self._user_repo.contains(command.user_id):
            return JoinWaitlistResult.error(JoinWaitlistStatus.USER_NOT_FOUND, "User not found")

        if not chatroom.is_member(command.user_id):
            return JoinWaitlistResult.error(
                JoinWaitlistStatus.NOT_A_MEMBER, "Join the chatroom before the waitlist"
            )

        if not chatroom.join_waitlist(command.user_id):
            return JoinWaitlistResult.error(
                JoinWaitlistStatus.ALREADY_QUEUED, "Already in the waitlist"
            )

        position = len(chatroom.waitlist)
        if await self._chatroom_repo.update(chatroom) is None:
            return JoinWaitlistResult.error(
                JoinWaitlistStatus.CHATROOM_NOT_FOUND, "Chatroom not found"
            )

        logger.info(LogTemplates.WAITLIST_JOINED, command.user_id, chatroom.id)
        await self._bus.publish(
            DjJoinedWaitlist(chatroom_id=chatroom.id, user_id=command.user_id, position=position)
        )
        return JoinWaitlistResult.success(position)
