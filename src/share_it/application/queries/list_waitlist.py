"""Query for listing the DJs queued in a chatroom."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from share_it.domain.rooms.value_objects import Dj
from share_it.domain.shared.types import EntityIdStr, UserIdInt

if TYPE_CHECKING:
    from ...domain.rooms.repository import ChatroomRepository


class ListWaitlistQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    chatroom_id: EntityIdStr


class WaitlistInfo(BaseModel):

    chatroom_id: EntityIdStr
    djs: list[Dj] = Field(default_factory=list)
    current_dj_id: UserIdInt | None = None
    display: str = "Waitlist:"

    @property
    def length(self) -> int:
        return len(self.djs)

    @property
    def is_empty(self) -> bool:
        return len(self.djs) == 0


class ListWaitlistHandler:

    def __init__(self, *, chatroom_repository: ChatroomRepository) -> None:
        self._chatroom_repo = chatroom_repository

    async def handle(self, query: ListWaitlistQuery) -> WaitlistInfo | None:
        """Return the queue in turn order, or None when the room does not exist."""
        chatroom = await self._chatroom_repo.get(query.chatroom_id)
        if chatroom is None:
            return None

        waitlist = chatroom.waitlist
        return WaitlistInfo(
            chatroom_id=chatroom.id,
            djs=list(chatroom.waitlist_djs()),
            current_dj_id=waitlist.current_dj.id if waitlist.current_dj is not None else None,
            display=str(waitlist),
        )
