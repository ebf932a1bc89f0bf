"""
Play Next Command

Command and handler for advancing a chatroom's DJ rotation by one turn.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from share_it.domain.library.entities import Song
from share_it.domain.shared.events import (
    DjSkipped,
    DjTurnStarted,
    DomainEvent,
    WaitlistExhausted,
    get_event_bus,
)
from share_it.domain.shared.messages import LogTemplates
from share_it.domain.shared.types import EntityIdStr, UserIdInt

if TYPE_CHECKING:
    from ...domain.library.repository import UserRepository
    from ...domain.rooms.repository import ChatroomRepository
    from ...domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class PlayNextStatus(Enum):
    SUCCESS = "success"
    WAITLIST_EMPTY = "waitlist_empty"
    NOT_MODERATOR = "not_moderator"
    CHATROOM_NOT_FOUND = "chatroom_not_found"


class PlayNextCommand(BaseModel):
    """Advance the rotation.

    ``user_id`` is the requester; when given, only the room's moderator may
    advance it. Internal callers (a track-finished timer, for instance)
    leave it unset.
    """

    model_config = ConfigDict(frozen=True)

    chatroom_id: EntityIdStr
    user_id: UserIdInt | None = None


class PlayNextResult(BaseModel):

    status: PlayNextStatus
    message: str
    song: Song | None = None
    dj_user_id: UserIdInt | None = None
    skipped_user_ids: list[UserIdInt] = Field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.status == PlayNextStatus.SUCCESS

    @classmethod
    def success(
        cls, dj_user_id: int, song: Song | None, skipped_user_ids: list[int]
    ) -> PlayNextResult:
        if song is not None:
            message = f"Now playing: {song.display_title}"
        else:
            message = "The current DJ has no songs in their active playlist."

        return cls(
            status=PlayNextStatus.SUCCESS,
            message=message,
            song=song,
            dj_user_id=dj_user_id,
            skipped_user_ids=skipped_user_ids,
        )

    @classmethod
    def exhausted(cls, skipped_user_ids: list[int] | None = None) -> PlayNextResult:
        return cls(
            status=PlayNextStatus.WAITLIST_EMPTY,
            message="The waitlist is empty.",
            skipped_user_ids=skipped_user_ids or [],
        )

    @classmethod
    def error(cls, status: PlayNextStatus, message: str) -> PlayNextResult:
        return cls(status=status, message=message)


class PlayNextHandler:
    """Handler for PlayNextCommand.

    Runs one ``play_next`` step on the room's waitlist and stores the
    chatroom. Playlist rotation is written to the user repository by the
    waitlist itself; if the chatroom write then fails, that rotation stays.
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

    async def handle(self, command: PlayNextCommand) -> PlayNextResult:
        """Execute the play next command.

        Args:
            command: The play next command.

        Returns:
            The result of the operation.
        """
        chatroom = await self._chatroom_repo.get(command.chatroom_id)
        if chatroom is None:
            return PlayNextResult.error(PlayNextStatus.CHATROOM_NOT_FOUND, "Chatroom not found")

        if command.user_id is not None and not chatroom.is_moderator(command.user_id):
            logger.info(LogTemplates.PLAY_NEXT_DENIED, command.user_id, chatroom.id)
            return PlayNextResult.error(
                PlayNextStatus.NOT_MODERATOR, "Only the moderator can play the next song"
            )

        waitlist = chatroom.waitlist
        if len(waitlist) == 0 and waitlist.current_dj is None:
            return PlayNextResult.exhausted()

        song = await chatroom.play_next(self._user_repo)
        skipped = list(waitlist.last_skipped)

        if await self._chatroom_repo.update(chatroom) is None:
            return PlayNextResult.error(PlayNextStatus.CHATROOM_NOT_FOUND, "Chatroom not found")

        events: list[DomainEvent] = [
            DjSkipped(chatroom_id=chatroom.id, user_id=user_id) for user_id in skipped
        ]

        if waitlist.current_dj is None:
            events.append(WaitlistExhausted(chatroom_id=chatroom.id))
            await self._bus.publish_all(events)
            return PlayNextResult.exhausted(skipped)

        dj_user_id = waitlist.current_dj.id
        events.append(
            DjTurnStarted(
                chatroom_id=chatroom.id,
                user_id=dj_user_id,
                song_id=song.id if song is not None else None,
                song_title=song.title if song is not None else "",
            )
        )
        await self._bus.publish_all(events)
        return PlayNextResult.success(dj_user_id, song, skipped)
