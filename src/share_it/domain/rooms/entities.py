"""Core domain entities for the rooms bounded context."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from share_it.domain.library.entities import Playlist, Song, User
from share_it.domain.library.value_objects import new_entity_id
from share_it.domain.rooms.value_objects import ChatUser, Dj
from share_it.domain.shared.messages import ErrorMessages, LogTemplates
from share_it.domain.shared.types import (
    ChatroomNameStr,
    EntityIdStr,
    NonNegativeInt,
    UserIdInt,
)

if TYPE_CHECKING:
    from share_it.domain.library.repository import UserRepository

logger = logging.getLogger(__name__)


def _first_duplicate_user(entries: list[Dj] | list[ChatUser]) -> int | None:
    seen: set[int] = set()
    for entry in entries:
        if entry.user_id in seen:
            return entry.user_id
        seen.add(entry.user_id)
    return None


class Waitlist(BaseModel):
    """Turn scheduler: an ordered queue of DJs taking turns to play a song.

    ``current_dj`` is a snapshot of the last valid turn-holder, kept only to
    know whose playlist to rotate on the next ``play_next`` call. It is never
    a live reference into storage.
    """

    id: EntityIdStr = Field(default_factory=new_entity_id)
    queue: list[Dj] = Field(default_factory=list)
    current_dj: User | None = None
    current_playlist_id: EntityIdStr | None = None

    _last_skipped: list[int] = PrivateAttr(default_factory=list)

    @field_validator("queue")
    @classmethod
    def _one_slot_per_user(cls, v: list[Dj]) -> list[Dj]:
        duplicate = _first_duplicate_user(v)
        if duplicate is not None:
            raise ValueError(ErrorMessages.DUPLICATE_DJ.format(user_id=duplicate))
        return v

    def __len__(self) -> int:
        return len(self.queue)

    def __str__(self) -> str:
        lines = ["Waitlist:"]
        lines.extend(f"{i}. {dj.username}" for i, dj in enumerate(self.queue, start=1))
        return "\n".join(lines)

    @property
    def last_skipped(self) -> tuple[int, ...]:
        """User ids skipped as invalid during the most recent ``play_next`` call."""
        return tuple(self._last_skipped)

    def contains(self, user_id: int) -> bool:
        return any(dj.user_id == user_id for dj in self.queue)

    def djs(self) -> tuple[Dj, ...]:
        return tuple(self.queue)

    def join(self, dj: Dj) -> bool:
        """Append a DJ to the back of the queue; a user holds at most one slot."""
        if self.contains(dj.user_id):
            return False
        self.queue.append(dj)
        return True

    def leave(self, user_id: int) -> bool:
        for index, dj in enumerate(self.queue):
            if dj.user_id == user_id:
                del self.queue[index]
                return True
        return False

    async def play_next(self, users: UserRepository) -> Song | None:
        """Advance the rotation and return the next song to play.

        The previous turn-holder's slot is popped and their playlist rotated
        and written back before the next DJ is looked up. The pop is not
        undone if that write fails: a ``PersistenceError`` propagates with
        the queue already advanced.

        Front entries whose user is missing, has no active playlist, or
        points at a playlist it does not own are skipped. Skipping does not
        refresh ``current_dj``, so the skipped entry is popped on the next
        loop iteration together with another rotate-and-persist of the last
        valid DJ's cached snapshot.

        Once the queue runs out, ``current_dj`` and ``current_playlist_id``
        are cleared as well, where a plain pop-and-rotate loop would leave
        them set. With a stale snapshot cached, the next DJ to join an idle
        waitlist would be popped before their first turn.

        Returns:
            The top song of the next valid DJ's active playlist (left in
            place until the following call), or None once the queue is empty.
        """
        self._last_skipped = []

        while True:
            if not self.queue:
                self._reset_turn()
                logger.info(LogTemplates.WAITLIST_EXHAUSTED, self.id)
                return None

            if self.current_dj is not None:
                self.queue.pop(0)
                if self.current_playlist_id is not None:
                    self.current_dj.cycle_playlist(self.current_playlist_id)
                    stored = await users.update(self.current_dj)
                    if stored is None:
                        logger.warning(
                            LogTemplates.WAITLIST_ROTATION_LOST, self.id, self.current_dj.id
                        )

            if not self.queue:
                self._reset_turn()
                logger.info(LogTemplates.WAITLIST_EXHAUSTED, self.id)
                return None

            front = self.queue[0]
            user = await users.get(front.user_id)
            playlist = self._playable_playlist(front, user)

            if user is None or playlist is None:
                self._last_skipped.append(front.user_id)
                if self.current_dj is None:
                    # Nothing cached to pop it on the next pass.
                    logger.info(LogTemplates.WAITLIST_DROP_INVALID_FIRST, self.id, front.user_id)
                    self.queue.pop(0)
                continue

            self.current_dj = user
            self.current_playlist_id = playlist.id
            song = playlist.top_song()
            logger.info(
                LogTemplates.WAITLIST_TURN_STARTED,
                self.id,
                user.id,
                song.id if song is not None else None,
            )
            return song

    def _reset_turn(self) -> None:
        self.current_dj = None
        self.current_playlist_id = None

    def _playable_playlist(self, front: Dj, user: User | None) -> Playlist | None:
        if user is None:
            logger.info(LogTemplates.WAITLIST_SKIP_MISSING_USER, self.id, front.user_id)
            return None

        if user.active_playlist_id is None:
            logger.info(LogTemplates.WAITLIST_SKIP_NO_ACTIVE_PLAYLIST, self.id, user.id)
            return None

        playlist = user.get_playlist(user.active_playlist_id)
        if playlist is None:
            logger.info(
                LogTemplates.WAITLIST_SKIP_DANGLING_PLAYLIST,
                self.id,
                user.id,
                user.active_playlist_id,
            )
        return playlist


class Chatroom(BaseModel):
    """Aggregate root: room roster, moderator and the embedded waitlist.

    Stored and rewritten as a whole after each mutating command.
    """

    id: EntityIdStr = Field(default_factory=new_entity_id)
    name: ChatroomNameStr
    moderator_id: UserIdInt
    members: list[ChatUser] = Field(default_factory=list)
    waitlist: Waitlist = Field(default_factory=Waitlist)

    # Version for optimistic concurrency
    version: NonNegativeInt = 0

    @field_validator("members")
    @classmethod
    def _one_entry_per_user(cls, v: list[ChatUser]) -> list[ChatUser]:
        duplicate = _first_duplicate_user(v)
        if duplicate is not None:
            raise ValueError(ErrorMessages.DUPLICATE_MEMBER.format(user_id=duplicate))
        return v

    @classmethod
    def create(cls, name: str, creating_user_id: int) -> Chatroom:
        """Create a room with an empty waitlist, moderated by its creator."""
        return cls(name=name, moderator_id=creating_user_id)

    def __len__(self) -> int:
        return len(self.members)

    def is_member(self, user_id: int) -> bool:
        return any(member.user_id == user_id for member in self.members)

    def is_moderator(self, user_id: int) -> bool:
        return self.moderator_id == user_id

    def join(self, user: ChatUser) -> bool:
        if self.is_member(user.user_id):
            return False
        self.members.append(user)
        return True

    def leave(self, user_id: int) -> bool:
        before = len(self.members)
        self.members = [m for m in self.members if m.user_id != user_id]
        return len(self.members) != before

    def change_moderator(self, user_id: int) -> None:
        self.moderator_id = user_id

    def join_waitlist(self, user_id: int) -> bool:
        """Queue a roster member as a DJ, using the username stored in the roster."""
        matches = [m for m in self.members if m.user_id == user_id]
        if len(matches) != 1:
            return False
        return self.waitlist.join(matches[0].as_dj())

    def leave_waitlist(self, user_id: int) -> bool:
        return self.waitlist.leave(user_id)

    def waitlist_djs(self) -> tuple[Dj, ...]:
        return self.waitlist.djs()

    async def play_next(self, users: UserRepository) -> Song | None:
        return await self.waitlist.play_next(users)
