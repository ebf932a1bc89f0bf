"""Immutable value objects for the rooms bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from share_it.domain.shared.types import NonEmptyStr, UserIdInt


class Dj(BaseModel):
    """A waitlist slot: the identity of a user waiting for their turn."""

    model_config = ConfigDict(frozen=True)

    user_id: UserIdInt
    username: NonEmptyStr

    def __str__(self) -> str:
        return self.username


class ChatUser(BaseModel):
    """A chatroom roster entry."""

    model_config = ConfigDict(frozen=True)

    user_id: UserIdInt
    username: NonEmptyStr

    def as_dj(self) -> Dj:
        return Dj(user_id=self.user_id, username=self.username)
