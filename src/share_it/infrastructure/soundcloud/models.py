"""Pydantic models for SoundCloud catalog API responses.

Only the fields the library needs are declared; anything else in the
payload is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from share_it.domain.library.entities import Song, User
from share_it.domain.library.value_objects import Sharing
from share_it.domain.shared.types import NonEmptyStr


class SoundcloudTrackUser(BaseModel):
    """Compact user object embedded in a track payload."""

    model_config = ConfigDict(extra="ignore")

    id: int
    username: str
    permalink_url: str = ""
    avatar_url: str = ""


class SoundcloudTrack(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    user_id: int
    duration_ms: int = Field(alias="duration")
    sharing: Sharing = Sharing.PUBLIC
    title: NonEmptyStr
    permalink: str
    permalink_url: str
    artwork_url: str | None = None
    stream_url: str
    user: SoundcloudTrackUser

    def to_song(self) -> Song:
        return Song(
            id=self.id,
            user_id=self.user_id,
            duration_ms=self.duration_ms,
            username=self.user.username,
            title=self.title,
            sharing=self.sharing,
            permalink=self.permalink,
            permalink_url=self.permalink_url,
            artwork_url=self.artwork_url,
            stream_url=self.stream_url,
        )


class SoundcloudUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    username: NonEmptyStr
    uri: str
    permalink_url: str
    avatar_url: str

    def to_user(self) -> User:
        """Map to a library user with no playlists yet."""
        return User(
            id=self.id,
            username=self.username,
            avatar_url=self.avatar_url,
            permalink_url=self.permalink_url,
        )
