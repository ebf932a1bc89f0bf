"""Core domain entities for the library bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from share_it.domain.library.value_objects import Sharing, new_entity_id
from share_it.domain.shared.messages import ErrorMessages
from share_it.domain.shared.types import (
    DurationMs,
    EntityIdStr,
    NonEmptyStr,
    PlaylistNameStr,
    SongIdInt,
    UserIdInt,
)


class Song(BaseModel):
    """Immutable value object describing a catalog track."""

    model_config = ConfigDict(frozen=True)

    id: SongIdInt
    user_id: UserIdInt
    duration_ms: DurationMs
    username: str
    title: NonEmptyStr
    sharing: Sharing = Sharing.PUBLIC
    permalink: str
    permalink_url: str
    artwork_url: str | None = None
    stream_url: str

    @property
    def duration_formatted(self) -> str:
        """Format duration as MM:SS or HH:MM:SS."""
        hours, remainder = divmod(self.duration_ms // 1000, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @property
    def display_title(self) -> str:
        return f"{self.title} [{self.duration_formatted}]"


class Playlist(BaseModel):
    """Ordered, cycling collection of songs. The front song plays next."""

    id: EntityIdStr = Field(default_factory=new_entity_id)
    name: PlaylistNameStr
    songs: list[Song] = Field(default_factory=list)

    @field_validator("songs")
    @classmethod
    def _unique_song_ids(cls, v: list[Song]) -> list[Song]:
        seen: set[int] = set()
        for song in v:
            if song.id in seen:
                raise ValueError(ErrorMessages.DUPLICATE_SONG_ID.format(song_id=song.id))
            seen.add(song.id)
        return v

    def __len__(self) -> int:
        return len(self.songs)

    def contains_song(self, song_id: int) -> bool:
        return any(s.id == song_id for s in self.songs)

    def add(self, song: Song) -> bool:
        """Append a song unless one with the same id is already present."""
        if self.contains_song(song.id):
            return False
        self.songs.append(song)
        return True

    def remove(self, song_id: int) -> bool:
        """Remove the song with the given id, if present."""
        for index, song in enumerate(self.songs):
            if song.id == song_id:
                del self.songs[index]
                return True
        return False

    def top_song(self) -> Song | None:
        """Look at the next song without removing it."""
        return self.songs[0] if self.songs else None

    def cycle(self) -> None:
        """Move the front song to the back of the playlist."""
        if self.songs:
            self.songs.append(self.songs.pop(0))


class User(BaseModel):
    """Aggregate root owning a user's playlists and active playlist selection."""

    id: UserIdInt
    username: NonEmptyStr
    avatar_url: str = ""
    permalink_url: str = ""
    active_playlist_id: EntityIdStr | None = None
    playlists: dict[str, Playlist] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _keys_match_playlist_ids(self) -> User:
        """Each playlist is stored under its own id."""
        for key, playlist in self.playlists.items():
            if key != playlist.id:
                raise ValueError(
                    ErrorMessages.PLAYLIST_KEY_MISMATCH.format(key=key, playlist_id=playlist.id)
                )
        return self

    @property
    def playlist_count(self) -> int:
        return len(self.playlists)

    @property
    def active_playlist(self) -> Playlist | None:
        if self.active_playlist_id is None:
            return None
        return self.playlists.get(self.active_playlist_id)

    def get_playlist(self, playlist_id: str) -> Playlist | None:
        return self.playlists.get(playlist_id)

    def add_playlist(self, playlist: Playlist) -> bool:
        """Add a playlist unless one with the same id already exists."""
        if playlist.id in self.playlists:
            return False
        self.playlists[playlist.id] = playlist
        return True

    def remove_playlist(self, playlist_id: str) -> Playlist | None:
        """Remove a playlist, clearing the active selection if it pointed at it."""
        playlist = self.playlists.pop(playlist_id, None)
        if playlist is not None and self.active_playlist_id == playlist_id:
            self.active_playlist_id = None
        return playlist

    def set_active_playlist(self, playlist_id: str) -> bool:
        """Select one of this user's playlists as the source of their turns."""
        if playlist_id not in self.playlists:
            return False
        self.active_playlist_id = playlist_id
        return True

    def clear_active_playlist(self) -> None:
        self.active_playlist_id = None

    def cycle_playlist(self, playlist_id: str) -> None:
        """Rotate the named playlist in place; unknown ids are ignored."""
        playlist = self.playlists.get(playlist_id)
        if playlist is not None:
            playlist.cycle()
