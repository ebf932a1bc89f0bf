"""
Library Bounded Context

Songs, cycling playlists and the user aggregate that owns them.
"""

from share_it.domain.library.entities import Playlist, Song, User
from share_it.domain.library.repository import UserRepository
from share_it.domain.library.value_objects import Sharing, new_entity_id

__all__ = [
    # Entities
    "Song",
    "Playlist",
    "User",
    # Value Objects
    "Sharing",
    "new_entity_id",
    # Repository
    "UserRepository",
]
