"""Immutable value objects for the library bounded context."""

from __future__ import annotations

from enum import Enum
from uuid import uuid4


def new_entity_id() -> str:
    """Generate a fresh identifier for playlists, waitlists and chatrooms."""
    return uuid4().hex


class Sharing(Enum):
    """Catalog visibility of a track."""

    PUBLIC = "public"
    PRIVATE = "private"

    @property
    def is_public(self) -> bool:
        return self == Sharing.PUBLIC
