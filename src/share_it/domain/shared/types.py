"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across bounded contexts is defined here once,
so models can simply annotate their fields::

    from share_it.domain.shared.types import NonEmptyStr, UserIdInt

    class MyModel(BaseModel):
        user_id: UserIdInt
        name: NonEmptyStr
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

UserIdInt = Annotated[int, Field(ge=0, lt=2**32)]
"""Catalog user id: 0 … 2^32-1."""

SongIdInt = Annotated[int, Field(ge=0, lt=2**32)]
"""Catalog track id: 0 … 2^32-1."""

DurationMs = Annotated[int, Field(ge=0)]
"""Track duration in milliseconds."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

ChatroomNameStr = Annotated[str, Field(min_length=1, max_length=100)]
"""Chatroom display name: 1-100 characters."""

PlaylistNameStr = Annotated[str, Field(min_length=1, max_length=200)]
"""Playlist display name: 1-200 characters."""

EntityIdStr = Annotated[str, Field(min_length=1, max_length=64)]
"""Generated entity identifier (playlist, waitlist, chatroom)."""


# ── Settings-specific constraints ──────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""Database busy timeout in milliseconds: 1 000 … 30 000."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]
"""Database connection timeout in seconds: 1 … 60."""


# ── Datetime constraints ────────────────────────────────────────────

def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if v.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return v.astimezone(UTC)


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""
