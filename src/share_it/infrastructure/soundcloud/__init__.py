"""SoundCloud catalog response models."""

from share_it.infrastructure.soundcloud.models import (
    SoundcloudTrack,
    SoundcloudTrackUser,
    SoundcloudUser,
)

__all__ = ["SoundcloudTrack", "SoundcloudTrackUser", "SoundcloudUser"]
