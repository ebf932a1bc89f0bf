"""Tests for mapping SoundCloud API payloads onto library entities."""

import json

import pytest
from pydantic import ValidationError

from share_it.domain.library.value_objects import Sharing
from share_it.infrastructure.soundcloud import SoundcloudTrack, SoundcloudUser

TRACK_PAYLOAD = """
{
    "id": 13158665,
    "created_at": "2011/04/06 15:37:43 +0000",
    "user_id": 3699101,
    "duration": 18109,
    "commentable": true,
    "state": "finished",
    "sharing": "public",
    "tag_list": "soundcloud:source=iphone-record",
    "permalink": "munching-at-tiannas-house",
    "description": null,
    "streamable": true,
    "downloadable": true,
    "genre": null,
    "track_type": "recording",
    "title": "Munching at Tiannas house",
    "original_format": "m4a",
    "original_content_size": 10211857,
    "license": "all-rights-reserved",
    "uri": "https://api.soundcloud.com/tracks/13158665",
    "permalink_url": "https://soundcloud.com/user2835985/munching-at-tiannas-house",
    "artwork_url": null,
    "waveform_url": "https://w1.sndcdn.com/fxguEjG4ax6B_m.png",
    "user": {
        "id": 3699101,
        "permalink": "user2835985",
        "username": "user2835985",
        "uri": "https://api.soundcloud.com/users/3699101",
        "permalink_url": "https://soundcloud.com/user2835985",
        "avatar_url": "https://a1.sndcdn.com/images/default_avatar_large.png?142a848"
    },
    "stream_url": "https://api.soundcloud.com/tracks/13158665/stream",
    "download_url": "https://api.soundcloud.com/tracks/13158665/download",
    "playback_count": 0,
    "favoritings_count": 0,
    "comment_count": 0
}
"""

USER_PAYLOAD = """
{
    "id": 3207,
    "permalink": "jwagener",
    "username": "Johannes Wagener",
    "uri": "https://api.soundcloud.com/users/3207",
    "permalink_url": "https://soundcloud.com/jwagener",
    "avatar_url": "https://i1.sndcdn.com/avatars-000001552142-pbw8yd-large.jpg?142a848",
    "country": "Germany",
    "full_name": "Johannes Wagener",
    "city": "Berlin",
    "discogs_name": null,
    "online": true,
    "track_count": 12,
    "playlist_count": 1,
    "followers_count": 416,
    "plan": "Pro Plus"
}
"""


class TestSoundcloudTrack:
    def test_parse_ignores_unknown_fields(self):
        track = SoundcloudTrack.model_validate_json(TRACK_PAYLOAD)

        assert track.id == 13158665
        assert track.duration_ms == 18109
        assert track.sharing is Sharing.PUBLIC
        assert track.user.username == "user2835985"

    def test_to_song(self):
        song = SoundcloudTrack.model_validate_json(TRACK_PAYLOAD).to_song()

        assert song.id == 13158665
        assert song.user_id == 3699101
        assert song.username == "user2835985"
        assert song.title == "Munching at Tiannas house"
        assert song.artwork_url is None
        assert song.stream_url.endswith("/13158665/stream")
        assert song.duration_formatted == "0:18"

    def test_private_track(self):
        data = json.loads(TRACK_PAYLOAD)
        data["sharing"] = "private"

        song = SoundcloudTrack.model_validate(data).to_song()

        assert song.sharing is Sharing.PRIVATE

    def test_unknown_sharing_rejected(self):
        data = json.loads(TRACK_PAYLOAD)
        data["sharing"] = "friends"

        with pytest.raises(ValidationError):
            SoundcloudTrack.model_validate(data)

    def test_missing_required_field(self):
        data = json.loads(TRACK_PAYLOAD)
        del data["stream_url"]

        with pytest.raises(ValidationError):
            SoundcloudTrack.model_validate(data)

    def test_empty_title_rejected(self):
        data = json.loads(TRACK_PAYLOAD)
        data["title"] = ""

        with pytest.raises(ValidationError):
            SoundcloudTrack.model_validate(data)


class TestSoundcloudUser:
    def test_parse(self):
        user = SoundcloudUser.model_validate_json(USER_PAYLOAD)

        assert user.id == 3207
        assert user.username == "Johannes Wagener"
        assert user.uri == "https://api.soundcloud.com/users/3207"

    def test_to_user_starts_without_playlists(self):
        user = SoundcloudUser.model_validate_json(USER_PAYLOAD).to_user()

        assert user.id == 3207
        assert user.permalink_url == "https://soundcloud.com/jwagener"
        assert user.playlist_count == 0
        assert user.active_playlist is None

    def test_empty_username_rejected(self):
        data = json.loads(USER_PAYLOAD)
        data["username"] = ""

        with pytest.raises(ValidationError):
            SoundcloudUser.model_validate(data)
