"""Tests for payload normalization (core/playback.py)."""

from core.models import NoActivity, Playing, RecentlyPlayed
from core.playback import (
    NO_TRACK_PLAYING,
    normalize_track,
    playing_from_current,
    recently_played_from_history,
)


def _track(**overrides):
    track = {
        "name": "Song",
        "artists": [{"name": "A"}, {"name": "B"}, {"name": "C"}],
        "album": {"name": "Album", "images": [{"url": "big"}, {"url": "small"}]},
        "external_urls": {"spotify": "https://open.spotify.com/track/x"},
        "duration_ms": 1000,
    }
    track.update(overrides)
    return track


def test_normalize_joins_artists_in_order():
    assert normalize_track(_track()).artist == "A, B, C"


def test_normalize_picks_first_image():
    assert normalize_track(_track()).album_image_url == "big"


def test_normalize_without_images_omits_url():
    snap = normalize_track(_track(album={"name": "Album", "images": []}))
    assert snap.album_image_url is None
    assert "albumImageUrl" not in snap.to_payload()


def test_normalize_local_file_without_link():
    snap = normalize_track(_track(external_urls={}))
    payload = snap.to_payload()
    assert "songUrl" not in payload
    assert payload["title"] == "Song"


def test_playing_from_current_none_body():
    assert playing_from_current(None) == NoActivity(message=NO_TRACK_PLAYING)


def test_playing_from_current_null_item():
    assert isinstance(playing_from_current({"item": None, "progress_ms": 0}), NoActivity)


def test_playing_from_current_keeps_raw_milliseconds():
    state = playing_from_current({"progress_ms": 1234, "item": _track(duration_ms=98765)})
    assert isinstance(state, Playing)
    assert state.progress == 1234
    assert state.duration == 98765
    assert list(state.to_payload())[:2] == ["isPlaying", "title"]


def test_history_empty_returns_none():
    assert recently_played_from_history({"items": []}) is None
    assert recently_played_from_history(None) is None


def test_history_uses_first_entry_only():
    state = recently_played_from_history({
        "items": [
            {"track": _track(name="Newest"), "played_at": "2024-01-02T00:00:00Z"},
            {"track": _track(name="Older"), "played_at": "2024-01-01T00:00:00Z"},
        ]
    })
    assert isinstance(state, RecentlyPlayed)
    payload = state.to_payload()
    assert payload["title"] == "Newest"
    assert payload["playedAt"] == "2024-01-02T00:00:00Z"
    assert payload["isPlaying"] is False


def test_normalize_tolerates_null_artist_names():
    snap = normalize_track(_track(artists=[{"name": "A"}, {"name": None}, None]))
    assert snap.artist == "A, , "


def test_playing_from_current_non_object_body():
    assert playing_from_current([1]) == NoActivity(message=NO_TRACK_PLAYING)
    assert playing_from_current({"item": "not-a-track"}) == NoActivity(message=NO_TRACK_PLAYING)


def test_playing_without_timing_omits_fields():
    item = _track()
    del item["duration_ms"]
    payload = playing_from_current({"item": item}).to_payload()
    assert "progress" not in payload
    assert "duration" not in payload


def test_history_non_object_body_returns_none():
    assert recently_played_from_history(["x"]) is None
    assert recently_played_from_history({"items": "x"}) is None
