"""Normalize Spotify playback payloads into playback states.

Pure functions, no I/O:
- normalize_track             → TrackSnapshot from a Spotify track object
- playing_from_current        → Playing | NoActivity from /currently-playing
- recently_played_from_history → RecentlyPlayed | None from /recently-played
"""

from __future__ import annotations

from typing import Any, Optional, Union

from core.models import NoActivity, Playing, RecentlyPlayed, TrackSnapshot

NO_TRACK_PLAYING = "No track currently playing"
NO_RECENT_ACTIVITY = "No recent activity"


def normalize_track(track: dict[str, Any]) -> TrackSnapshot:
    """Map a Spotify track object onto a TrackSnapshot.

    ``artist`` joins every artist name in provider order; ``albumImageUrl``
    is the first album image, if the album has any.
    """
    album = track.get("album") or {}
    images = album.get("images") or []

    return TrackSnapshot(
        title=track.get("name"),
        artist=", ".join((a or {}).get("name") or "" for a in track.get("artists") or []),
        album=album.get("name"),
        album_image_url=images[0].get("url") if images else None,
        song_url=(track.get("external_urls") or {}).get("spotify"),
    )


def playing_from_current(body: Any) -> Union[Playing, NoActivity]:
    """Build the state for a successful /currently-playing response."""
    item = body.get("item") if isinstance(body, dict) else None
    if not isinstance(item, dict) or not item:
        return NoActivity(message=NO_TRACK_PLAYING)

    return Playing(
        track=normalize_track(item),
        progress=body.get("progress_ms"),
        duration=item.get("duration_ms"),
    )


def recently_played_from_history(body: Any) -> Optional[RecentlyPlayed]:
    """Return the newest history entry, or None when the history is empty."""
    items = body.get("items") if isinstance(body, dict) else None
    if not items or not isinstance(items, list):
        return None

    entry = items[0] or {}
    return RecentlyPlayed(
        track=normalize_track(entry.get("track") or {}),
        played_at=entry.get("played_at"),
    )
