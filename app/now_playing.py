"""Now-playing resolution. All Spotify calls are strictly sequential.

Cascade:
  1. Refresh the access token (failure → SpotifyAPIError)
  2. GET /me/player/currently-playing
  3. 204 or ≥ 400 → GET /me/player/recently-played?limit=1
  4. Nothing usable → NoActivity placeholder
"""

from __future__ import annotations

import logging

from app.spotify_client import (
    SpotifyHTTP,
    get_currently_playing,
    get_recently_played,
    refresh_access_token,
)
from core.models import Credentials, NoActivity, PlaybackState
from core.playback import (
    NO_RECENT_ACTIVITY,
    playing_from_current,
    recently_played_from_history,
)

logger = logging.getLogger(__name__)


async def resolve_playback(http: SpotifyHTTP, credentials: Credentials) -> PlaybackState:
    """Return exactly one playback state for the account behind *credentials*."""
    grant = await refresh_access_token(http, credentials)

    current = await get_currently_playing(http, grant.access_token)
    if current.status_code == 204 or current.status_code >= 400:
        if current.status_code >= 400:
            # Same path as 204; logged so provider failures stay visible.
            logger.warning(
                "currently-playing returned %d, falling back to history",
                current.status_code,
            )
        state = await _from_history(http, grant.access_token)
    else:
        state = playing_from_current(current.body)

    logger.debug("Resolved playback state: %s", state.kind)
    return state


async def _from_history(http: SpotifyHTTP, access_token: str) -> PlaybackState:
    recent = await get_recently_played(http, access_token)
    if recent.ok:
        state = recently_played_from_history(recent.body)
        if state is not None:
            return state
    return NoActivity(message=NO_RECENT_ACTIVITY)
