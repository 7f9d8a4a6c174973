"""Now-playing route: GET /api/spotify (plus CORS preflight)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from app.config import Settings, get_settings
from app.now_playing import resolve_playback
from app.spotify_client import SpotifyAPIError, SpotifyHTTP, get_spotify_http

logger = logging.getLogger(__name__)

router = APIRouter(tags=["now-playing"])

# Sent on every response, errors included.
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@router.options("/api/spotify")
async def now_playing_preflight():
    """Answer CORS preflight without touching config or Spotify."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.get("/api/spotify")
async def now_playing(
    settings: Settings = Depends(get_settings),
    http: SpotifyHTTP = Depends(get_spotify_http),
):
    """Report the current (or most recent) track for the configured account."""
    missing = settings.missing_credentials()
    if missing:
        logger.error("Missing configuration: %s", ", ".join(missing))
        return JSONResponse(
            {
                "error": "Missing environment variables",
                "message": "Please add CLIENT_ID, CLIENT_SECRET, and REFRESH_TOKEN "
                "to the server environment",
            },
            status_code=500,
            headers=CORS_HEADERS,
        )

    try:
        state = await resolve_playback(http, settings.credentials())
    except Exception as exc:  # noqa: BLE001
        logger.exception("Spotify API error")
        return JSONResponse(
            {"error": "Failed to fetch Spotify data", "message": _error_message(exc)},
            status_code=500,
            headers=CORS_HEADERS,
        )

    return JSONResponse(state.to_payload(), headers=CORS_HEADERS)


def _error_message(exc: Exception) -> str:
    # Provider errors surface their detail only, without the status prefix.
    if isinstance(exc, SpotifyAPIError):
        return exc.detail
    return str(exc)
