"""Thin Spotify Web API client for the now-playing endpoint.

Features:
  - ``SpotifyHTTP`` capability (one method: perform request → status + JSON)
  - httpx-backed implementation, one AsyncClient per inbound request
  - Refresh-token exchange with basic-auth app identity
  - Single attempt per call, no retries
"""

from __future__ import annotations

import logging
from base64 import b64encode
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional, Protocol

import httpx

from core.models import AccessGrant, Credentials

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

_SPOTIFY_API = "https://api.spotify.com/v1"
_SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"

CURRENTLY_PLAYING_URL = f"{_SPOTIFY_API}/me/player/currently-playing"
RECENTLY_PLAYED_URL = f"{_SPOTIFY_API}/me/player/recently-played?limit=1"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class SpotifyAPIError(Exception):
    """Raised when a Spotify API request cannot be satisfied."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Spotify API error {status_code}: {detail}")


# ---------------------------------------------------------------------------
# HTTP capability
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UpstreamResponse:
    """Status code plus decoded JSON body (``None`` when there is none)."""

    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class SpotifyHTTP(Protocol):
    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        data: Optional[dict[str, str]] = None,
    ) -> UpstreamResponse: ...


class HttpxSpotifyHTTP:
    """``SpotifyHTTP`` over an ``httpx.AsyncClient``.

    Only 2xx responses with content are JSON-decoded; a decode failure
    propagates as ``ValueError``.
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        data: Optional[dict[str, str]] = None,
    ) -> UpstreamResponse:
        resp = await self._client.request(method, url, headers=headers, data=data)
        body = None
        if resp.is_success and resp.status_code != 204 and resp.content:
            body = resp.json()
        logger.debug("%s %s → %d", method, url, resp.status_code)
        return UpstreamResponse(resp.status_code, body)


async def get_spotify_http() -> AsyncIterator[SpotifyHTTP]:
    """FastAPI dependency: a fresh client for the lifetime of one request."""
    async with httpx.AsyncClient() as client:
        yield HttpxSpotifyHTTP(client)


# ---------------------------------------------------------------------------
# Token exchange
# ---------------------------------------------------------------------------

def basic_auth_header(client_id: str, client_secret: str) -> str:
    """``Basic base64(id:secret)`` for the token endpoint."""
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return f"Basic {b64encode(raw).decode('ascii')}"


async def refresh_access_token(http: SpotifyHTTP, credentials: Credentials) -> AccessGrant:
    """Exchange the refresh token for a short-lived access token."""
    resp = await http.request(
        "POST",
        _SPOTIFY_TOKEN_URL,
        headers={
            "Authorization": basic_auth_header(
                credentials.client_id, credentials.client_secret.get_secret_value()
            ),
            "Content-Type": "application/x-www-form-urlencoded",
        },
        data={
            "grant_type": "refresh_token",
            "refresh_token": credentials.refresh_token.get_secret_value(),
        },
    )

    if not resp.ok:
        logger.warning("Token refresh failed (%s)", resp.status_code)
        raise SpotifyAPIError(resp.status_code, "Failed to get access token")

    return AccessGrant.model_validate(resp.body or {})


# ---------------------------------------------------------------------------
# Player endpoints
# ---------------------------------------------------------------------------

def _bearer(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


async def get_currently_playing(http: SpotifyHTTP, access_token: str) -> UpstreamResponse:
    return await http.request("GET", CURRENTLY_PLAYING_URL, headers=_bearer(access_token))


async def get_recently_played(http: SpotifyHTTP, access_token: str) -> UpstreamResponse:
    """Fetch the single most recent playback-history entry."""
    return await http.request("GET", RECENTLY_PLAYED_URL, headers=_bearer(access_token))
