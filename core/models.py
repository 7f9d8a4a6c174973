"""Pydantic models shared across the application."""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class Credentials(BaseModel):
    """Spotify app identity plus the long-lived refresh token."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: SecretStr
    refresh_token: SecretStr


class AccessGrant(BaseModel):
    """Short-lived bearer token returned by the refresh exchange."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 3600  # informational only, never cached


class TrackSnapshot(BaseModel):
    """Normalized description of one track instance."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: Optional[str] = None
    artist: str = ""
    album: Optional[str] = None
    album_image_url: Optional[str] = Field(default=None, alias="albumImageUrl")
    song_url: Optional[str] = Field(default=None, alias="songUrl")

    def to_payload(self) -> dict:
        # Absent provider fields are omitted, never sent as null.
        return self.model_dump(by_alias=True, exclude_none=True)


class Playing(BaseModel):
    """A track is playing right now."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["playing"] = "playing"
    track: TrackSnapshot
    progress: Optional[int] = None  # ms
    duration: Optional[int] = None  # ms

    def to_payload(self) -> dict:
        payload = {"isPlaying": True, **self.track.to_payload()}
        if self.progress is not None:
            payload["progress"] = self.progress
        if self.duration is not None:
            payload["duration"] = self.duration
        return payload


class RecentlyPlayed(BaseModel):
    """Nothing is playing; this is the most recent history entry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["recently_played"] = "recently_played"
    track: TrackSnapshot
    played_at: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {"isPlaying": False, **self.track.to_payload()}
        if self.played_at is not None:
            payload["playedAt"] = self.played_at
        return payload


class NoActivity(BaseModel):
    """Placeholder when there is no track to report."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["no_activity"] = "no_activity"
    message: str

    def to_payload(self) -> dict:
        return {"isPlaying": False, "message": self.message}


PlaybackState = Union[Playing, RecentlyPlayed, NoActivity]
