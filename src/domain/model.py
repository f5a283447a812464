"""Pure domain objects, no framework dependency."""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.domain.errors import CredentialError


@dataclass
class Credential:
    access_token: str
    refresh_token: str
    expires_at: int
    token_type: str = "Bearer"
    scope: str = ""

    def to_token_info(self) -> dict:
        """Render as the token dictionary spotipy's auth managers work with."""
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_in": max(int(self.expires_at - time.time()), 0),
            "expires_at": self.expires_at,
            "scope": self.scope,
            "refresh_token": self.refresh_token,
        }

    @classmethod
    def from_token_info(cls, token_info: Optional[dict]) -> "Credential":
        if not isinstance(token_info, dict):
            raise CredentialError("Token data is missing or malformed")
        access_token = token_info.get("access_token")
        refresh_token = token_info.get("refresh_token")
        if not access_token or not refresh_token:
            raise CredentialError("Token data lacks an access or refresh token")
        try:
            expires_at = int(token_info.get("expires_at") or 0)
        except (TypeError, ValueError) as exc:
            raise CredentialError(f"Token expiry is not a timestamp: {token_info.get('expires_at')!r}") from exc
        return cls(
            access_token=str(access_token),
            refresh_token=str(refresh_token),
            expires_at=expires_at,
            token_type=str(token_info.get("token_type") or "Bearer"),
            scope=str(token_info.get("scope") or ""),
        )


@dataclass
class SessionState:
    credential: Optional[Credential] = None
    playlist_name: str = ""


@dataclass
class User:
    id: str
    display_name: str = ""


@dataclass
class Playlist:
    id: str
    name: str


@dataclass
class TrackRef:
    id: str


@dataclass
class NowPlaying:
    track_id: str
    name: str = ""
    artist: str = ""

    def describe(self) -> str:
        if self.artist:
            return f"{self.name} - {self.artist}"
        return self.name or self.track_id


class BumpOutcome(Enum):
    NOTHING_PLAYING = "nothing_playing"
    REMOVED = "removed"
    BUMPED = "bumped"


@dataclass
class BumpResult:
    outcome: BumpOutcome
    playlist: Optional[Playlist] = None
    track: Optional[NowPlaying] = None
