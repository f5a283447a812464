"""Spotify adapter for the Web API calls a bump needs."""

import logging
from typing import Callable, Optional

import requests
import spotipy
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from src.config import PLAYLIST_PAGE_SIZE, PLAYLIST_TRACKS_PAGE_SIZE
from src.domain.errors import AuthorizationError, RemoteServiceError
from src.domain.model import Credential, NowPlaying, Playlist, TrackRef, User
from src.domain.ports import RemoteClientPort

logger = logging.getLogger("ostentatious.spotify")


class SpotifyRemoteClient(RemoteClientPort):

    def __init__(self, sp: spotipy.Spotify, auth_manager: SpotifyOAuth | None = None):
        self.sp = sp
        self.auth_manager = auth_manager or sp.auth_manager

    def current_credential(self) -> Credential:
        """Return the credential in use, refreshing it first if it has expired."""
        try:
            token_info = self.auth_manager.validate_token(self.auth_manager.cache_handler.get_cached_token())
        except SpotifyOauthError as exc:
            raise AuthorizationError(
                f"Could not refresh the Spotify token ({exc}), the next run will ask you to log in again"
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise RemoteServiceError("refresh the Spotify token", exc) from exc
        if not token_info:
            raise AuthorizationError(
                "The saved Spotify login does not cover the required scopes, the next run will ask you to log in again"
            )
        return Credential.from_token_info(token_info)

    def current_user(self) -> User:
        data = self._call("fetch the current user", self.sp.current_user)
        return User(id=data["id"], display_name=data.get("display_name") or "")

    def list_playlists(self, user_id: str) -> list[Playlist]:
        first = self._call(
            "list playlists",
            lambda: self.sp.user_playlists(user_id, limit=PLAYLIST_PAGE_SIZE),
        )
        return [
            Playlist(id=item["id"], name=item.get("name") or "")
            for item in self._drain("list playlists", first)
            if item
        ]

    def list_playlist_tracks(self, playlist_id: str) -> list[TrackRef]:
        first = self._call(
            "list playlist tracks",
            lambda: self.sp.playlist_items(
                playlist_id,
                limit=PLAYLIST_TRACKS_PAGE_SIZE,
                additional_types=("track",),
            ),
        )
        refs: list[TrackRef] = []
        for item in self._drain("list playlist tracks", first):
            track = (item or {}).get("track") or {}
            # Local files and unavailable tracks come back without an id
            if track.get("id"):
                refs.append(TrackRef(id=track["id"]))
        return refs

    def currently_playing(self) -> Optional[NowPlaying]:
        data = self._call("fetch the currently playing track", self.sp.currently_playing)
        if not data:
            return None
        item = data.get("item")
        if not item or not item.get("id"):
            return None
        artists = ", ".join(a["name"] for a in item.get("artists", []) if a.get("name"))
        return NowPlaying(track_id=item["id"], name=item.get("name") or "", artist=artists)

    def remove_track(self, playlist_id: str, track_id: str) -> None:
        try:
            self._call(
                "remove the track from the playlist",
                lambda: self.sp.playlist_remove_all_occurrences_of_items(playlist_id, [track_id]),
            )
        except RemoteServiceError as exc:
            if isinstance(exc.cause, SpotifyException) and exc.cause.http_status == 404:
                logger.info("Track %s not found in playlist %s, nothing to remove", track_id, playlist_id)
                return
            raise

    def add_track(self, playlist_id: str, track_id: str) -> None:
        self._call("add the track to the playlist", lambda: self.sp.playlist_add_items(playlist_id, [track_id]))

    def _drain(self, step: str, page: Optional[dict]) -> list[dict]:
        """Collect the items of ``page`` and every page after it, in API order."""
        items: list[dict] = []
        while page:
            items.extend(page.get("items", []))
            if not page.get("next"):
                break
            page = self._call(step, lambda current=page: self.sp.next(current))
        logger.debug("%s: %d items", step, len(items))
        return items

    @staticmethod
    def _call(step: str, request: Callable):
        try:
            return request()
        except (SpotifyException, SpotifyOauthError, requests.exceptions.RequestException) as exc:
            raise RemoteServiceError(step, exc) from exc
