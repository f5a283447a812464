"""Spotify OAuth2 authentication using spotipy."""

import os

import requests
import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from src.adapters.spotify.remote_client import SpotifyRemoteClient
from src.config import SPOTIFY_REDIRECT_URI, SPOTIFY_SCOPE
from src.domain.errors import AuthorizationError
from src.domain.model import Credential
from src.domain.ports import AuthorizerPort


class SpotifyAuthorizer(AuthorizerPort):
    """Authorization-code flow and authenticated clients.

    Tokens live in a MemoryCacheHandler only; the session file is the single
    place they are persisted.
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        redirect_uri: str | None = SPOTIFY_REDIRECT_URI,
    ):
        # None lets spotipy fall back to the SPOTIPY_* environment variables
        self.client_id = client_id or None
        self.client_secret = client_secret or None
        self.redirect_uri = redirect_uri or None

    @classmethod
    def from_config(cls, cfg: dict) -> "SpotifyAuthorizer":
        return cls(
            client_id=cfg.get("spotify_client_id"),
            client_secret=cfg.get("spotify_client_secret"),
            redirect_uri=cfg.get("spotify_redirect_uri") or os.getenv("SPOTIPY_REDIRECT_URI") or SPOTIFY_REDIRECT_URI,
        )

    def auth_manager(self, credential: Credential | None = None) -> SpotifyOAuth:
        token_info = credential.to_token_info() if credential else None
        try:
            return SpotifyOAuth(
                client_id=self.client_id,
                client_secret=self.client_secret,
                redirect_uri=self.redirect_uri,
                scope=SPOTIFY_SCOPE,
                cache_handler=MemoryCacheHandler(token_info=token_info),
                open_browser=False,
            )
        except SpotifyOauthError as exc:
            raise AuthorizationError(f"Spotify app credentials are not set up: {exc}") from exc

    def authorize_url(self, state: str) -> str:
        return self.auth_manager().get_authorize_url(state=state)

    def exchange_code(self, code: str) -> Credential:
        manager = self.auth_manager()
        try:
            manager.get_access_token(code, as_dict=False, check_cache=False)
        except (SpotifyOauthError, requests.exceptions.RequestException) as exc:
            raise AuthorizationError(f"Couldn't get token: {exc}") from exc
        return Credential.from_token_info(manager.cache_handler.get_cached_token())

    def client_for(self, credential: Credential) -> SpotifyRemoteClient:
        manager = self.auth_manager(credential)
        return SpotifyRemoteClient(spotipy.Spotify(auth_manager=manager), auth_manager=manager)
