"""Shared in-memory adapters and fixtures for all bounded contexts."""

from typing import Optional

import pytest

from src.domain.errors import CredentialError
from src.domain.model import Credential, NowPlaying, Playlist, SessionState, TrackRef, User
from src.domain.ports import (
    AuthorizerPort,
    PlaylistSelectorPort,
    RemoteClientPort,
    SessionStorePort,
)


# ── In-memory adapters ──────────────────────────────────────────────


class InMemorySessionStore(SessionStorePort):
    def __init__(self, state: Optional[SessionState] = None, corrupt: bool = False):
        self._data = state
        self.corrupt = corrupt
        self.saves: list[SessionState] = []

    def load(self) -> Optional[SessionState]:
        if self.corrupt:
            raise CredentialError("corrupt session file")
        if self._data is None:
            return None
        return SessionState(credential=self._data.credential, playlist_name=self._data.playlist_name)

    def save(self, state: SessionState) -> None:
        snapshot = SessionState(credential=state.credential, playlist_name=state.playlist_name)
        self._data = snapshot
        self.corrupt = False
        self.saves.append(snapshot)

    def exists(self) -> bool:
        return self._data is not None or self.corrupt

    def clear(self) -> None:
        self._data = None


class InMemoryRemoteClient(RemoteClientPort):
    def __init__(
        self,
        playlists: Optional[list[Playlist]] = None,
        playing: Optional[NowPlaying] = None,
        credential: Optional[Credential] = None,
        tracks: Optional[dict[str, list[str]]] = None,
    ):
        self.playlists = playlists or []
        self.playing = playing
        self.credential = credential or Credential("refreshed-access", "refresh", 2_000_000_000)
        self.tracks = tracks or {}
        self.calls: list[tuple] = []

    def current_credential(self) -> Credential:
        return self.credential

    def current_user(self) -> User:
        return User(id="user-1", display_name="Listener")

    def list_playlists(self, user_id: str) -> list[Playlist]:
        return list(self.playlists)

    def list_playlist_tracks(self, playlist_id: str) -> list[TrackRef]:
        return [TrackRef(id=tid) for tid in self.tracks.get(playlist_id, [])]

    def currently_playing(self) -> Optional[NowPlaying]:
        return self.playing

    def remove_track(self, playlist_id: str, track_id: str) -> None:
        self.calls.append(("remove", playlist_id, track_id))
        ids = self.tracks.get(playlist_id, [])
        self.tracks[playlist_id] = [tid for tid in ids if tid != track_id]

    def add_track(self, playlist_id: str, track_id: str) -> None:
        self.calls.append(("add", playlist_id, track_id))
        self.tracks.setdefault(playlist_id, []).append(track_id)

    @property
    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("remove", "add")]


class ScriptedSelector(PlaylistSelectorPort):
    def __init__(self, choice: str = ""):
        self.choice = choice
        self.prompts: list[list[str]] = []

    def select(self, names: list[str]) -> str:
        self.prompts.append(list(names))
        return self.choice


class InMemoryAuthorizer(AuthorizerPort):
    def __init__(self, client: RemoteClientPort, credential: Optional[Credential] = None):
        self.client = client
        self.credential = credential or Credential("fresh-access", "fresh-refresh", 2_000_000_000)
        self.exchanged: list[str] = []
        self.clients_for: list[Credential] = []

    def authorize_url(self, state: str) -> str:
        return f"https://accounts.example/authorize?state={state}"

    def exchange_code(self, code: str) -> Credential:
        self.exchanged.append(code)
        return self.credential

    def client_for(self, credential: Credential) -> RemoteClientPort:
        self.clients_for.append(credential)
        return self.client


class InstantReceiver:
    """Stands in for the callback server: the browser answers immediately."""

    def __init__(self, authorizer: AuthorizerPort, error: Optional[Exception] = None):
        self.authorizer = authorizer
        self.error = error
        self.started = False
        self.closed = False

    def start(self) -> str:
        self.started = True
        return self.authorizer.authorize_url("state")

    def wait(self, timeout: Optional[float] = None) -> Credential:
        if self.error is not None:
            raise self.error
        return self.authorizer.exchange_code("one-time-code")

    def close(self) -> None:
        self.closed = True


# ── Shared fixtures ─────────────────────────────────────────────────


@pytest.fixture
def stored_credential():
    return Credential(
        access_token="stored-access",
        refresh_token="stored-refresh",
        expires_at=1_700_000_000,
        token_type="Bearer",
        scope="playlist-modify-private user-read-playback-state",
    )


@pytest.fixture
def played():
    return Playlist(id="pl-played", name="Played")


@pytest.fixture
def playlists(played):
    return [
        Playlist(id="pl-chill", name="Chill Vibes"),
        played,
        Playlist(id="pl-party", name="Friday Night"),
    ]


@pytest.fixture
def now_playing():
    return NowPlaying(track_id="t1", name="Risk It All", artist="Bruno Mars")


@pytest.fixture
def client(playlists, now_playing):
    return InMemoryRemoteClient(playlists=playlists, playing=now_playing, tracks={"pl-played": ["t1", "t2", "t3"]})


@pytest.fixture
def selector():
    return ScriptedSelector("Played")


class FakeSecretStore:
    def __init__(self, available: bool = True):
        self.available = available
        self.data: dict[str, str] = {}

    def get(self, key: str):
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        if not self.available:
            return False
        if value:
            self.data[key] = value
        else:
            self.data.pop(key, None)
        return True


@pytest.fixture
def secret_store():
    return FakeSecretStore()


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config and SPOTIPY_* variables."""
    monkeypatch.setenv("OSTENTATIOUS_CONFIG_DIR", str(tmp_path / "config"))
    for var in ("SPOTIPY_CLIENT_ID", "SPOTIPY_CLIENT_SECRET", "SPOTIPY_REDIRECT_URI", "OSTENTATIOUS_SIMULATION"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path / "config"
