"""Ports (interfaces) for the hexagonal architecture."""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.model import (
    Credential,
    NowPlaying,
    Playlist,
    SessionState,
    TrackRef,
    User,
)


class SessionStorePort(ABC):
    @abstractmethod
    def load(self) -> Optional[SessionState]:
        ...

    @abstractmethod
    def save(self, state: SessionState) -> None:
        ...

    @abstractmethod
    def exists(self) -> bool:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class RemoteClientPort(ABC):
    @abstractmethod
    def current_credential(self) -> Credential:
        ...

    @abstractmethod
    def current_user(self) -> User:
        ...

    @abstractmethod
    def list_playlists(self, user_id: str) -> list[Playlist]:
        ...

    @abstractmethod
    def list_playlist_tracks(self, playlist_id: str) -> list[TrackRef]:
        ...

    @abstractmethod
    def currently_playing(self) -> Optional[NowPlaying]:
        ...

    @abstractmethod
    def remove_track(self, playlist_id: str, track_id: str) -> None:
        ...

    @abstractmethod
    def add_track(self, playlist_id: str, track_id: str) -> None:
        ...


class AuthorizerPort(ABC):
    @abstractmethod
    def authorize_url(self, state: str) -> str:
        ...

    @abstractmethod
    def exchange_code(self, code: str) -> Credential:
        ...

    @abstractmethod
    def client_for(self, credential: Credential) -> RemoteClientPort:
        ...


class PlaylistSelectorPort(ABC):
    @abstractmethod
    def select(self, names: list[str]) -> str:
        ...


class ConfigPort(ABC):
    @abstractmethod
    def load(self) -> dict:
        ...

    @abstractmethod
    def save(self, cfg: dict) -> None:
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        ...
