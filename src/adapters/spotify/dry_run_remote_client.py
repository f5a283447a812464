"""Dry-run remote client that reads from Spotify but never writes to it."""

import logging
from typing import Optional

from src.domain.model import Credential, NowPlaying, Playlist, TrackRef, User
from src.domain.ports import RemoteClientPort

logger = logging.getLogger("ostentatious.simulation")


class DryRunRemoteClient(RemoteClientPort):
    """Delegates reads and records playlist mutations for safe simulation runs."""

    def __init__(self, inner: RemoteClientPort):
        self.inner = inner
        self.added: list[tuple[str, str]] = []
        self.removed: list[tuple[str, str]] = []

    def current_credential(self) -> Credential:
        return self.inner.current_credential()

    def current_user(self) -> User:
        return self.inner.current_user()

    def list_playlists(self, user_id: str) -> list[Playlist]:
        return self.inner.list_playlists(user_id)

    def list_playlist_tracks(self, playlist_id: str) -> list[TrackRef]:
        return self.inner.list_playlist_tracks(playlist_id)

    def currently_playing(self) -> Optional[NowPlaying]:
        return self.inner.currently_playing()

    def remove_track(self, playlist_id: str, track_id: str) -> None:
        occurrences = sum(1 for ref in self.inner.list_playlist_tracks(playlist_id) if ref.id == track_id)
        logger.info("[dry-run] would remove %s from %s (%d occurrence(s))", track_id, playlist_id, occurrences)
        print(f"[dry-run] Would remove {occurrences} occurrence(s) of the track")
        self.removed.append((playlist_id, track_id))

    def add_track(self, playlist_id: str, track_id: str) -> None:
        logger.info("[dry-run] would add %s to %s", track_id, playlist_id)
        print("[dry-run] Would add the track back at the end of the playlist")
        self.added.append((playlist_id, track_id))
