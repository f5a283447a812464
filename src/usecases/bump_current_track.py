"""Use case: move the currently playing track to the end of the chosen playlist."""

import logging

from src.domain.errors import AuthorizationError, DuplicatePlaylistNameError, PlaylistNotFoundError
from src.domain.model import BumpOutcome, BumpResult, Playlist, SessionState
from src.domain.ports import PlaylistSelectorPort, RemoteClientPort

logger = logging.getLogger("ostentatious.bump")


def find_playlist(name: str, playlists: list[Playlist]) -> Playlist:
    matches = [p for p in playlists if p.name == name]
    if not matches:
        raise PlaylistNotFoundError(name)
    if len(matches) > 1:
        raise DuplicatePlaylistNameError(name, len(matches))
    return matches[0]


class BumpCurrentTrackUseCase:

    def __init__(self, client: RemoteClientPort, selector: PlaylistSelectorPort):
        self.client = client
        self.selector = selector

    def execute(self, state: SessionState, reset: bool = False, remove_only: bool = False) -> BumpResult:
        """Remove the playing track from the playlist, then add it back unless ``remove_only``.

        ``state`` is updated in place with the refreshed credential and the
        chosen playlist name so the caller can persist it whatever happens next.
        """
        try:
            state.credential = self.client.current_credential()
        except AuthorizationError:
            # Revoked or under-scoped: drop it so the next run logs in again.
            state.credential = None
            raise

        user = self.client.current_user()
        playlists = self.client.list_playlists(user.id)
        logger.info("Fetched %d playlists for %s", len(playlists), user.id)

        if reset or not state.playlist_name:
            state.playlist_name = self.selector.select([p.name for p in playlists])
        playlist = find_playlist(state.playlist_name, playlists)

        now_playing = self.client.currently_playing()
        if now_playing is None:
            print("Currently not playing a song")
            return BumpResult(BumpOutcome.NOTHING_PLAYING, playlist=playlist)

        # Always strip first so the track ends up exactly once, at the tail.
        self.client.remove_track(playlist.id, now_playing.track_id)
        if remove_only:
            print(f"Removed {now_playing.describe()} from {playlist.name}")
            return BumpResult(BumpOutcome.REMOVED, playlist=playlist, track=now_playing)

        self.client.add_track(playlist.id, now_playing.track_id)
        print(f"Moved {now_playing.describe()} to the end of {playlist.name}")
        return BumpResult(BumpOutcome.BUMPED, playlist=playlist, track=now_playing)
