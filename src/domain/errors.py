"""Domain errors. Everything except CredentialError aborts the run."""


class OstentatiousError(Exception):
    """Base class for failures surfaced to the user."""


class CredentialError(OstentatiousError):
    """The stored credential is missing, corrupt or unusable."""


class SessionStoreError(OstentatiousError):
    """The session file could not be written."""


class ConfigError(OstentatiousError):
    """The settings file could not be read."""


class AuthorizationError(OstentatiousError):
    """The browser authorization flow did not produce a credential."""


class StateMismatchError(AuthorizationError):
    def __init__(self, expected: str, received: str | None):
        super().__init__(f"State mismatch: {received!r} != {expected!r}")
        self.expected = expected
        self.received = received


class PlaylistNotFoundError(OstentatiousError):
    def __init__(self, name: str):
        super().__init__(f"No playlist named {name!r} found, run again with -reset to choose another one")
        self.name = name


class DuplicatePlaylistNameError(OstentatiousError):
    def __init__(self, name: str, count: int):
        super().__init__(
            f"{count} playlists are named {name!r}, rename one of them or run again with -reset"
        )
        self.name = name
        self.count = count


class SelectionCancelledError(OstentatiousError):
    """The user left the playlist prompt without choosing."""


class RemoteServiceError(OstentatiousError):
    """A Spotify Web API call failed."""

    def __init__(self, step: str, cause: Exception):
        super().__init__(f"Spotify request failed while trying to {step}: {cause}")
        self.step = step
        self.cause = cause
