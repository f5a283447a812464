"""Configuration: paths, Spotify scopes and constants."""

import os
from pathlib import Path

APP_NAME = "ostentatious"

CONFIG_DIR_ENV_VAR = "OSTENTATIOUS_CONFIG_DIR"
SIMULATION_ENV_VAR = "OSTENTATIOUS_SIMULATION"

SESSION_FILE = "config.json"
SETTINGS_FILE = "settings.json"

# Spotify API
SPOTIFY_REDIRECT_URI = "http://127.0.0.1:8888/callback"
SPOTIFY_SCOPE = " ".join([
    "user-read-private",
    "playlist-read-private",
    "playlist-read-collaborative",
    "playlist-modify-private",
    "playlist-modify-public",
    "user-read-playback-state",
])
PLAYLIST_PAGE_SIZE = 50
PLAYLIST_TRACKS_PAGE_SIZE = 100

LOGIN_SUCCESS_HTML = """<!DOCTYPE html>
<html lang="en">
    <head>
        <title>Login Successful</title>
        <meta charset="UTF-8">
    </head>
    <body>
        <h1>Login Successful</h1>
        <p>If this page isn't automatically closing you can close it now.</p>
        <script>
            window.close();
        </script>
    </body>
</html>
"""


def config_dir() -> Path:
    """Return the directory holding the session and settings files.

    Defaults to ``~/.config/ostentatious``; ``OSTENTATIOUS_CONFIG_DIR`` overrides it.
    """
    override = os.getenv(CONFIG_DIR_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / APP_NAME


def session_path() -> Path:
    return config_dir() / SESSION_FILE


def settings_path() -> Path:
    return config_dir() / SETTINGS_FILE


def is_truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def simulation_requested() -> bool:
    return is_truthy(os.getenv(SIMULATION_ENV_VAR, ""))
