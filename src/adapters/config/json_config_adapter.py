"""JSON file-based settings adapter (Spotify app credentials)."""

import json
import os
from typing import Optional, Protocol

from src.adapters.config.secret_store import KeyringSecretStore
from src.config import SPOTIFY_REDIRECT_URI, settings_path
from src.domain.errors import ConfigError
from src.domain.ports import ConfigPort

_DEFAULTS = {
    "spotify_client_id": "",
    "spotify_client_secret": "",
    "spotify_redirect_uri": SPOTIFY_REDIRECT_URI,
    "callback_timeout": None,
}
_SECRET_FIELDS = ("spotify_client_secret",)
# spotipy reads these itself when the matching setting is left empty
_ENV_FALLBACKS = {
    "spotify_client_id": "SPOTIPY_CLIENT_ID",
    "spotify_client_secret": "SPOTIPY_CLIENT_SECRET",
    "spotify_redirect_uri": "SPOTIPY_REDIRECT_URI",
}


class SecretStoreProtocol(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> bool:
        ...


class JsonConfigAdapter(ConfigPort):

    def __init__(self, path: str | None = None, secret_store: SecretStoreProtocol | None = None):
        self.path = path or str(settings_path())
        self.secret_store = secret_store or KeyringSecretStore()

    def defaults(self) -> dict:
        return dict(_DEFAULTS)

    def load(self) -> dict:
        cfg = self.defaults()
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    stored = json.load(f)
            except (OSError, ValueError) as exc:
                raise ConfigError(
                    f"Could not read settings from {self.path}: {exc}, fix it or run with --configure"
                ) from exc
            if not isinstance(stored, dict):
                raise ConfigError(f"Settings in {self.path} are not a JSON object, fix it or run with --configure")
            cfg.update(stored)

        for field in _SECRET_FIELDS:
            secret = self.secret_store.get(field)
            if secret:
                cfg[field] = secret

        return cfg

    def save(self, cfg: dict) -> None:
        persisted_cfg = dict(cfg)
        for field in _SECRET_FIELDS:
            value = str(cfg.get(field, "") or "")
            stored = self.secret_store.set(field, value)
            # Keep plaintext only if the keychain backend is unavailable.
            persisted_cfg[field] = "" if stored else value

        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(persisted_cfg, f, indent=2)

    def is_configured(self) -> bool:
        cfg = self.load()
        return all(
            cfg.get(field) or os.getenv(env_var)
            for field, env_var in _ENV_FALLBACKS.items()
            if field != "spotify_redirect_uri"
        )
