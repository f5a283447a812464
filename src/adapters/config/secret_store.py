"""OS keychain storage for the Spotify client secret."""

from __future__ import annotations

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, NoKeyringError, PasswordDeleteError

from src.config import APP_NAME

logger = logging.getLogger("ostentatious.keychain")


class KeyringSecretStore:
    """Secrets live under one keychain service; ``set`` reports whether it stuck.

    Without a usable backend every call degrades to "not stored" so the
    settings adapter can fall back to the JSON file.
    """

    def __init__(self, service_name: str = APP_NAME):
        self.service_name = service_name

    def get(self, key: str) -> Optional[str]:
        try:
            return keyring.get_password(self.service_name, key)
        except KeyringError as exc:
            self._report("read", key, exc)
            return None

    def set(self, key: str, value: str) -> bool:
        if not value:
            return self.delete(key)
        try:
            keyring.set_password(self.service_name, key, value)
        except KeyringError as exc:
            self._report("store", key, exc)
            return False
        return True

    def delete(self, key: str) -> bool:
        try:
            keyring.delete_password(self.service_name, key)
        except PasswordDeleteError:
            # nothing stored under that key
            return True
        except KeyringError as exc:
            self._report("delete", key, exc)
            return False
        return True

    def _report(self, action: str, key: str, exc: KeyringError) -> None:
        if isinstance(exc, NoKeyringError):
            logger.debug("No keychain backend, cannot %s %s", action, key)
        else:
            logger.warning("Keychain failed to %s %s: %s", action, key, exc)
