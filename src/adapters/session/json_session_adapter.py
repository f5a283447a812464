"""JSON file-based session persistence adapter."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from src.config import session_path
from src.domain.errors import CredentialError, SessionStoreError
from src.domain.model import Credential, SessionState
from src.domain.ports import SessionStorePort

logger = logging.getLogger("ostentatious.session")


class JsonSessionAdapter(SessionStorePort):

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = Path(path) if path else session_path()

    def load(self) -> Optional[SessionState]:
        """Read the stored session.

        Returns None when there is no file yet; raises CredentialError when the
        file exists but cannot be turned into a usable session.
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise CredentialError(f"Could not read {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise CredentialError(f"Unexpected content in {self.path}")

        token = data.get("token")
        # A null token is written when a run ended before authorization finished.
        return SessionState(
            credential=Credential.from_token_info(token) if token is not None else None,
            playlist_name=str(data.get("playlistName") or ""),
        )

    def save(self, state: SessionState) -> None:
        token = None
        if state.credential is not None:
            token = {
                "access_token": state.credential.access_token,
                "token_type": state.credential.token_type,
                "refresh_token": state.credential.refresh_token,
                "expires_at": state.credential.expires_at,
                "scope": state.credential.scope,
            }
        data = {"token": token, "playlistName": state.playlist_name}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as exc:
            raise SessionStoreError(f"Could not write {self.path}: {exc}") from exc
        logger.debug("Session saved to %s (playlist=%r)", self.path, state.playlist_name)

    def exists(self) -> bool:
        return self.path.exists()

    def clear(self) -> None:
        if self.path.exists():
            os.remove(self.path)
