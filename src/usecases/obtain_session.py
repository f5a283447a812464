"""Use case: load the stored session or authorize through the browser."""

import logging
from typing import Callable, Optional

from src.domain.errors import CredentialError
from src.domain.model import Credential, SessionState
from src.domain.ports import SessionStorePort

logger = logging.getLogger("ostentatious.session")


class ObtainSessionUseCase:
    """Produce a SessionState that carries a credential.

    ``authorize`` runs the interactive browser flow and blocks until it yields
    a credential; it is only called when the store has nothing usable.
    """

    def __init__(self, store: SessionStorePort, authorize: Callable[[], Credential]):
        self.store = store
        self.authorize = authorize

    def execute(self, state: Optional[SessionState] = None) -> SessionState:
        """Fill ``state`` in place (a fresh one if None) and return it."""
        state = state if state is not None else SessionState()
        try:
            stored = self.store.load()
        except CredentialError as exc:
            logger.info("Stored session unusable: %s", exc)
            print(f"Could not read the saved login ({exc}), processing with initial setup")
            stored = None

        if stored is None:
            if not self.store.exists():
                print("No config file found, processing with initial setup")
        else:
            state.playlist_name = stored.playlist_name
            state.credential = stored.credential

        if state.credential is None:
            state.credential = self.authorize()
            logger.info("Obtained a new credential through the browser flow")
        return state
