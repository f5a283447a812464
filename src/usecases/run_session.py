"""Use case: one complete run, from credential to bump, with a guaranteed save."""

import logging
from typing import Callable, Optional

from src.adapters.spotify.callback_receiver import CallbackReceiver
from src.adapters.spotify.dry_run_remote_client import DryRunRemoteClient
from src.domain.errors import SessionStoreError
from src.domain.model import BumpResult, Credential, SessionState
from src.domain.ports import AuthorizerPort, PlaylistSelectorPort, SessionStorePort
from src.usecases.bump_current_track import BumpCurrentTrackUseCase
from src.usecases.obtain_session import ObtainSessionUseCase

logger = logging.getLogger("ostentatious.run")


class RunSessionUseCase:

    def __init__(
        self,
        store: SessionStorePort,
        authorizer: AuthorizerPort,
        selector: PlaylistSelectorPort,
        receiver_factory: Optional[Callable[[AuthorizerPort], CallbackReceiver]] = None,
        callback_timeout: Optional[float] = None,
        dry_run: bool = False,
    ):
        self.store = store
        self.authorizer = authorizer
        self.selector = selector
        self.receiver_factory = receiver_factory or CallbackReceiver
        self.callback_timeout = callback_timeout
        self.dry_run = dry_run
        self.state = SessionState()

    def authorize(self) -> Credential:
        receiver = self.receiver_factory(self.authorizer)
        try:
            receiver.start()
            return receiver.wait(timeout=self.callback_timeout)
        finally:
            receiver.close()

    def execute(self, reset: bool = False, remove_only: bool = False) -> BumpResult:
        self.state = SessionState()
        try:
            ObtainSessionUseCase(self.store, self.authorize).execute(self.state)
            client = self.authorizer.client_for(self.state.credential)
            if self.dry_run:
                client = DryRunRemoteClient(client)
            result = BumpCurrentTrackUseCase(client, self.selector).execute(
                self.state, reset=reset, remove_only=remove_only
            )
        except BaseException:
            try:
                self.store.save(self.state)
            except SessionStoreError:
                logger.exception("Could not save the session while aborting")
            raise
        self.store.save(self.state)
        return result
