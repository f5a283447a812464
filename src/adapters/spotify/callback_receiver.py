"""One-shot local HTTP listener for the OAuth redirect."""

import logging
import queue
import secrets
import threading
import webbrowser
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Callable, Optional
from urllib.parse import parse_qs, urlparse

from src.config import LOGIN_SUCCESS_HTML, SPOTIFY_REDIRECT_URI
from src.domain.errors import AuthorizationError, OstentatiousError, StateMismatchError
from src.domain.model import Credential
from src.domain.ports import AuthorizerPort

logger = logging.getLogger("ostentatious.auth")


class _CallbackHandler(BaseHTTPRequestHandler):
    server: "_CallbackServer"

    def do_GET(self):  # noqa: N802
        parsed = urlparse(self.path)
        receiver = self.server.receiver
        if parsed.path != receiver.callback_path:
            self._respond(404, "Not Found")
            return
        if receiver.delivered:
            self._respond(410, "This login link has already been used.")
            return
        receiver.handle_callback(parse_qs(parsed.query), self._respond)

    def _respond(self, status: int, body: str, content_type: str = "text/plain; charset=utf-8") -> None:
        payload = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):  # noqa: A002
        logger.debug("callback server: " + format, *args)


class _CallbackServer(HTTPServer):
    def __init__(self, address: tuple[str, int], receiver: "CallbackReceiver"):
        super().__init__(address, _CallbackHandler)
        self.receiver = receiver


class CallbackReceiver:
    """Serve the redirect URI until one authorization outcome is delivered.

    The outcome, a Credential or the error that prevented one, goes through a
    single-slot queue that ``wait`` blocks on.
    """

    def __init__(
        self,
        authorizer: AuthorizerPort,
        redirect_uri: str | None = None,
        state: str | None = None,
        open_browser: Callable[[str], bool] = webbrowser.open,
    ):
        self.authorizer = authorizer
        self.redirect_uri = redirect_uri or SPOTIFY_REDIRECT_URI
        self.state = state or secrets.token_urlsafe(16)
        self.open_browser = open_browser

        parsed = urlparse(self.redirect_uri)
        self.host = parsed.hostname or "127.0.0.1"
        self.port = parsed.port if parsed.port is not None else 8888
        self.callback_path = parsed.path or "/callback"

        self._outcome: queue.Queue = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._delivered = False
        self._server: Optional[_CallbackServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def delivered(self) -> bool:
        return self._delivered

    @property
    def server_address(self) -> tuple[str, int]:
        if self._server is None:
            raise RuntimeError("Callback server is not running")
        return self._server.server_address[:2]

    def start(self) -> str:
        """Bind the listener, point the browser at Spotify and return the authorize URL."""
        try:
            self._server = _CallbackServer((self.host, self.port), self)
        except OSError as exc:
            raise AuthorizationError(f"Port {self.port} is not available for the login callback: {exc}") from exc
        self._thread = threading.Thread(target=self._server.serve_forever, name="oauth-callback", daemon=True)
        self._thread.start()
        logger.info("Waiting for the Spotify redirect on %s", self.redirect_uri)

        url = self.authorizer.authorize_url(self.state)
        if not self.open_browser(url):
            print(f"Open this URL in your browser to log in:\n{url}")
        return url

    def wait(self, timeout: float | None = None) -> Credential:
        try:
            outcome = self._outcome.get(timeout=timeout)
        except queue.Empty:
            raise AuthorizationError(f"No login callback received within {timeout:g} seconds") from None
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        self._server = None

    def handle_callback(self, params: dict[str, list[str]], respond: Callable[..., None]) -> None:
        def first(name: str) -> Optional[str]:
            values = params.get(name)
            return values[0] if values else None

        received_state = first("state")
        if received_state != self.state:
            respond(403, "State mismatch, login aborted.")
            self._deliver(StateMismatchError(self.state, received_state))
            return

        error = first("error")
        code = first("code")
        if error or not code:
            respond(403, "Couldn't get token")
            self._deliver(AuthorizationError(f"Spotify authorization was refused: {error or 'no code returned'}"))
            return

        try:
            credential = self.authorizer.exchange_code(code)
        except OstentatiousError as exc:
            respond(403, "Couldn't get token")
            self._deliver(exc)
            return
        except Exception as exc:
            # The waiting run must always get an outcome, or it blocks forever.
            logger.exception("Code exchange failed")
            respond(500, "Couldn't get token")
            failure = AuthorizationError(f"Couldn't get token: {exc}")
            failure.__cause__ = exc
            self._deliver(failure)
            return

        respond(200, LOGIN_SUCCESS_HTML, "text/html; charset=utf-8")
        self._deliver(credential)

    def _deliver(self, outcome) -> None:
        with self._lock:
            if self._delivered:
                logger.warning("Ignoring extra authorization outcome: %r", outcome)
                return
            self._delivered = True
            self._outcome.put_nowait(outcome)
