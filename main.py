"""Entry point for ostentatious: bump the currently playing track in a playlist."""

import argparse
import getpass
import logging
import sys

from spotipy.exceptions import SpotifyException

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ostentatious",
        description="Move the song you are listening to to the end of a Spotify playlist.",
    )
    parser.add_argument(
        "-reset", "--reset",
        action="store_true",
        help="To reset the playlist chosen by the first startup",
    )
    parser.add_argument(
        "-r", "--remove",
        action="store_true",
        help="To remove the current song from the playlist instead of adding it",
    )
    parser.add_argument("--dry-run", action="store_true", help="Read from Spotify but do not change any playlist")
    parser.add_argument("--configure", action="store_true", help="Enter the Spotify app client id and secret")
    parser.add_argument("--logout", action="store_true", help="Forget the saved login and playlist")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")
    return parser


def _configure(config) -> int:
    from src.domain.errors import ConfigError
    try:
        cfg = config.load()
    except ConfigError as e:
        print(f"{e}\nStarting over with empty settings.")
        cfg = config.defaults()
    print("Create an app at https://developer.spotify.com/dashboard and add this redirect URI:")
    print(f"  {cfg['spotify_redirect_uri']}")
    client_id = input(f"Client ID [{cfg['spotify_client_id'] or 'unset'}]: ").strip()
    client_secret = getpass.getpass("Client secret (hidden, empty keeps current): ").strip()
    if client_id:
        cfg["spotify_client_id"] = client_id
    if client_secret:
        cfg["spotify_client_secret"] = client_secret
    config.save(cfg)
    print(f"Settings saved to {config.path}")
    return EXIT_OK


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # spotipy and urllib3 are chatty at DEBUG and may print request headers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("spotipy").setLevel(logging.INFO)

    from src.adapters.config.json_config_adapter import JsonConfigAdapter
    from src.adapters.prompt.playlist_selector import TerminalPlaylistSelector
    from src.adapters.session.json_session_adapter import JsonSessionAdapter
    from src.adapters.spotify.auth import SpotifyAuthorizer
    from src.adapters.spotify.callback_receiver import CallbackReceiver
    from src.config import simulation_requested
    from src.domain.errors import OstentatiousError
    from src.usecases.run_session import RunSessionUseCase

    config = JsonConfigAdapter()
    store = JsonSessionAdapter()

    if args.configure:
        return _configure(config)
    if args.logout:
        store.clear()
        print("Saved login removed.")
        return EXIT_OK

    try:
        cfg = config.load()
        configured = config.is_configured()
    except OstentatiousError as e:
        print(f"Error: {e}")
        return EXIT_FAILURE
    if not configured:
        print("Spotify app credentials missing: run with --configure or set SPOTIPY_CLIENT_ID/SPOTIPY_CLIENT_SECRET")
        return EXIT_FAILURE

    authorizer = SpotifyAuthorizer.from_config(cfg)
    redirect_uri = authorizer.redirect_uri
    timeout = cfg.get("callback_timeout")
    use_case = RunSessionUseCase(
        store=store,
        authorizer=authorizer,
        selector=TerminalPlaylistSelector(),
        receiver_factory=lambda auth: CallbackReceiver(auth, redirect_uri=redirect_uri),
        callback_timeout=float(timeout) if timeout else None,
        dry_run=args.dry_run or simulation_requested(),
    )

    try:
        use_case.execute(reset=args.reset, remove_only=args.remove)
    except KeyboardInterrupt:
        print("Interrupted.")
        return EXIT_INTERRUPTED
    except (OstentatiousError, SpotifyException) as e:
        logging.getLogger("ostentatious").debug("Run aborted", exc_info=True)
        print(f"Error: {e}")
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
