"""Command line flags and exit codes."""

import json

import keyring
import pytest
from keyring.errors import NoKeyringError

import main
from src.domain.errors import PlaylistNotFoundError
from src.domain.model import BumpOutcome, BumpResult


@pytest.fixture(autouse=True)
def no_keychain(monkeypatch):
    monkeypatch.setattr(keyring, "get_password", lambda service, key: None)


class TestFlags:

    def test_defaults(self):
        args = main.build_parser().parse_args([])
        assert not args.reset and not args.remove and not args.dry_run

    def test_single_dash_reset_and_remove(self):
        args = main.build_parser().parse_args(["-reset", "-r"])
        assert args.reset and args.remove

    def test_long_forms(self):
        args = main.build_parser().parse_args(["--reset", "--remove", "--dry-run", "-v"])
        assert args.reset and args.remove and args.dry_run and args.verbose

    def test_positional_arguments_are_rejected(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(["Played"])


class TestExitCodes:

    def test_missing_app_credentials(self, capsys):
        assert main.main([]) == main.EXIT_FAILURE
        assert "--configure" in capsys.readouterr().out

    def test_corrupt_settings_file_exits_with_a_hint(self, isolated_config_dir, capsys):
        isolated_config_dir.mkdir(parents=True)
        (isolated_config_dir / "settings.json").write_text("{not json", encoding="utf-8")

        assert main.main([]) == main.EXIT_FAILURE
        out = capsys.readouterr().out
        assert "Could not read settings" in out
        assert "--configure" in out

    def test_configure_replaces_a_corrupt_settings_file(self, isolated_config_dir, monkeypatch, capsys):
        def no_backend(service, key, value):
            raise NoKeyringError("no backend")

        monkeypatch.setattr(keyring, "set_password", no_backend)
        monkeypatch.setattr("builtins.input", lambda prompt: "new-id")
        monkeypatch.setattr(main.getpass, "getpass", lambda prompt: "new-secret")
        isolated_config_dir.mkdir(parents=True)
        settings = isolated_config_dir / "settings.json"
        settings.write_text("{not json", encoding="utf-8")

        assert main.main(["--configure"]) == main.EXIT_OK
        assert "Starting over with empty settings" in capsys.readouterr().out
        saved = json.loads(settings.read_text(encoding="utf-8"))
        assert saved["spotify_client_id"] == "new-id"
        assert saved["spotify_client_secret"] == "new-secret"

    def test_logout_removes_saved_session(self, isolated_config_dir):
        isolated_config_dir.mkdir(parents=True)
        session = isolated_config_dir / "config.json"
        session.write_text(json.dumps({"token": None, "playlistName": "Played"}), encoding="utf-8")

        assert main.main(["--logout"]) == main.EXIT_OK
        assert not session.exists()

    def _configured(self, monkeypatch, outcome=None, error=None):
        monkeypatch.setenv("SPOTIPY_CLIENT_ID", "id")
        monkeypatch.setenv("SPOTIPY_CLIENT_SECRET", "secret")
        seen = {}

        def fake_execute(self, reset=False, remove_only=False):
            seen.update(reset=reset, remove_only=remove_only, dry_run=self.dry_run)
            if error is not None:
                raise error
            return BumpResult(outcome)

        monkeypatch.setattr("src.usecases.run_session.RunSessionUseCase.execute", fake_execute)
        return seen

    def test_success_passes_flags_through(self, monkeypatch):
        seen = self._configured(monkeypatch, outcome=BumpOutcome.REMOVED)

        assert main.main(["-reset", "-r"]) == main.EXIT_OK
        assert seen == {"reset": True, "remove_only": True, "dry_run": False}

    def test_simulation_environment_enables_dry_run(self, monkeypatch):
        monkeypatch.setenv("OSTENTATIOUS_SIMULATION", "1")
        seen = self._configured(monkeypatch, outcome=BumpOutcome.BUMPED)

        main.main([])
        assert seen["dry_run"] is True

    def test_domain_error_exits_nonzero(self, monkeypatch, capsys):
        self._configured(monkeypatch, error=PlaylistNotFoundError("Gone"))

        assert main.main([]) == main.EXIT_FAILURE
        assert "No playlist named 'Gone'" in capsys.readouterr().out

    def test_interrupt_exit_code(self, monkeypatch):
        self._configured(monkeypatch, error=KeyboardInterrupt())
        assert main.main([]) == main.EXIT_INTERRUPTED
