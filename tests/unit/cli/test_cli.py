"""Tests for the folio CLI: commands, token persistence, error output."""

from unittest.mock import patch

import keyring.errors
import pytest
import responses
from rich.console import Console

from folio.cli.base import CommandGroup
from folio.cli.commands import COMMANDS, AuthCommandGroup, MessagesCommandGroup
from folio.cli.credentials import TokenStore
from folio.cli.main import _find_command, _real_main, build_parser
from folio.cli.util import CANCELLED_EXIT, graceful_main
from tests.conftest import BASE
from tests.utils.factories import envelope, jwt, project_data, uploaded_data


@pytest.fixture
def keychain():
    """In-memory stand-in for the OS keychain."""
    saved: dict[tuple[str, str], str] = {}

    def delete(service, username):
        if (service, username) not in saved:
            raise keyring.errors.PasswordDeleteError("not found")
        del saved[(service, username)]

    with (
        patch(
            "folio.cli.credentials.keyring.get_password",
            side_effect=lambda s, u: saved.get((s, u)),
        ),
        patch(
            "folio.cli.credentials.keyring.set_password",
            side_effect=lambda s, u, p: saved.__setitem__((s, u), p),
        ),
        patch("folio.cli.credentials.keyring.delete_password", side_effect=delete),
    ):
        yield saved


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich from wrapping table cells and URLs."""
    monkeypatch.setattr("folio.cli.commands.console", Console(width=200))


def run(*argv):
    return _real_main(["--base-url", BASE, *argv])


@pytest.mark.unit
class TestRegistry:
    def test_every_command_reachable(self):
        parser = build_parser()
        for command in COMMANDS:
            for name in command.get_all_names():
                assert _find_command(name) is command
        assert parser.parse_args(["projects", "list"]).command == "projects"

    def test_groups_hold_subcommands(self):
        assert [c.name for c in AuthCommandGroup().subcommands] == ["login", "status", "logout"]
        assert [c.name for c in MessagesCommandGroup().subcommands] == ["list", "read"]

    def test_command_without_name_rejected(self):
        with pytest.raises(ValueError, match="must define a 'name'"):

            class Nameless(CommandGroup):
                description = "x"

    def test_no_command_prints_help(self, capsys):
        assert _real_main([]) == 0
        assert "usage: folio" in capsys.readouterr().out


@pytest.mark.unit
class TestTokenStore:
    def test_round_trip(self, keychain):
        store = TokenStore("work")
        assert store.load() is None
        assert store.save("abc")
        assert keychain[("folio", "work_token")] == "abc"
        assert store.load() == "abc"
        store.delete()
        store.delete()
        assert store.load() is None

    def test_keychain_errors_are_not_fatal(self):
        with (
            patch(
                "folio.cli.credentials.keyring.get_password",
                side_effect=keyring.errors.KeyringError("locked"),
            ),
            patch(
                "folio.cli.credentials.keyring.set_password",
                side_effect=keyring.errors.PasswordSetError("locked"),
            ),
        ):
            store = TokenStore()
            assert store.load() is None
            assert not store.save("abc")


@pytest.mark.unit
class TestAuthCommands:
    @responses.activate
    def test_login_saves_token(self, keychain, capsys):
        responses.add(
            responses.POST,
            f"{BASE}/auth/login",
            json=envelope({"token": "tok_1", "user": {"_id": "u1", "email": "me@x.io"}}),
        )
        with patch("folio.cli.commands.getpass.getpass", return_value="secret"):
            code = run("auth", "login", "--email", "me@x.io")

        assert code == 0
        assert keychain[("folio", "default_token")] == "tok_1"
        assert "Logged in as me@x.io" in capsys.readouterr().out

    @responses.activate
    def test_login_no_save(self, keychain):
        responses.add(responses.POST, f"{BASE}/auth/login", json={"token": "tok_1"})
        with patch("folio.cli.commands.getpass.getpass", return_value="secret"):
            assert run("auth", "login", "--email", "a", "--no-save") == 0
        assert keychain == {}

    @responses.activate
    def test_bad_login_reports_error(self, keychain, capsys):
        responses.add(
            responses.POST, f"{BASE}/auth/login", json={"error": "Invalid credentials"}, status=401
        )
        with patch("folio.cli.commands.getpass.getpass", return_value="wrong"):
            assert run("auth", "login", "--email", "a") == 1
        assert "Invalid credentials" in capsys.readouterr().err

    @responses.activate
    def test_status_shows_expiry(self, keychain, capsys):
        keychain[("folio", "default_token")] = jwt()
        responses.add(responses.GET, f"{BASE}/auth/me", json=envelope({"email": "me@x.io"}))

        assert run("auth", "status") == 0

        out = capsys.readouterr().out
        assert "Authenticated as me@x.io" in out
        assert "Token expires 2100-01-01" in out

    def test_status_logged_out(self, keychain, capsys):
        assert run("auth", "status") == 1
        assert "Not logged in" in capsys.readouterr().out

    @responses.activate
    def test_logout_forgets_token(self, keychain):
        keychain[("folio", "default_token")] = "tok_1"
        responses.add(responses.POST, f"{BASE}/auth/logout", json=envelope())
        assert run("auth", "logout") == 0
        assert keychain == {}

    def test_group_without_subcommand(self, keychain, capsys):
        assert run("auth") == 1
        assert "No subcommand specified" in capsys.readouterr().out


@pytest.mark.unit
class TestListings:
    @responses.activate
    def test_projects_table(self, keychain, capsys):
        responses.add(
            responses.GET,
            f"{BASE}/projects",
            json=envelope(
                [project_data()], meta={"page": 1, "limit": 10, "total": 1, "totalPages": 1}
            ),
        )

        assert run("projects", "list", "--featured") == 0

        out = capsys.readouterr().out
        assert "Portfolio" in out
        assert "1 total" in out
        assert "featured=true" in responses.calls[0].request.url

    @responses.activate
    def test_empty_listing(self, keychain, capsys):
        responses.add(responses.GET, f"{BASE}/skills", json=envelope([]))
        assert run("skills", "ls") == 0
        assert "Nothing found" in capsys.readouterr().out

    def test_listing_without_subcommand(self, keychain, capsys):
        assert run("timeline") == 1

    @responses.activate
    def test_unread_messages(self, keychain):
        keychain[("folio", "default_token")] = "tok_1"
        responses.add(responses.GET, f"{BASE}/contact", json=envelope([]))
        assert run("messages", "list", "--unread") == 0
        assert "read=false" in responses.calls[0].request.url

    @responses.activate
    def test_read_message_marks_it(self, keychain, capsys):
        keychain[("folio", "default_token")] = "tok_1"
        message = {"_id": "m1", "name": "Ann", "email": "a@x.io", "message": "Hello there"}
        responses.add(responses.GET, f"{BASE}/contact/m1", json=envelope(message))
        responses.add(
            responses.PUT, f"{BASE}/contact/m1/read", json=envelope({**message, "read": True})
        )

        assert run("messages", "read", "m1") == 0

        assert "Hello there" in capsys.readouterr().out
        assert responses.calls[1].request.method == "PUT"


@pytest.mark.unit
class TestTokenLifecycle:
    @responses.activate
    def test_refreshed_token_saved(self, keychain):
        keychain[("folio", "default_token")] = "tok_old"
        responses.add(responses.GET, f"{BASE}/skills", json={"error": "Token expired"}, status=401)
        responses.add(responses.POST, f"{BASE}/auth/refresh", json={"token": "tok_new"})
        responses.add(responses.GET, f"{BASE}/skills", json=envelope([]))

        assert run("skills", "list") == 0

        assert keychain[("folio", "default_token")] == "tok_new"

    @responses.activate
    def test_failed_refresh_forgets_token(self, keychain, capsys):
        keychain[("folio", "default_token")] = "tok_old"
        responses.add(responses.GET, f"{BASE}/skills", json={"error": "Token expired"}, status=401)
        responses.add(responses.POST, f"{BASE}/auth/refresh", status=401)

        assert run("skills", "list") == 1

        err = capsys.readouterr().err
        assert "Session expired" in err
        assert "log in again" in err
        assert keychain == {}

    @responses.activate
    def test_refused_refreshed_token_forgotten(self, keychain, capsys):
        keychain[("folio", "default_token")] = "tok_old"
        responses.add(responses.GET, f"{BASE}/skills", json={"error": "Token expired"}, status=401)
        responses.add(responses.POST, f"{BASE}/auth/refresh", json={"token": "tok_new"})
        responses.add(responses.GET, f"{BASE}/skills", json={"error": "Revoked"}, status=401)

        assert run("skills", "list") == 1

        assert "Session expired" in capsys.readouterr().err
        assert keychain == {}

    @responses.activate
    def test_token_flag_overrides_keychain(self, keychain):
        keychain[("folio", "default_token")] = "saved"
        responses.add(responses.GET, f"{BASE}/skills", json=envelope([]))
        assert run("--token", "flag", "skills", "list") == 0
        assert responses.calls[0].request.headers["Authorization"] == "Bearer flag"

    @responses.activate
    def test_validation_errors_listed(self, keychain, capsys):
        responses.add(
            responses.GET,
            f"{BASE}/skills",
            json={"success": False, "error": "Validation failed", "errors": ["limit too big"]},
            status=400,
        )
        assert run("skills", "list", "--limit", "1000") == 1
        err = capsys.readouterr().err
        assert "Validation failed" in err
        assert "limit too big" in err


@pytest.mark.unit
class TestUpload:
    @responses.activate
    def test_single_upload(self, keychain, tmp_path, capsys):
        keychain[("folio", "default_token")] = "tok_1"
        path = tmp_path / "shot.png"
        path.write_bytes(b"png")
        responses.add(responses.POST, f"{BASE}/upload/single", json=envelope(uploaded_data()))

        assert run("upload", str(path), "--folder", "projects") == 0

        out = capsys.readouterr().out
        assert "projects/shot" in out
        assert "w_150,h_150" in out


@pytest.mark.unit
class TestGracefulMain:
    def test_interrupt_exit_code(self, capsys):
        def interrupted(argv):
            raise KeyboardInterrupt

        assert graceful_main(interrupted, []) == CANCELLED_EXIT
        assert "Cancelled" in capsys.readouterr().err

    def test_passes_return_code(self):
        assert graceful_main(lambda argv: 3, []) == 3
