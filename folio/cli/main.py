"""
Main CLI entry point for folio.

Global options pick the API and profile; the saved token for the profile is
loaded from the keychain and written back if the client refreshed it.
"""

import argparse
import logging
import sys

from .. import __version__
from .._client import Folio
from .._config import DEFAULT_TIMEOUT
from .._exceptions import FolioError
from .base import Command
from .commands import COMMANDS
from .credentials import TokenStore
from .util import graceful_main


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Portfolio API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--base-url", help="API base URL (or set FOLIO_API_URL)")
    parser.add_argument("--token", help="Bearer token (or set FOLIO_TOKEN)")
    parser.add_argument(
        "--profile", default=TokenStore.DEFAULT_PROFILE, help="Keychain profile for the token"
    )
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for command in COMMANDS:
        subparser = subparsers.add_parser(
            command.name, aliases=command.aliases, help=command.description
        )
        command.add_arguments(subparser)
    return parser


def _find_command(name: str) -> Command:
    for command in COMMANDS:
        if name in command.get_all_names():
            return command
    raise KeyError(name)


def _real_main(argv: list[str]) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 0

    command = _find_command(args.command)
    token_store = TokenStore(args.profile)
    args.token_store = token_store

    def _login_required() -> None:
        token_store.delete()
        print("💡 Session expired. Run 'folio auth login' to sign in again.", file=sys.stderr)

    saved_token = args.token or token_store.load()
    client = Folio(
        base_url=args.base_url,
        token=saved_token,
        timeout=args.timeout,
        on_login_required=_login_required,
    )
    initial_token = client.token
    try:
        code = command.execute(args, client)
    except FolioError as e:
        print(f"❌ {e}", file=sys.stderr)
        if e.errors:
            for error in e.errors:
                print(f"   • {error}", file=sys.stderr)
        return 1
    finally:
        client.close()

    # Persist a token the client refreshed along the way
    if client.token and client.token != initial_token and command.name != "auth":
        token_store.save(client.token)
    return code


def main() -> None:
    """Main CLI entry point with graceful interrupt handling."""
    code = graceful_main(_real_main, sys.argv[1:])
    raise SystemExit(code)


if __name__ == "__main__":
    main()
