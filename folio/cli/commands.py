"""
Commands for the folio CLI.

auth (login, logout, status), listings for each content collection,
messages (list, read) and upload.
"""

from argparse import ArgumentParser, Namespace
import getpass
from typing import TYPE_CHECKING, Any, ClassVar

from rich.console import Console

from .._credentials import decode_claims, is_expired
from ..media import build_cloudinary_url
from .base import Command, CommandGroup
from .display import (
    CERTIFICATE_COLUMNS,
    MESSAGE_COLUMNS,
    PROJECT_COLUMNS,
    SKILL_COLUMNS,
    TIMELINE_COLUMNS,
    UPLOAD_COLUMNS,
    Column,
    build_table,
    print_envelope,
)

if TYPE_CHECKING:
    from .._client import Folio

console = Console()


# ── auth ────────────────────────────────────────────────────────────


class LoginCommand(Command):
    name = "login"
    aliases: ClassVar[list[str]] = ["l"]
    description = "Log in and save the token to the keychain"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument("--email", help="Account email (prompted if omitted)")
        parser.add_argument(
            "--no-save", action="store_true", help="Don't save the token to the keychain"
        )

    def execute(self, args: Namespace, client: "Folio") -> int:
        email = args.email or input("Email: ").strip()
        password = getpass.getpass("Password: ")
        result = client.auth.login(email=email, password=password)
        if not args.no_save:
            args.token_store.save(result.token)
        who = result.user.email if result.user else email
        console.print(f"[green]✓[/green] Logged in as {who}")
        return 0


class LogoutCommand(Command):
    name = "logout"
    aliases: ClassVar[list[str]] = ["o"]
    description = "Log out and forget the saved token"

    def execute(self, args: Namespace, client: "Folio") -> int:
        try:
            if client.token:
                client.auth.logout()
        finally:
            args.token_store.delete()
        console.print("[green]✓[/green] Logged out")
        return 0


class StatusCommand(Command):
    name = "status"
    aliases: ClassVar[list[str]] = ["s"]
    description = "Show who the saved token belongs to"

    def execute(self, args: Namespace, client: "Folio") -> int:
        if not client.token:
            console.print("Not logged in. Run 'folio auth login'.")
            return 1

        user = client.auth.me().data
        console.print(f"[green]✓[/green] Authenticated as {user.email if user else 'unknown'}")
        expires_at = decode_claims(client.token).get("expires_at")
        if expires_at is not None:
            state = "expired" if is_expired(client.token) else "expires"
            console.print(f"  Token {state} {expires_at:%Y-%m-%d %H:%M:%S %Z}")
        return 0


class AuthCommandGroup(CommandGroup):
    name = "auth"
    aliases: ClassVar[list[str]] = ["a"]
    description = "Manage authentication"

    def __init__(self) -> None:
        super().__init__()
        self.add_subcommand(LoginCommand())
        self.add_subcommand(StatusCommand())
        self.add_subcommand(LogoutCommand())


# ── listings ────────────────────────────────────────────────────────


class ListCommand(Command):
    """``<collection> list`` with page/limit options."""

    resource: str = ""
    title: str = ""
    columns: ClassVar[list[Column]] = []

    def add_arguments(self, parser: ArgumentParser) -> None:
        sub = parser.add_subparsers(dest=f"{self.name}_command")
        list_parser = sub.add_parser("list", aliases=["ls"], help=f"List {self.title.lower()}")
        list_parser.add_argument("--page", type=int)
        list_parser.add_argument("--limit", type=int)
        self.add_filters(list_parser)

    def add_filters(self, parser: ArgumentParser) -> None:
        """Extra filter flags for the list subcommand."""

    def filters(self, args: Namespace) -> dict[str, Any]:
        return {}

    def execute(self, args: Namespace, client: "Folio") -> int:
        if getattr(args, f"{self.name}_command", None) is None:
            print(f"Error: No subcommand specified for '{self.name}' (try 'list')")
            return 1
        envelope = getattr(client, self.resource).list(
            page=args.page, limit=args.limit, **self.filters(args)
        )
        print_envelope(console, self.title, self.columns, envelope)
        return 0


class ProjectsCommand(ListCommand):
    name = "projects"
    description = "Portfolio projects"
    resource = "projects"
    title = "Projects"
    columns = PROJECT_COLUMNS

    def add_filters(self, parser: ArgumentParser) -> None:
        parser.add_argument("--featured", action="store_true", default=None)
        parser.add_argument("--tag")

    def filters(self, args: Namespace) -> dict[str, Any]:
        return {"featured": args.featured, "tag": args.tag}


class CertificatesCommand(ListCommand):
    name = "certificates"
    aliases: ClassVar[list[str]] = ["certs"]
    description = "Certificates"
    resource = "certificates"
    title = "Certificates"
    columns = CERTIFICATE_COLUMNS

    def add_filters(self, parser: ArgumentParser) -> None:
        parser.add_argument("--organization")
        parser.add_argument("--tag")

    def filters(self, args: Namespace) -> dict[str, Any]:
        return {"organization": args.organization, "tag": args.tag}


class TimelineCommand(ListCommand):
    name = "timeline"
    description = "Timeline entries"
    resource = "timeline"
    title = "Timeline"
    columns = TIMELINE_COLUMNS


class SkillsCommand(ListCommand):
    name = "skills"
    description = "Skills"
    resource = "skills"
    title = "Skills"
    columns = SKILL_COLUMNS

    def add_filters(self, parser: ArgumentParser) -> None:
        parser.add_argument("--category")

    def filters(self, args: Namespace) -> dict[str, Any]:
        return {"category": args.category}


# ── messages ────────────────────────────────────────────────────────


class MessagesListCommand(Command):
    name = "list"
    aliases: ClassVar[list[str]] = ["ls"]
    description = "List contact messages"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument("--page", type=int)
        parser.add_argument("--limit", type=int)
        parser.add_argument("--unread", action="store_true", help="Only unread messages")

    def execute(self, args: Namespace, client: "Folio") -> int:
        envelope = client.contact.list(
            page=args.page, limit=args.limit, read=False if args.unread else None
        )
        print_envelope(console, "Messages", MESSAGE_COLUMNS, envelope)
        return 0


class MessagesReadCommand(Command):
    name = "read"
    description = "Show a message and mark it read"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument("message_id")

    def execute(self, args: Namespace, client: "Folio") -> int:
        message = client.contact.get(args.message_id).data
        if message is not None:
            console.print(f"[bold]{message.subject or '(no subject)'}[/bold]")
            console.print(f"From: {message.name} <{message.email}>\n")
            console.print(message.message)
        client.contact.mark_read(args.message_id)
        return 0


class MessagesCommandGroup(CommandGroup):
    name = "messages"
    aliases: ClassVar[list[str]] = ["m"]
    description = "Contact messages"

    def __init__(self) -> None:
        super().__init__()
        self.add_subcommand(MessagesListCommand())
        self.add_subcommand(MessagesReadCommand())


# ── upload ──────────────────────────────────────────────────────────


class UploadCommand(Command):
    name = "upload"
    aliases: ClassVar[list[str]] = ["up"]
    description = "Upload image files"

    def add_arguments(self, parser: ArgumentParser) -> None:
        parser.add_argument("paths", nargs="+", help="Files to upload")
        parser.add_argument("--folder", default="general", help="Destination folder")

    def execute(self, args: Namespace, client: "Folio") -> int:
        if len(args.paths) == 1:
            uploaded = client.uploads.upload(args.paths[0], folder=args.folder).data
            files = [uploaded] if uploaded is not None else []
        else:
            files = client.uploads.upload_many(args.paths, folder=args.folder).data or []

        console.print(build_table("Uploaded", UPLOAD_COLUMNS, files))
        for f in files:
            console.print(f"[dim]{build_cloudinary_url(f.public_id, 'thumbnail')}[/dim]")
        return 0


COMMANDS: list[Command] = [
    AuthCommandGroup(),
    ProjectsCommand(),
    CertificatesCommand(),
    TimelineCommand(),
    SkillsCommand(),
    MessagesCommandGroup(),
    UploadCommand(),
]
