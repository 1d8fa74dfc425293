"""Rich table rendering for CLI listings."""

from collections.abc import Callable, Sequence
from typing import Any

from rich.console import Console
from rich.table import Table

from .._types import Envelope

Column = tuple[str, Callable[[Any], object]]


def _text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "✓" if value else ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def build_table(title: str, columns: Sequence[Column], rows: Sequence[Any]) -> Table:
    table = Table(title=title, show_lines=False)
    for header, _ in columns:
        table.add_column(header)
    for row in rows:
        table.add_row(*(_text(getter(row)) for _, getter in columns))
    return table


def print_envelope(
    console: Console, title: str, columns: Sequence[Column], envelope: Envelope
) -> None:
    """Render a list envelope and its pagination footer."""
    rows = envelope.data or []
    console.print(build_table(title, columns, rows))
    if envelope.meta is not None:
        meta = envelope.meta
        console.print(
            f"[dim]page {meta.page}/{meta.total_pages} · {meta.total} total[/dim]",
        )
    elif not rows:
        console.print("[dim]Nothing found.[/dim]")


PROJECT_COLUMNS: list[Column] = [
    ("ID", lambda p: p.id),
    ("Title", lambda p: p.title),
    ("Slug", lambda p: p.slug),
    ("Tags", lambda p: p.tags),
    ("Featured", lambda p: p.featured),
]

CERTIFICATE_COLUMNS: list[Column] = [
    ("ID", lambda c: c.id),
    ("Title", lambda c: c.title),
    ("Organization", lambda c: c.organization),
    ("Issued", lambda c: c.issue_date[:10]),
]

TIMELINE_COLUMNS: list[Column] = [
    ("ID", lambda t: t.id),
    ("Title", lambda t: t.title),
    ("Type", lambda t: t.type),
    ("From", lambda t: t.start_date[:10]),
    ("To", lambda t: (t.end_date or "present")[:10]),
]

SKILL_COLUMNS: list[Column] = [
    ("ID", lambda s: s.id),
    ("Name", lambda s: s.name),
    ("Category", lambda s: s.category),
    ("Level", lambda s: s.level),
]

MESSAGE_COLUMNS: list[Column] = [
    ("ID", lambda m: m.id),
    ("From", lambda m: f"{m.name} <{m.email}>"),
    ("Subject", lambda m: m.subject),
    ("Read", lambda m: m.read),
]

UPLOAD_COLUMNS: list[Column] = [
    ("Public ID", lambda u: u.public_id),
    ("URL", lambda u: u.secure_url),
    ("Bytes", lambda u: u.bytes),
]
