"""In-memory bearer credential held by a single client instance."""

import base64
from datetime import UTC, datetime
import json
from typing import Any


class CredentialStore:
    """Holds the current bearer token. No persistence, no validation.

    Validity is only discovered from the server's responses, so anything
    (including an expired token) can be stored here.
    """

    def __init__(self, token: str | None = None):
        self._token = token or None

    def set(self, token: str | None) -> None:
        """Replace the held credential unconditionally."""
        self._token = token or None

    def current(self) -> str | None:
        return self._token

    def clear(self) -> None:
        self._token = None

    def __bool__(self) -> bool:
        return self._token is not None

    def __repr__(self) -> str:
        # Never render the token itself.
        return f"CredentialStore(token={'<set>' if self._token else None})"


def decode_claims(token: str | None) -> dict[str, Any]:
    """
    Best-effort decode of a JWT payload for diagnostics.

    The signature is not verified. Opaque or malformed tokens yield ``{}``.

    Args:
        token: Bearer token

    Returns:
        Claims dict, with ``issued_at``/``expires_at`` datetimes added when
        ``iat``/``exp`` are present
    """
    if not token or token.count(".") != 2:
        return {}
    segment = token.split(".")[1]
    padded = segment + "=" * (-len(segment) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(padded))
    except (ValueError, TypeError):
        return {}
    if not isinstance(claims, dict):
        return {}

    for src, dst in (("iat", "issued_at"), ("exp", "expires_at")):
        if isinstance(claims.get(src), (int, float)):
            claims[dst] = datetime.fromtimestamp(claims[src], tz=UTC)
    return claims


def is_expired(token: str | None, now: datetime | None = None) -> bool | None:
    """True/False when the token carries ``exp``, None when it cannot be told."""
    expires_at = decode_claims(token).get("expires_at")
    if expires_at is None:
        return None
    return (now or datetime.now(UTC)) >= expires_at
