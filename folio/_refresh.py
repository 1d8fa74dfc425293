"""Credential refresh on 401, serialized so concurrent failures share one refresh."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
import logging
import threading
from typing import Any

import requests

from ._classifier import parse_body
from ._credentials import CredentialStore
from ._exceptions import AuthenticationError

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh"


class RefreshState(str, Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"
    REFRESHED = "refreshed"
    REFRESH_FAILED = "refresh_failed"


def extract_token(body: Any) -> str | None:
    """Token from ``{"token": ...}`` or the envelope form ``{"data": {"token": ...}}``."""
    if not isinstance(body, dict):
        return None
    token = body.get("token")
    if not token and isinstance(body.get("data"), dict):
        token = body["data"].get("token")
    return str(token) if token else None


class RefreshController:
    """
    Exchanges the current (possibly expired) credential for a new one.

    Each completed refresh bumps ``generation``. Callers capture the
    generation when they send a request; if it has moved on by the time
    their 401 is handled, somebody else already refreshed and the outcome
    of that refresh is reused instead of starting another one.
    """

    def __init__(
        self,
        session: requests.Session,
        store: CredentialStore,
        refresh_url: str,
        timeout: float,
        on_login_required: Callable[[], None] | None = None,
    ):
        self._session = session
        self._store = store
        self._refresh_url = refresh_url
        self._timeout = timeout
        self._on_login_required = on_login_required
        self._lock = threading.Lock()
        self._generation = 0
        self._last_ok = False
        self.state = RefreshState.IDLE

    @property
    def generation(self) -> int:
        return self._generation

    def recover(self, seen_generation: int) -> bool:
        """
        Handle a 401 for a request sent at ``seen_generation``.

        Returns:
            True if a fresh credential is installed and the request may be
            replayed, False if the caller must re-authenticate
        """
        with self._lock:
            if self._generation != seen_generation:
                logger.debug("Refresh already completed by a concurrent request, reusing outcome")
                return self._last_ok
            ok = self._refresh_locked()

        if not ok:
            self._login_required()
        return ok

    def refresh(self) -> str:
        """Force a refresh now. Raises AuthenticationError if it fails."""
        with self._lock:
            ok = self._refresh_locked()
        if not ok:
            self._login_required()
            raise AuthenticationError.login_required(
                "Token refresh failed", method="POST", url=self._refresh_url
            )
        return self._store.current()  # type: ignore[return-value]

    def reject(self, token: str | None) -> None:
        """
        Handle a 401 on a request replayed with a freshly refreshed ``token``.

        The server refused the new credential as well, so it is dropped and
        the caller asked to log in. Nothing happens if another refresh has
        already replaced ``token``.
        """
        with self._lock:
            if self._store.current() != token:
                return
            self._store.clear()
            self.state = RefreshState.REFRESH_FAILED
            self._last_ok = False
        self._login_required()

    def _refresh_locked(self) -> bool:
        self.state = RefreshState.REFRESHING
        headers = {"Content-Type": "application/json"}
        token = self._store.current()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("Refreshing credential (cookies: %d)", len(self._session.cookies))
        try:
            resp = self._session.post(self._refresh_url, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("Token refresh failed: %s", e)
            return self._finish(None)

        new_token = extract_token(parse_body(resp).data) if resp.ok else None
        resp.close()
        if not new_token:
            logger.warning("Token refresh rejected (HTTP %s)", resp.status_code)
        return self._finish(new_token)

    def _finish(self, new_token: str | None) -> bool:
        if new_token:
            self._store.set(new_token)
            self.state = RefreshState.REFRESHED
        else:
            # Only a refresh that actually ran may clear the credential
            self._store.clear()
            self.state = RefreshState.REFRESH_FAILED
        self._last_ok = new_token is not None
        self._generation += 1
        return self._last_ok

    def _login_required(self) -> None:
        if self._on_login_required is not None:
            self._on_login_required()
