"""HTTP client wrapping requests.Session with bearer auth, refresh-and-replay, and 429 backoff."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
import logging
import mimetypes
import os
from pathlib import Path
import time
from typing import IO, Any
from urllib.parse import quote

import requests

from ._backoff import BackoffPolicy, RetryState
from ._classifier import AuthFailure, GenericFailure, RateLimited, Success, classify
from ._config import DEFAULT_TIMEOUT, USER_AGENT, resolve_base_url
from ._credentials import CredentialStore
from ._exceptions import (
    STATUS_MAP,
    APIError,
    AuthenticationError,
    NetworkError,
    RateLimitError,
    TimeoutError,
    ValidationError,
)
from ._refresh import REFRESH_PATH, RefreshController

logger = logging.getLogger(__name__)

FileInput = str | os.PathLike | bytes | IO[bytes] | tuple
# (filename, content, content type) as accepted by requests' ``files=``
BufferedFile = tuple[str, bytes, str]


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Drop None/empty-string values; booleans become ``true``/``false``."""
    if not params:
        return None
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None or (isinstance(value, str) and value == ""):
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif not isinstance(value, (list, tuple)):
            value = str(value)
        cleaned[key] = value
    return cleaned or None


def buffer_file(file: FileInput) -> BufferedFile:
    """
    Read an upload into memory so the multipart body can be rebuilt on replay.

    Accepts a path, raw bytes, a binary file object, or a
    ``(filename, content[, content_type])`` tuple where content is bytes or
    a file object.
    """
    if isinstance(file, tuple):
        name, content, *rest = file
        if not isinstance(content, bytes):
            content = content.read()
        content_type = rest[0] if rest else _guess_type(name)
        return str(name), content, content_type
    if isinstance(file, bytes):
        return "upload", file, "application/octet-stream"
    if isinstance(file, (str, os.PathLike)):
        path = Path(file)
        return path.name, path.read_bytes(), _guess_type(path.name)

    name = os.path.basename(str(getattr(file, "name", "upload")))
    return name, file.read(), _guess_type(name)


def _guess_type(name: str) -> str:
    return mimetypes.guess_type(name)[0] or "application/octet-stream"


@dataclass
class RequestDescriptor:
    """Everything needed to (re)send one request. Headers are derived per send."""

    method: str
    url: str
    params: dict[str, Any] | None = None
    json: Any = None
    files: list[tuple[str, BufferedFile]] | None = None
    form: dict[str, str] | None = None
    # 401 may trigger a credential refresh and a single replay
    retry_auth: bool = True

    @property
    def is_multipart(self) -> bool:
        return self.files is not None

    def headers(self, token: str | None) -> dict[str, str]:
        # Multipart requests leave Content-Type to requests so it can add the boundary
        headers = {} if self.is_multipart else {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers


class HTTPClient:
    """Request executor: every call to the portfolio API goes through here."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        backoff: BackoffPolicy | None = None,
        on_login_required: Callable[[], None] | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for relative paths (default from FOLIO_API_URL)
            token: Initial bearer token
            timeout: Per-request timeout in seconds
            backoff: Rate-limit backoff policy
            on_login_required: Called once when a refresh fails and the user
                has to log in again
            session: Pre-configured requests session (cookies, adapters)
        """
        self.base_url = resolve_base_url(base_url)
        self.timeout = timeout
        self.backoff = backoff or BackoffPolicy()
        self.credentials = CredentialStore(token)
        # A caller-supplied session is used as is and left open on close()
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
            session.headers["Accept"] = "application/json"
        self._session = session
        self._refresher = RefreshController(
            self._session,
            self.credentials,
            refresh_url=self._url(REFRESH_PATH),
            timeout=timeout,
            on_login_required=on_login_required,
        )

    # ── credential ──────────────────────────────────────────────────

    @property
    def token(self) -> str | None:
        return self.credentials.current()

    def set_token(self, token: str | None) -> None:
        self.credentials.set(token)

    @property
    def refresher(self) -> RefreshController:
        return self._refresher

    def refresh_token(self) -> str:
        """Exchange the current credential for a new one or raise AuthenticationError."""
        return self._refresher.refresh()

    # ── public surface ──────────────────────────────────────────────

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        retry_auth: bool = True,
    ) -> Any:
        """Send a JSON request and return the decoded body."""
        descriptor = RequestDescriptor(
            method=method.upper(),
            url=self._url(path),
            params=clean_params(params),
            json=json,
            retry_auth=retry_auth,
        )
        return self.execute(descriptor)

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, *, retry_auth: bool = True) -> Any:
        return self.request("POST", path, json=json, retry_auth=retry_auth)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def upload_file(self, file: FileInput, folder: str = "general") -> Any:
        """Upload one file as ``file`` to /upload/single."""
        descriptor = RequestDescriptor(
            method="POST",
            url=self._url("/upload/single"),
            files=[("file", buffer_file(file))],
            form={"folder": folder},
        )
        return self.execute(descriptor)

    def upload_files(self, files: Iterable[FileInput], folder: str = "general") -> Any:
        """Upload several files as repeated ``files`` fields to /upload/multiple."""
        descriptor = RequestDescriptor(
            method="POST",
            url=self._url("/upload/multiple"),
            files=[("files", buffer_file(f)) for f in files],
            form={"folder": folder},
        )
        return self.execute(descriptor)

    def delete_file(self, public_id: str) -> Any:
        return self.delete(f"/upload/{quote(public_id, safe='')}")

    # ── execution ───────────────────────────────────────────────────

    def execute(self, descriptor: RequestDescriptor) -> Any:
        """
        Send ``descriptor`` until it resolves.

        A 401 triggers at most one refresh-and-replay; a 429 is retried with
        backoff until the policy's attempts are spent.

        Returns:
            Decoded response body, exactly as the server sent it

        Raises:
            AuthenticationError: 401 that refreshing could not fix
            RateLimitError: 429 on the final attempt
            ValidationError: Other non-2xx with a server message
            APIError: Other non-2xx without a usable message
            NetworkError: Transport failure (no retry)
        """
        state = RetryState(self.backoff)
        while True:
            generation = self._refresher.generation
            token = self.credentials.current()
            resp = self._send(descriptor, token)
            outcome = classify(resp)
            resp.close()

            if isinstance(outcome, Success):
                return outcome.body

            if isinstance(outcome, AuthFailure):
                if not descriptor.retry_auth:
                    raise AuthenticationError(
                        outcome.message, status_code=401, **self._context(descriptor, outcome.body)
                    )
                if state.auth_replayed:
                    logger.warning(
                        "%s %s rejected again after refresh", descriptor.method, descriptor.url
                    )
                    self._refresher.reject(token)
                    raise AuthenticationError.login_required(
                        outcome.message, **self._context(descriptor, outcome.body)
                    )
                if not self._refresher.recover(generation):
                    raise AuthenticationError.login_required(
                        outcome.message, **self._context(descriptor, outcome.body)
                    )
                state.auth_replayed = True
                logger.debug(
                    "Replaying %s %s with refreshed token", descriptor.method, descriptor.url
                )
                continue

            if isinstance(outcome, RateLimited):
                if state.exhausted:
                    logger.warning(
                        "Rate limited on %s %s after %d attempts",
                        descriptor.method,
                        descriptor.url,
                        state.attempt,
                    )
                    raise RateLimitError(
                        outcome.message,
                        retry_after=outcome.retry_after,
                        remaining=outcome.remaining,
                        reset=outcome.reset,
                        status_code=429,
                        **self._context(descriptor, outcome.body),
                    )
                delay = state.schedule(outcome.retry_after)
                logger.debug(
                    "Rate limited on %s %s (attempt %d/%d), retrying in %.1fs",
                    descriptor.method,
                    descriptor.url,
                    state.attempt,
                    self.backoff.max_attempts,
                    delay,
                )
                time.sleep(delay)
                state.advance()
                continue

            raise self._status_error(outcome, descriptor)

    def _send(self, descriptor: RequestDescriptor, token: str | None) -> requests.Response:
        headers = descriptor.headers(token)
        logger.debug("%s %s", descriptor.method, descriptor.url)
        try:
            return self._session.request(
                descriptor.method,
                descriptor.url,
                params=descriptor.params,
                json=descriptor.json,
                data=descriptor.form,
                files=descriptor.files,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise TimeoutError(
                f"Request to {descriptor.url} timed out after {self.timeout}s",
                **self._context(descriptor),
            ) from e
        except requests.RequestException as e:
            raise NetworkError(f"Network error: {e!s}", **self._context(descriptor)) from e

    def _status_error(self, outcome: GenericFailure, descriptor: RequestDescriptor) -> Exception:
        if outcome.from_server:
            exc_cls: type[APIError] | type[ValidationError] = STATUS_MAP.get(
                outcome.status_code, ValidationError
            )
        else:
            exc_cls = APIError
        return exc_cls(
            outcome.message,
            status_code=outcome.status_code,
            **self._context(descriptor, outcome.body),
        )

    @staticmethod
    def _context(descriptor: RequestDescriptor, body: Any = None) -> dict[str, Any]:
        return {
            "method": descriptor.method,
            "url": descriptor.url,
            "details": body if isinstance(body, dict) else None,
        }

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
