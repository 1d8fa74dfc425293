"""Folio client: one instance per application session."""

from __future__ import annotations

from collections.abc import Callable

import requests

from ._backoff import BackoffPolicy
from ._config import DEFAULT_TIMEOUT, resolve_token
from ._http import HTTPClient
from ._resources import (
    AboutProfiles,
    Auth,
    Certificates,
    Contact,
    Projects,
    Skills,
    Timeline,
    Uploads,
)


class Folio:
    """Client for the portfolio REST API.

    The client owns its credential; share the instance rather than the token.

    Usage:
        client = Folio(base_url="https://example.com/api/v1")
        client.auth.login(email="me@example.com", password="...")
        for project in client.projects.list(featured=True).data:
            print(project.title)
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        backoff: BackoffPolicy | None = None,
        on_login_required: Callable[[], None] | None = None,
        session: requests.Session | None = None,
    ):
        self._http = HTTPClient(
            base_url=base_url,
            token=resolve_token(token),
            timeout=timeout,
            backoff=backoff,
            on_login_required=on_login_required,
            session=session,
        )
        self.auth = Auth(self._http)
        self.projects = Projects(self._http)
        self.certificates = Certificates(self._http)
        self.timeline = Timeline(self._http)
        self.skills = Skills(self._http)
        self.about = AboutProfiles(self._http)
        self.contact = Contact(self._http)
        self.uploads = Uploads(self._http)

    @property
    def http(self) -> HTTPClient:
        """Low-level executor for endpoints without a resource namespace."""
        return self._http

    @property
    def token(self) -> str | None:
        return self._http.token

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> Folio:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
