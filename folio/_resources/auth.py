"""Auth resource: session login/logout and token probes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .._exceptions import AuthenticationError, FolioError
from .._refresh import extract_token
from .._types import AuthUser, Envelope, LoginResult

if TYPE_CHECKING:
    from .._http import HTTPClient

logger = logging.getLogger(__name__)


class Auth:
    """client.auth: obtain, verify, refresh and drop the bearer token."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def login(self, *, email: str, password: str) -> LoginResult:
        """
        Exchange credentials for a token and install it on the client.

        A 401 here means bad credentials, so it is never refreshed or replayed.
        """
        body = self._http.post(
            "/auth/login", {"email": email, "password": password}, retry_auth=False
        )
        token = extract_token(body)
        if not token:
            raise AuthenticationError("Login response did not include a token", status_code=None)

        data = body.get("data") if isinstance(body.get("data"), dict) else {}
        result = LoginResult.from_dict({**data, "token": token})
        self._http.set_token(result.token)
        return result

    def logout(self) -> None:
        """Invalidate the server session; the local token is dropped even if that fails."""
        try:
            self._http.post("/auth/logout")
        finally:
            self._http.set_token(None)

    def me(self) -> Envelope[AuthUser]:
        """The user the current token belongs to."""
        return Envelope.from_dict(self._http.get("/auth/me"), AuthUser.from_dict)

    verify = me

    def is_token_valid(self) -> bool:
        """Probe /auth/me; any failure counts as invalid."""
        try:
            return self.me().success
        except FolioError as e:
            logger.debug("Token probe failed: %s", e)
            return False

    def refresh(self) -> str:
        """Force a token refresh and return the new token."""
        return self._http.refresh_token()

    def change_password(self, *, current_password: str, new_password: str) -> Envelope[None]:
        return Envelope.from_dict(
            self._http.put(
                "/auth/change-password",
                {"currentPassword": current_password, "newPassword": new_password},
            )
        )
