"""Typed error hierarchy for the portfolio API client."""

from typing import Any


class FolioError(Exception):
    """Base exception for all folio client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        method: str | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.method = method
        self.url = url
        self.details = details or {}

    @property
    def errors(self) -> list[str]:
        """Field-level messages the server attached to the failure, if any."""
        errors = self.details.get("errors")
        return [str(e) for e in errors] if isinstance(errors, list) else []


class NetworkError(FolioError):
    """Transport failed before any response was received."""


class TimeoutError(NetworkError):
    """The request did not complete within the configured timeout."""


class AuthenticationError(FolioError):
    """401 that could not be recovered by refreshing the credential."""

    @classmethod
    def login_required(cls, reason: str | None = None, **kwargs: Any) -> "AuthenticationError":
        """Create an error telling the caller to re-authenticate."""
        message = "Authentication required. Please log in again."
        if reason:
            message = f"{reason.rstrip('.')}. {message}"
        return cls(message, status_code=401, **kwargs)


class RateLimitError(FolioError):
    """429 still returned after every backoff attempt was spent."""

    def __init__(
        self,
        message: str,
        retry_after: int | None = None,
        remaining: str | None = None,
        reset: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after
        self.remaining = remaining
        self.reset = reset


class APIStatusError(FolioError):
    """Non-2xx response other than 401 and 429."""


class APIError(APIStatusError):
    """Non-2xx response whose body carried no usable error message."""


class ValidationError(APIStatusError):
    """Non-2xx response with a server-supplied error message, propagated verbatim."""


class PermissionDeniedError(ValidationError):
    """403: authenticated but not allowed."""


class NotFoundError(ValidationError):
    """404: resource does not exist."""


class ConflictError(ValidationError):
    """409: resource already exists or conflicts."""


# Refinements of ValidationError by status code.
STATUS_MAP: dict[int, type[ValidationError]] = {
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
}
