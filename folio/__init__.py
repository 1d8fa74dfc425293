"""
folio - Python client for the portfolio REST API.

Bearer auth with refresh-and-replay on 401 and backoff on 429.
"""

__version__ = "0.1.0"

from ._backoff import BackoffPolicy
from ._client import Folio
from ._exceptions import (
    APIError,
    APIStatusError,
    AuthenticationError,
    ConflictError,
    FolioError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    TimeoutError,
    ValidationError,
)
from ._http import HTTPClient
from .media import CLOUDINARY_TRANSFORMS, build_cloudinary_url

__all__ = [
    "CLOUDINARY_TRANSFORMS",
    "APIError",
    "APIStatusError",
    "AuthenticationError",
    "BackoffPolicy",
    "ConflictError",
    "Folio",
    "FolioError",
    "HTTPClient",
    "NetworkError",
    "NotFoundError",
    "PermissionDeniedError",
    "RateLimitError",
    "TimeoutError",
    "ValidationError",
    "build_cloudinary_url",
]
