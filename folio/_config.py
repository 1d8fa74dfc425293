"""Client defaults and environment lookups."""

import os

DEFAULT_BASE_URL = "http://localhost:5000/api/v1"
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_CLOUD_NAME = "dse13zdp7"
USER_AGENT = "folio-python/0.1.0"

ENV_API_URL = "FOLIO_API_URL"
ENV_TOKEN = "FOLIO_TOKEN"
ENV_CLOUD_NAME = "FOLIO_CLOUDINARY_CLOUD_NAME"


def resolve_base_url(base_url: str | None = None) -> str:
    """Explicit argument, then FOLIO_API_URL, then the local development server."""
    return (base_url or os.environ.get(ENV_API_URL) or DEFAULT_BASE_URL).rstrip("/")


def resolve_token(token: str | None = None) -> str | None:
    return token or os.environ.get(ENV_TOKEN) or None


def resolve_cloud_name(cloud_name: str | None = None) -> str:
    return cloud_name or os.environ.get(ENV_CLOUD_NAME) or DEFAULT_CLOUD_NAME
