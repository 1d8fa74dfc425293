"""Shared helpers for resource modules."""

from typing import Any
from urllib.parse import quote


def _build_params(**kwargs: Any) -> dict:
    """Build query params dict, omitting None values."""
    return {k: v for k, v in kwargs.items() if v is not None}


def _segment(value: str) -> str:
    """Quote an id or slug for use as a single path segment."""
    return quote(str(value), safe="")
