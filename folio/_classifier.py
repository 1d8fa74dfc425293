"""Turn a completed HTTP response into a tagged outcome.

Every response lands in exactly one of four buckets:

- ``Success``        2xx, body passed through untouched
- ``AuthFailure``    401, candidate for refresh-and-replay
- ``RateLimited``    429, candidate for backoff
- ``GenericFailure`` anything else, terminal

The classifier has no side effects; it never touches the credential store.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any

import requests

logger = logging.getLogger(__name__)


@dataclass
class ParsedBody:
    """Decoded response body and how it was obtained."""

    data: Any
    is_json: bool
    # JSON was promised by Content-Type but the body did not decode
    parse_failed: bool = False
    # No readable body at all; data["message"] is the status line
    synthesized: bool = False


@dataclass
class Success:
    body: Any
    status_code: int


@dataclass
class AuthFailure:
    message: str
    body: Any = None


@dataclass
class RateLimited:
    message: str
    retry_after: int | None = None
    remaining: str | None = None
    reset: str | None = None
    body: Any = None


@dataclass
class GenericFailure:
    status_code: int
    message: str
    body: Any = None
    # True when the message came from the response body rather than the status line
    from_server: bool = False


Outcome = Success | AuthFailure | RateLimited | GenericFailure


def status_line(resp: requests.Response) -> str:
    return f"HTTP {resp.status_code}: {resp.reason or ''}".rstrip()


def parse_body(resp: requests.Response) -> ParsedBody:
    """Decode JSON when the Content-Type says so, otherwise wrap text as ``{"message": ...}``."""
    content_type = resp.headers.get("Content-Type", "")
    if "application/json" in content_type.lower():
        try:
            return ParsedBody(resp.json(), is_json=True)
        except ValueError:
            logger.warning(
                "Response claimed JSON but could not be decoded (%s %s)",
                resp.status_code,
                resp.url,
            )
            text = _read_text(resp)
            return ParsedBody(
                {"message": text or status_line(resp)},
                is_json=False,
                parse_failed=True,
                synthesized=not text,
            )

    text = _read_text(resp)
    return ParsedBody({"message": text or status_line(resp)}, is_json=False, synthesized=not text)


def _read_text(resp: requests.Response) -> str:
    try:
        return resp.text.strip()
    except (UnicodeDecodeError, LookupError):
        logger.debug("Failed to read response body as text: %s", status_line(resp))
        return ""


def extract_message(parsed: ParsedBody, resp: requests.Response) -> tuple[str, bool]:
    """Return ``(message, from_server)``; the status line is the last resort."""
    data = parsed.data
    if isinstance(data, dict) and not parsed.synthesized:
        for key in ("error", "message"):
            value = data.get(key)
            if isinstance(value, dict):
                value = value.get("message")
            if value:
                return str(value), True
    return status_line(resp), False


def parse_retry_after(value: str | None) -> int | None:
    """Seconds from ``Retry-After`` or ``RateLimit-Reset``; dates and garbage count as absent."""
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        logger.debug("Unparseable rate-limit header: %s", value)
        return None
    return max(seconds, 0)


def rate_limit_message(retry_after: int | None, remaining: str | None) -> str:
    if retry_after is None:
        message = "Rate limit exceeded. Please try again later."
    elif retry_after <= 60:
        message = f"Rate limit exceeded. Please try again in {retry_after} seconds."
    else:
        message = (
            f"Rate limit exceeded. Please try again in {math.ceil(retry_after / 60)} minutes."
        )
    if remaining is not None:
        message += f" ({remaining} requests remaining)"
    return message


def classify(resp: requests.Response) -> Outcome:
    """Classify a completed response."""
    parsed = parse_body(resp)

    if 200 <= resp.status_code < 300:
        return Success(body=parsed.data, status_code=resp.status_code)

    if resp.status_code == 429:
        retry_after = parse_retry_after(resp.headers.get("Retry-After"))
        remaining = resp.headers.get("RateLimit-Remaining")
        reset = resp.headers.get("RateLimit-Reset")
        # Without Retry-After, the seconds until the window resets are the wait estimate
        wait = retry_after if retry_after is not None else parse_retry_after(reset)
        return RateLimited(
            message=rate_limit_message(wait, remaining),
            retry_after=retry_after,
            remaining=remaining,
            reset=reset,
            body=parsed.data,
        )

    message, from_server = extract_message(parsed, resp)
    if resp.status_code == 401:
        return AuthFailure(message=message, body=parsed.data)
    return GenericFailure(
        status_code=resp.status_code, message=message, body=parsed.data, from_server=from_server
    )
