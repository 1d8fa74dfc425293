"""Tests for the exception hierarchy."""

import pytest

from folio._exceptions import (
    STATUS_MAP,
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


@pytest.mark.unit
class TestExceptionHierarchy:
    def test_all_inherit_from_base(self):
        for exc_cls in [
            NetworkError,
            TimeoutError,
            AuthenticationError,
            RateLimitError,
            APIStatusError,
            APIError,
            ValidationError,
        ]:
            assert issubclass(exc_cls, FolioError)

    def test_timeout_is_network_error(self):
        assert issubclass(TimeoutError, NetworkError)

    def test_status_refinements_are_validation_errors(self):
        for exc_cls in (PermissionDeniedError, NotFoundError, ConflictError):
            assert issubclass(exc_cls, ValidationError)

    def test_api_error_is_not_validation_error(self):
        assert not issubclass(APIError, ValidationError)

    def test_base_carries_fields(self):
        err = FolioError("boom", status_code=500, method="GET", url="https://x/y")
        assert str(err) == "boom"
        assert err.message == "boom"
        assert err.status_code == 500
        assert err.method == "GET"
        assert err.url == "https://x/y"
        assert err.details == {}

    def test_errors_list_from_details(self):
        err = ValidationError("Invalid", details={"errors": ["title is required", "slug taken"]})
        assert err.errors == ["title is required", "slug taken"]

    def test_errors_empty_without_list(self):
        assert ValidationError("x", details={"errors": "nope"}).errors == []
        assert ValidationError("x").errors == []


@pytest.mark.unit
class TestAuthenticationError:
    def test_login_required_without_reason(self):
        err = AuthenticationError.login_required()
        assert err.message == "Authentication required. Please log in again."
        assert err.status_code == 401

    def test_login_required_with_reason(self):
        err = AuthenticationError.login_required("Token expired")
        assert err.message == "Token expired. Authentication required. Please log in again."

    def test_login_required_reason_with_period(self):
        err = AuthenticationError.login_required("Token expired.")
        assert err.message.startswith("Token expired. Authentication")


@pytest.mark.unit
class TestRateLimitError:
    def test_carries_hints(self):
        err = RateLimitError(
            "slow down", retry_after=30, remaining="0", reset="60", status_code=429
        )
        assert err.retry_after == 30
        assert err.remaining == "0"
        assert err.reset == "60"
        assert err.status_code == 429


@pytest.mark.unit
class TestStatusMap:
    def test_403_maps_to_permission_denied(self):
        assert STATUS_MAP[403] is PermissionDeniedError

    def test_404_maps_to_not_found(self):
        assert STATUS_MAP[404] is NotFoundError

    def test_409_maps_to_conflict(self):
        assert STATUS_MAP[409] is ConflictError

    def test_auth_and_rate_limit_not_in_map(self):
        assert 401 not in STATUS_MAP
        assert 429 not in STATUS_MAP
