"""Unit tests for the HTTP edge helpers."""

import pytest

from forum.config import PaginationSettings
from forum.domain.error import (
    AccountDisabledError,
    AttachmentError,
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from forum.interface.api.auth import bearer_token
from forum.interface.api.envelope import failure, page_params
from forum.interface.error import to_http_exception


class TestToHttpException:
    """Tests for to_http_exception."""

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (AuthenticationError("Invalid credentials"), 401),
            (AccountDisabledError("42"), 403),
            (PermissionDeniedError("Admin access required"), 403),
            (NotFoundError("Thread", "42"), 404),
            (ValidationError("Bad title"), 400),
            (AttachmentError("Too many files"), 400),
        ],
    )
    def test_status_codes(self, error, status_code):
        """Each domain error should map onto its HTTP status."""
        exc = to_http_exception(error)

        assert exc.status_code == status_code
        assert exc.detail == str(error)

    def test_401_carries_bearer_challenge(self):
        """401 responses should ask for a bearer token."""
        exc = to_http_exception(AuthenticationError("Authentication required"))

        assert exc.headers == {"WWW-Authenticate": "Bearer"}

    def test_other_statuses_have_no_challenge(self):
        """Non-401 responses should carry no extra headers."""
        assert to_http_exception(NotFoundError("User", "1")).headers is None


class TestEnvelope:
    """Tests for the response envelope helpers."""

    def test_failure_body(self):
        """Error bodies should carry success=false and the message."""
        body = failure("Validation error", error="title: too short")

        assert body["success"] is False
        assert body["message"] == "Validation error"
        assert body["error"] == "title: too short"
        assert body["data"] is None

    @pytest.mark.parametrize(
        ("limit", "expected"), [(None, 10), (25, 25), (500, 100)]
    )
    def test_page_params(self, limit, expected):
        """Should default the limit and clamp it to the maximum."""
        params = page_params(2, limit, PaginationSettings())

        assert params == {"page": 2, "limit": expected}


class TestBearerToken:
    """Tests for bearer_token."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer abc.def", "abc.def"),
            ("Basic abc", None),
            ("Bearer ", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extracts_token(self, header, expected):
        """Should accept only the Bearer scheme with a token."""
        assert bearer_token(header) == expected
