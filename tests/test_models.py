"""Tests for data models."""

import pytest

from licensegate.exceptions import ResponseError, UnknownResultError
from licensegate.models import ServerResponse, ValidationType, VerificationResult


class TestValidationType:
    """Tests for the ValidationType enum."""

    def test_only_valid_is_valid(self):
        """is_valid is True only for VALID."""
        for outcome in ValidationType:
            assert outcome.is_valid == (outcome is ValidationType.VALID)

    def test_closed_set(self):
        """The outcome set is fixed."""
        assert {o.name for o in ValidationType} == {
            "VALID", "NOT_FOUND", "NOT_ACTIVE", "EXPIRED", "LICENSE_SCOPE_FAILED",
            "IP_LIMIT_EXCEEDED", "RATE_LIMIT_EXCEEDED", "FAILED_CHALLENGE",
            "SERVER_ERROR", "CONNECTION_ERROR",
        }

    def test_from_result(self):
        assert ValidationType.from_result("EXPIRED") is ValidationType.EXPIRED

    def test_from_result_unknown(self):
        """Unknown names raise UnknownResultError."""
        with pytest.raises(UnknownResultError, match="SUSPENDED"):
            ValidationType.from_result("SUSPENDED")

    def test_from_result_case_sensitive(self):
        with pytest.raises(UnknownResultError):
            ValidationType.from_result("valid")


class TestServerResponse:
    """Tests for ServerResponse.from_payload."""

    def test_full_payload(self):
        response = ServerResponse.from_payload(
            {"result": "VALID", "valid": True, "signedChallenge": "c2ln"}
        )
        assert response == ServerResponse(result="VALID", valid=True, signed_challenge="c2ln")

    def test_missing_fields(self):
        """Absent fields are None."""
        assert ServerResponse.from_payload({}) == ServerResponse()

    def test_error_present_with_null(self):
        """An 'error' key counts even when its value is null."""
        response = ServerResponse.from_payload({"error": None, "result": "VALID"})
        assert response.error is not None

    def test_error_message(self):
        response = ServerResponse.from_payload({"error": "User not found"})
        assert response.error == "User not found"

    def test_not_an_object(self):
        """A JSON array is rejected."""
        with pytest.raises(ResponseError, match="JSON object"):
            ServerResponse.from_payload(["VALID"])

    def test_result_wrong_type(self):
        with pytest.raises(ResponseError, match="result"):
            ServerResponse.from_payload({"result": 1})

    def test_valid_wrong_type(self):
        with pytest.raises(ResponseError, match="valid"):
            ServerResponse.from_payload({"result": "VALID", "valid": "false"})

    def test_signed_challenge_wrong_type_dropped(self):
        """A non-string signedChallenge is treated as absent."""
        response = ServerResponse.from_payload({"result": "VALID", "signedChallenge": 42})
        assert response.signed_challenge is None


class TestVerificationResult:
    def test_is_valid_follows_outcome(self):
        assert VerificationResult(ValidationType.VALID).is_valid is True
        assert VerificationResult(ValidationType.EXPIRED, error="x").is_valid is False
