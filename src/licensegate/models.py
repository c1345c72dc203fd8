"""
Data models for LicenseGate verification.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .exceptions import ResponseError, UnknownResultError


class ValidationType(Enum):
    """
    The result of a license verification.

    Most members mirror the ``result`` names returned by the LicenseGate
    server. Three are produced locally by the client:

    - CONNECTION_ERROR: the request to the validation server failed.
    - SERVER_ERROR: the server returned an invalid or inconsistent response.
    - FAILED_CHALLENGE: the signed challenge was missing or did not verify.
    """

    VALID = "VALID"
    NOT_FOUND = "NOT_FOUND"
    NOT_ACTIVE = "NOT_ACTIVE"
    EXPIRED = "EXPIRED"
    LICENSE_SCOPE_FAILED = "LICENSE_SCOPE_FAILED"
    IP_LIMIT_EXCEEDED = "IP_LIMIT_EXCEEDED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    FAILED_CHALLENGE = "FAILED_CHALLENGE"
    SERVER_ERROR = "SERVER_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"

    @property
    def is_valid(self) -> bool:
        """True for VALID, False for every other outcome."""
        return self is ValidationType.VALID

    @classmethod
    def from_result(cls, value: str) -> ValidationType:
        """
        Parse a server ``result`` string.

        Raises:
            UnknownResultError: If the name is not a known outcome.
        """
        try:
            return cls[value]
        except KeyError:
            raise UnknownResultError(value) from None


@dataclass(frozen=True)
class VerificationRequest:
    """
    A single verification attempt.

    Attributes:
        license_key: The license key to verify
        scope: Optional scope to check the license against
        metadata: Optional free-form metadata stored with the request
        challenge: Nonce sent to the server, only set in challenge mode
    """
    license_key: str
    scope: str | None = None
    metadata: str | None = None
    challenge: str | None = None


@dataclass(frozen=True)
class ServerResponse:
    """
    Typed view of the validation server's JSON object.

    Attributes:
        result: Outcome name reported by the server
        valid: Explicit validity flag, if the server sent one
        error: Error message, if the server sent one
        signed_challenge: Base64 signature over the challenge
    """
    result: str | None = None
    valid: bool | None = None
    error: str | None = None
    signed_challenge: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> ServerResponse:
        """
        Validate a decoded JSON payload.

        Raises:
            ResponseError: If the payload is not an object or a field has
                the wrong type.
        """
        if not isinstance(payload, Mapping):
            raise ResponseError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        result = payload.get("result")
        if result is not None and not isinstance(result, str):
            raise ResponseError("Field 'result' must be a string")

        valid = payload.get("valid")
        if valid is not None and not isinstance(valid, bool):
            raise ResponseError("Field 'valid' must be a boolean")

        # Presence of "error" is what matters, whatever its value
        error: str | None = None
        if "error" in payload:
            raw_error = payload["error"]
            error = str(raw_error) if raw_error is not None else "Unknown server error"

        signed_challenge = payload.get("signedChallenge")
        if not isinstance(signed_challenge, str):
            signed_challenge = None

        return cls(
            result=result,
            valid=valid,
            error=error,
            signed_challenge=signed_challenge,
        )


@dataclass(frozen=True)
class VerificationResult:
    """
    Outcome of a verification with diagnostics.

    Attributes:
        outcome: The verification outcome
        error: Human-readable reason for a non-VALID outcome
        challenge: The challenge sent with the request, if any
        status_code: HTTP status of the server response, if one was received
    """
    outcome: ValidationType
    error: str | None = None
    challenge: str | None = None
    status_code: int | None = None

    @property
    def is_valid(self) -> bool:
        return self.outcome.is_valid
