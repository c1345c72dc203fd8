"""
LicenseGate client for Python

Verify license keys against LicenseGate cloud or self-hosted servers, with
optional RSA challenge-response protection against tampered responses.
"""

from .models import ValidationType, VerificationRequest, VerificationResult, ServerResponse
from .config import LicenseGateConfig, DEFAULT_SERVER
from .challenge import ChallengeStrategy
from .client import LicenseGate
from .exceptions import (
    LicenseGateError,
    ConfigurationError,
    KeyDecodeError,
    SignatureError,
    TransportError,
    ResponseError,
    UnknownResultError,
)
from .keys import decode_public_key
from .signature import verify_signature
from .urls import build_verify_url
from ._version import __version__

__all__ = [
    "LicenseGate",
    "LicenseGateConfig",
    "DEFAULT_SERVER",
    "ChallengeStrategy",
    "ValidationType",
    "VerificationRequest",
    "VerificationResult",
    "ServerResponse",
    "LicenseGateError",
    "ConfigurationError",
    "KeyDecodeError",
    "SignatureError",
    "TransportError",
    "ResponseError",
    "UnknownResultError",
    "decode_public_key",
    "verify_signature",
    "build_verify_url",
]
