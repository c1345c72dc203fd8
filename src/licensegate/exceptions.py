"""
Error types raised inside the verification pipeline.

None of these escape a verify call: the client converts them into a
``ValidationType`` outcome. ``ConfigurationError`` is the exception, it is
raised while building a client.
"""


class LicenseGateError(Exception):
    """Base class for all licensegate errors."""


class ConfigurationError(LicenseGateError, ValueError):
    """Invalid client configuration (e.g. challenges without a public key)."""


class KeyDecodeError(LicenseGateError):
    """Public key text is not Base64 or not an RSA SubjectPublicKeyInfo."""


class SignatureError(LicenseGateError):
    """Signed challenge could not be checked."""


class TransportError(LicenseGateError):
    """The validation server could not be reached or gave no usable body."""


class ResponseError(LicenseGateError):
    """The server payload is malformed."""


class UnknownResultError(ResponseError):
    """The server reported a result name outside the known outcomes."""

    def __init__(self, value: str):
        super().__init__(f"Unknown verification result: {value!r}")
        self.value = value
