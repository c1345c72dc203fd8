"""
Public key decoding for challenge verification.
"""

import base64
import binascii
import re
from functools import lru_cache

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from cryptography.hazmat.primitives.serialization import load_der_public_key

from .exceptions import KeyDecodeError

PEM_HEADER = "-----BEGIN PUBLIC KEY-----"
PEM_FOOTER = "-----END PUBLIC KEY-----"

_WHITESPACE = re.compile(r"\s+")


def normalize_public_key(public_key: str) -> str:
    """
    Strip PEM delimiters and all whitespace from a public key string.

    The LicenseGate dashboard hands out keys with the header, footer and
    line breaks sometimes flattened to spaces; both forms are accepted.

    Examples:
        >>> normalize_public_key("-----BEGIN PUBLIC KEY----- MIIB IjAN -----END PUBLIC KEY-----")
        'MIIBIjAN'
    """
    body = public_key.replace(PEM_HEADER, "").replace(PEM_FOOTER, "")
    return _WHITESPACE.sub("", body)


@lru_cache(maxsize=16)
def decode_public_key(public_key: str) -> RSAPublicKey:
    """
    Decode a PEM/Base64 RSA public key into a key object.

    Args:
        public_key: Base64 of an X.509 SubjectPublicKeyInfo, with or
            without PEM header/footer lines

    Returns:
        The RSA public key

    Raises:
        KeyDecodeError: If the text is not Base64 or not an RSA public key
    """
    body = normalize_public_key(public_key)
    if not body:
        raise KeyDecodeError("Public key is empty")

    try:
        der = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyDecodeError(f"Public key is not valid Base64: {e}") from e

    try:
        key = load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyDecodeError(f"Public key is not a valid key structure: {e}") from e

    if not isinstance(key, RSAPublicKey):
        raise KeyDecodeError(
            f"Public key must be RSA, got {type(key).__name__}"
        )

    return key
