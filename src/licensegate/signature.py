"""
Verification of signed challenges returned by the validation server.
"""

import base64
import binascii
import logging

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from .exceptions import KeyDecodeError, SignatureError
from .keys import decode_public_key

logger = logging.getLogger(__name__)


def _check_signature(public_key: RSAPublicKey, challenge: str, signed_challenge: str) -> None:
    """
    Raise SignatureError unless ``signed_challenge`` is a SHA256withRSA
    signature over the challenge bytes.
    """
    try:
        signature = base64.b64decode(signed_challenge, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SignatureError(f"Signed challenge is not valid Base64: {e}") from e

    try:
        public_key.verify(
            signature,
            challenge.encode("utf-8"),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
    except InvalidSignature as e:
        raise SignatureError("Signature does not match the challenge") from e
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SignatureError(f"Signature check failed: {e}") from e


def verify_signature(
    public_key: RSAPublicKey | str,
    challenge: str,
    signed_challenge: str,
) -> bool:
    """
    Check that the server signed exactly the challenge we sent.

    Args:
        public_key: RSA public key, or its PEM/Base64 text
        challenge: The challenge string sent in the request
        signed_challenge: Base64 signature from the ``signedChallenge`` field

    Returns:
        True only if the signature verifies. Every failure, including an
        undecodable key, returns False.
    """
    try:
        if isinstance(public_key, str):
            public_key = decode_public_key(public_key)
        _check_signature(public_key, challenge, signed_challenge)
    except (KeyDecodeError, SignatureError) as e:
        logger.debug("Challenge verification failed: %s", e)
        return False
    return True


class ChallengeVerifier:
    """
    Verifies signed challenges against one configured public key.

    The key text is decoded lazily so a malformed key fails closed on the
    first verification instead of at construction.

    Example:
        >>> verifier = ChallengeVerifier(PUBLIC_KEY)
        >>> verifier("1699900000000", response.signed_challenge)
        True
    """

    def __init__(self, public_key: str):
        self.public_key = public_key

    def __call__(self, challenge: str, signed_challenge: str) -> bool:
        return verify_signature(self.public_key, challenge, signed_challenge)
