"""Tests for public key decoding."""

import base64

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from licensegate.exceptions import KeyDecodeError
from licensegate.keys import decode_public_key, normalize_public_key


class TestNormalizePublicKey:
    """Tests for normalize_public_key function."""

    def test_strips_header_and_footer(self):
        """PEM delimiters are removed."""
        pem = "-----BEGIN PUBLIC KEY-----\nMIIB\nIjAN\n-----END PUBLIC KEY-----\n"
        assert normalize_public_key(pem) == "MIIBIjAN"

    def test_strips_all_whitespace(self):
        """Spaces, tabs and newlines are removed."""
        assert normalize_public_key(" MII B\tIj\r\nAN ") == "MIIBIjAN"

    def test_flattened_pem(self):
        """Single-line PEM with spaces (as copied from the dashboard) is accepted."""
        pem = "-----BEGIN PUBLIC KEY----- MIIBIjAN BgkqhkiG -----END PUBLIC KEY-----"
        assert normalize_public_key(pem) == "MIIBIjANBgkqhkiG"


class TestDecodePublicKey:
    """Tests for decode_public_key function."""

    def test_pem(self, public_pem):
        """Standard multi-line PEM decodes to an RSA key."""
        key = decode_public_key(public_pem)
        assert isinstance(key, RSAPublicKey)

    def test_bare_base64(self, public_pem):
        """Base64 body without header/footer decodes."""
        key = decode_public_key(normalize_public_key(public_pem))
        assert isinstance(key, RSAPublicKey)

    def test_single_line_with_spaces(self, public_pem):
        """Flattened PEM with spaces instead of newlines decodes."""
        flattened = " ".join(public_pem.split())
        key = decode_public_key(flattened)
        assert isinstance(key, RSAPublicKey)

    def test_matches_original_key(self, private_key, public_pem):
        """Decoded key has the original modulus."""
        key = decode_public_key(public_pem)
        assert key.public_numbers() == private_key.public_key().public_numbers()

    def test_invalid_base64(self):
        """Non-Base64 text raises KeyDecodeError."""
        with pytest.raises(KeyDecodeError, match="Base64"):
            decode_public_key("-----BEGIN PUBLIC KEY-----not*base64!-----END PUBLIC KEY-----")

    def test_empty(self):
        """Empty key raises KeyDecodeError."""
        with pytest.raises(KeyDecodeError, match="empty"):
            decode_public_key("-----BEGIN PUBLIC KEY----- -----END PUBLIC KEY-----")

    def test_wrong_structure(self):
        """Valid Base64 that is not a key structure raises KeyDecodeError."""
        garbage = base64.b64encode(b"definitely not DER").decode("ascii")
        with pytest.raises(KeyDecodeError, match="key structure"):
            decode_public_key(garbage)

    def test_non_rsa_key(self):
        """An EC public key is rejected."""
        ec_key = ec.generate_private_key(ec.SECP256R1()).public_key()
        pem = ec_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("ascii")
        with pytest.raises(KeyDecodeError, match="RSA"):
            decode_public_key(pem)

    def test_repeated_calls(self, public_pem):
        """Decoding is idempotent."""
        first = decode_public_key(public_pem)
        second = decode_public_key(public_pem)
        assert first.public_numbers() == second.public_numbers()
