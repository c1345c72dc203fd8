"""Shared fixtures: RSA key pairs and challenge signing."""

import base64

import pytest
import respx
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa


def _public_pem(private_key) -> str:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture(scope="session")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def public_pem(private_key) -> str:
    return _public_pem(private_key)


@pytest.fixture(scope="session")
def other_public_pem(other_private_key) -> str:
    return _public_pem(other_private_key)


@pytest.fixture
def sign(private_key):
    """Sign a challenge the way the LicenseGate server does."""
    def _sign(challenge: str, key=None) -> str:
        signature = (key or private_key).sign(
            challenge.encode("utf-8"),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
        return base64.b64encode(signature).decode("ascii")
    return _sign


@pytest.fixture
def mock_server():
    """Create a respx mock for the validation server."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock
