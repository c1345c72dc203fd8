"""
Verification URL construction.
"""

from urllib.parse import quote, quote_plus

from .models import VerificationRequest


def build_query_string(
    metadata: str | None = None,
    scope: str | None = None,
    challenge: str | None = None,
) -> str:
    """
    Build the query string for a verify request.

    Parameters are emitted in the fixed order metadata, scope, challenge.
    ``None`` values are skipped; empty strings are kept. Characters that
    cannot be encoded as UTF-8 are sent as "?".

    Examples:
        >>> build_query_string(scope="pro")
        '?scope=pro'
        >>> build_query_string(metadata="a b", challenge="123")
        '?metadata=a+b&challenge=123'
        >>> build_query_string()
        ''
    """
    params = (
        ("metadata", metadata),
        ("scope", scope),
        ("challenge", challenge),
    )

    query = ""
    for name, value in params:
        if value is None:
            continue
        query += ("&" if query else "?") + f"{name}={quote_plus(value, errors='replace')}"
    return query


def build_verify_url(
    validation_server: str,
    user_id: str,
    request: VerificationRequest,
) -> str:
    """
    Compose the verify endpoint URL for a request.

    Args:
        validation_server: Base URL of the LicenseGate server
        user_id: License owner's LicenseGate user ID
        request: The verification request

    Returns:
        ``{server}/license/{user_id}/{license_key}/verify`` plus the query

    Raises:
        ValueError: If the license key is empty
    """
    if not request.license_key:
        raise ValueError("License key must not be empty")

    base = validation_server.rstrip("/")
    owner = quote(user_id, safe='', errors='replace')
    key = quote(request.license_key, safe='', errors='replace')
    path = f"/license/{owner}/{key}/verify"
    query = build_query_string(
        metadata=request.metadata,
        scope=request.scope,
        challenge=request.challenge,
    )
    return base + path + query
