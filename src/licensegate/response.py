"""
Interpretation of validation server responses.
"""

from typing import Callable

from .models import ServerResponse, ValidationType

# (challenge, signed_challenge) -> bool
ChallengeCheck = Callable[[str, str], bool]


def classify_response(
    response: ServerResponse,
    challenge: str | None = None,
    verify_challenge: ChallengeCheck | None = None,
) -> tuple[ValidationType, str | None]:
    """
    Classify a server response and explain non-VALID outcomes.

    Rules are applied in this order:
    1. An ``error`` field, or no ``result`` field, is a SERVER_ERROR.
    2. ``valid: false`` returns the reported result without checking the
       challenge. ``valid: false`` with ``result: VALID`` is a SERVER_ERROR.
    3. In challenge mode (``verify_challenge`` given) a missing or
       non-verifying ``signedChallenge`` is a FAILED_CHALLENGE.
    4. Otherwise the reported result is returned.

    Args:
        response: Validated server response
        challenge: Challenge sent with the request
        verify_challenge: Signature check, None when challenges are disabled

    Returns:
        Tuple of (outcome, reason). Reason is None for VALID.

    Raises:
        UnknownResultError: If ``result`` is not a known outcome name
    """
    if response.error is not None or response.result is None:
        return ValidationType.SERVER_ERROR, response.error or "Response has no result"

    # Denials don't carry a signed challenge
    if response.valid is False:
        result = ValidationType.from_result(response.result)
        if result is ValidationType.VALID:
            return ValidationType.SERVER_ERROR, "Response is marked invalid but reports VALID"
        return result, f"License rejected: {result.value}"

    if verify_challenge is not None:
        if response.signed_challenge is None:
            return ValidationType.FAILED_CHALLENGE, "No signed challenge in response"
        if challenge is None or not verify_challenge(challenge, response.signed_challenge):
            return ValidationType.FAILED_CHALLENGE, "Challenge verification failed"

    result = ValidationType.from_result(response.result)
    if result.is_valid:
        return result, None
    return result, f"License rejected: {result.value}"


def interpret_response(
    response: ServerResponse,
    challenge: str | None = None,
    verify_challenge: ChallengeCheck | None = None,
) -> ValidationType:
    """Return the outcome for a server response. See ``classify_response``."""
    outcome, _ = classify_response(response, challenge, verify_challenge)
    return outcome
