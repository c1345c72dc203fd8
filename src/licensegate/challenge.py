"""
Challenge generation for signed verification responses.

The LicenseGate server signs whatever challenge string it receives. The
reference wire format is the client's wall-clock time in milliseconds,
which is predictable; ``RandomChallenge`` trades that format for a
cryptographically random token.
"""

import secrets
import threading
import time
from enum import Enum


class ChallengeStrategy(str, Enum):
    """How challenges are generated."""

    TIMESTAMP = "timestamp"
    RANDOM = "random"


class TimestampChallenge:
    """
    Millisecond timestamp challenges, strictly increasing per instance.

    Two calls within the same millisecond would otherwise produce the
    same challenge, so a repeated value is bumped past the last one issued.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0

    def __call__(self) -> str:
        with self._lock:
            now = time.time_ns() // 1_000_000
            if now <= self._last:
                now = self._last + 1
            self._last = now
        return str(now)


class RandomChallenge:
    """URL-safe random challenges."""

    def __init__(self, nbytes: int = 32):
        if nbytes < 16:
            raise ValueError("Random challenges need at least 16 bytes of entropy")
        self.nbytes = nbytes

    def __call__(self) -> str:
        return secrets.token_urlsafe(self.nbytes)


def make_challenge_generator(strategy: ChallengeStrategy | str):
    """Return a challenge generator for ``strategy``."""
    strategy = ChallengeStrategy(strategy)
    if strategy is ChallengeStrategy.RANDOM:
        return RandomChallenge()
    return TimestampChallenge()
