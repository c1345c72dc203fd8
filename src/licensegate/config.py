"""
Client configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .challenge import ChallengeStrategy
from .exceptions import ConfigurationError
from ._version import __version__

# LicenseGate cloud server
DEFAULT_SERVER = "https://licensegate.com"

DEFAULT_TIMEOUT_S = 5.0

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _user_agent() -> str:
    return f"licensegate-python/{__version__}"


@dataclass(frozen=True)
class LicenseGateConfig:
    """
    Immutable settings for a LicenseGate client.

    Build a base config once and derive variants with the ``with_*``
    methods; each returns a new config.

    Args:
        user_id: User ID of the license owner's LicenseGate account
        public_key: RSA public key (PEM text) of the account. Setting it
            enables challenges unless ``use_challenges`` says otherwise.
        validation_server: Base URL of the server. Default: LicenseGate cloud
        use_challenges: Require signed challenges. Default: on when a
            public key is set
        debug: Log request, response and error detail at INFO level
        timeout_s: Request timeout in seconds. Default: 5.0
        user_agent: User-Agent header sent with requests
        challenge_strategy: How challenges are generated. Default: timestamp

    Raises:
        ConfigurationError: If challenges are enabled without a public key,
            or a field is out of range

    Example:
        >>> config = LicenseGateConfig("d32af1").with_validation_server(
        ...     "https://license.yourdomain.com"
        ... )
    """

    user_id: str
    public_key: str | None = None
    validation_server: str = DEFAULT_SERVER
    use_challenges: bool | None = None
    debug: bool = False
    timeout_s: float = DEFAULT_TIMEOUT_S
    user_agent: str = ""
    challenge_strategy: ChallengeStrategy = ChallengeStrategy.TIMESTAMP

    def __post_init__(self):
        if not self.user_id:
            raise ConfigurationError("user_id is required")
        if not self.validation_server:
            raise ConfigurationError("validation_server must not be empty")
        if self.timeout_s <= 0:
            raise ConfigurationError("timeout_s must be positive")

        # Frozen dataclass: normalise through object.__setattr__
        if self.use_challenges is None:
            object.__setattr__(self, "use_challenges", self.public_key is not None)
        if self.use_challenges and not self.public_key:
            raise ConfigurationError("Challenges require a public key")
        object.__setattr__(self, "validation_server", self.validation_server.rstrip("/"))
        try:
            strategy = ChallengeStrategy(self.challenge_strategy)
        except ValueError:
            raise ConfigurationError(
                f"Unknown challenge strategy: {self.challenge_strategy!r}"
            ) from None
        object.__setattr__(self, "challenge_strategy", strategy)
        if not self.user_agent:
            object.__setattr__(self, "user_agent", _user_agent())

    @property
    def challenges_enabled(self) -> bool:
        """Resolved challenge mode; ``use_challenges`` is never None after init."""
        return self.use_challenges is True

    def with_public_key(self, public_key: str) -> LicenseGateConfig:
        """Set the public key and enable challenges."""
        return replace(self, public_key=public_key, use_challenges=True)

    def with_validation_server(self, validation_server: str) -> LicenseGateConfig:
        """Point at a self-hosted server, e.g. "https://license.yourdomain.com"."""
        return replace(self, validation_server=validation_server)

    def with_challenges(self, enabled: bool = True) -> LicenseGateConfig:
        return replace(self, use_challenges=enabled)

    def with_debug(self, enabled: bool = True) -> LicenseGateConfig:
        return replace(self, debug=enabled)

    def with_timeout(self, timeout_s: float) -> LicenseGateConfig:
        return replace(self, timeout_s=timeout_s)

    @classmethod
    def from_env(cls, prefix: str = "LICENSEGATE_") -> LicenseGateConfig:
        """
        Load configuration from environment variables.

        Environment variables:
            {prefix}USER_ID - Account user ID (required)
            {prefix}PUBLIC_KEY - RSA public key, enables challenges
            {prefix}SERVER - Validation server URL (default: LicenseGate cloud)
            {prefix}USE_CHALLENGES - "true"/"false" to force challenge mode
            {prefix}CHALLENGE_STRATEGY - "timestamp" or "random"
            {prefix}DEBUG - "true" to enable debug logging
            {prefix}TIMEOUT - Request timeout in seconds

        Raises:
            ConfigurationError: If a variable is missing or invalid
        """
        user_id = os.getenv(f"{prefix}USER_ID", "")
        if not user_id:
            raise ConfigurationError(f"{prefix}USER_ID is not set")

        use_challenges_env = os.getenv(f"{prefix}USE_CHALLENGES")
        use_challenges = (
            None if use_challenges_env is None
            else use_challenges_env.strip().lower() in _TRUE_VALUES
        )

        timeout_env = os.getenv(f"{prefix}TIMEOUT")
        try:
            timeout_s = float(timeout_env) if timeout_env else DEFAULT_TIMEOUT_S
        except ValueError:
            raise ConfigurationError(f"{prefix}TIMEOUT must be a number") from None

        try:
            strategy = ChallengeStrategy(
                os.getenv(f"{prefix}CHALLENGE_STRATEGY", ChallengeStrategy.TIMESTAMP.value).lower()
            )
        except ValueError:
            raise ConfigurationError(
                f"{prefix}CHALLENGE_STRATEGY must be 'timestamp' or 'random'"
            ) from None

        return cls(
            user_id=user_id,
            public_key=os.getenv(f"{prefix}PUBLIC_KEY") or None,
            validation_server=os.getenv(f"{prefix}SERVER", DEFAULT_SERVER),
            use_challenges=use_challenges,
            debug=os.getenv(f"{prefix}DEBUG", "false").strip().lower() in _TRUE_VALUES,
            timeout_s=timeout_s,
            challenge_strategy=strategy,
        )
