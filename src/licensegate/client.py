"""
LicenseGate client for verifying license keys against a validation server.
"""

import logging
from typing import Any

import httpx

from .challenge import make_challenge_generator
from .config import LicenseGateConfig
from .exceptions import ConfigurationError, ResponseError, TransportError
from .models import ServerResponse, ValidationType, VerificationRequest, VerificationResult
from .response import classify_response
from .signature import ChallengeVerifier
from .urls import build_verify_url

logger = logging.getLogger(__name__)


class LicenseGate:
    """
    Client for the LicenseGate license verification service.

    Supports the LicenseGate cloud and self-hosted servers. When a public
    RSA key is configured, every request carries a challenge that the
    server must sign, which protects the result against tampering
    (recommended for client-side verification).

    Args:
        user_id: User ID of the license owner's LicenseGate account
        public_key: Public RSA key of the account (PEM text). Enables
            challenges.
        config: A prebuilt LicenseGateConfig, instead of user_id/options
        http_client: Optional httpx.Client to reuse for sync calls. Its own
            timeout applies; timeout_s only sets up clients created here.
        async_http_client: Optional httpx.AsyncClient to reuse for async
            calls, with the same timeout rule
        **options: Other LicenseGateConfig fields (validation_server,
            use_challenges, debug, timeout_s, user_agent, challenge_strategy)

    Raises:
        ConfigurationError: If the configuration is invalid

    Example:
        >>> gate = LicenseGate("d32af1", PUBLIC_KEY)
        >>> result = gate.verify("ABCD-1234", scope="pro")
        >>> if result.is_valid:
        ...     print("Licensed")
    """

    def __init__(
        self,
        user_id: str | None = None,
        public_key: str | None = None,
        *,
        config: LicenseGateConfig | None = None,
        http_client: httpx.Client | None = None,
        async_http_client: httpx.AsyncClient | None = None,
        **options: Any,
    ):
        if config is None:
            if user_id is None:
                raise ConfigurationError("Either user_id or config is required")
            config = LicenseGateConfig(user_id=user_id, public_key=public_key, **options)
        elif user_id is not None or public_key is not None or options:
            raise ConfigurationError("Pass either config or individual settings, not both")

        self.config = config
        self._http_client = http_client
        self._async_http_client = async_http_client
        self._next_challenge = make_challenge_generator(config.challenge_strategy)
        self._verify_challenge = (
            ChallengeVerifier(config.public_key) if config.challenges_enabled else None
        )

    @classmethod
    def from_env(cls, prefix: str = "LICENSEGATE_") -> "LicenseGate":
        """Create a client from ``{prefix}*`` environment variables."""
        return cls(config=LicenseGateConfig.from_env(prefix))

    @property
    def validation_server(self) -> str:
        return self.config.validation_server

    @property
    def use_challenges(self) -> bool:
        return self.config.challenges_enabled

    def verify(
        self,
        license_key: str,
        scope: str | None = None,
        metadata: str | None = None,
    ) -> ValidationType:
        """
        Verify a license key.

        Args:
            license_key: The license key to verify
            scope: Optional scope to verify the license key against
            metadata: Optional metadata to associate with the request

        Returns:
            The verification outcome. Network, server and challenge
            failures are reported as outcomes, never raised. Input that
            cannot form a request, such as an empty license key, gives
            NOT_FOUND without contacting the server.
        """
        return self.verify_detailed(license_key, scope, metadata).outcome

    def verify_simple(
        self,
        license_key: str,
        scope: str | None = None,
        metadata: str | None = None,
    ) -> bool:
        """Verify a license key and return True only if it is VALID."""
        return self.verify(license_key, scope, metadata) is ValidationType.VALID

    def verify_detailed(
        self,
        license_key: str,
        scope: str | None = None,
        metadata: str | None = None,
    ) -> VerificationResult:
        """
        Verify a license key and return the outcome with diagnostics.

        Same arguments as ``verify``.
        """
        try:
            request, url = self._prepare(license_key, scope, metadata)
        except (ValueError, TypeError) as e:
            return self._rejected(e)

        try:
            response = self._get(url)
        except TransportError as e:
            return self._connection_error(request, e)

        return self._parse_response(response, request)

    async def verify_async(
        self,
        license_key: str,
        scope: str | None = None,
        metadata: str | None = None,
    ) -> ValidationType:
        """Verify a license key asynchronously. See ``verify``."""
        result = await self.verify_detailed_async(license_key, scope, metadata)
        return result.outcome

    async def verify_simple_async(
        self,
        license_key: str,
        scope: str | None = None,
        metadata: str | None = None,
    ) -> bool:
        """Asynchronous ``verify_simple``."""
        outcome = await self.verify_async(license_key, scope, metadata)
        return outcome is ValidationType.VALID

    async def verify_detailed_async(
        self,
        license_key: str,
        scope: str | None = None,
        metadata: str | None = None,
    ) -> VerificationResult:
        """Asynchronous ``verify_detailed``."""
        try:
            request, url = self._prepare(license_key, scope, metadata)
        except (ValueError, TypeError) as e:
            return self._rejected(e)

        try:
            response = await self._get_async(url)
        except TransportError as e:
            return self._connection_error(request, e)

        return self._parse_response(response, request)

    def _prepare(
        self,
        license_key: str,
        scope: str | None,
        metadata: str | None,
    ) -> tuple[VerificationRequest, str]:
        """Create the request, with a fresh challenge in challenge mode, and its URL."""
        challenge = self._next_challenge() if self.config.challenges_enabled else None
        request = VerificationRequest(
            license_key=license_key,
            scope=scope,
            metadata=metadata,
            challenge=challenge,
        )
        url = build_verify_url(self.config.validation_server, self.config.user_id, request)
        return request, url

    def _get(self, url: str) -> httpx.Response:
        self._debug("Sending request to URL: %s", url)
        headers = {"User-Agent": self.config.user_agent}
        try:
            if self._http_client is not None:
                return self._http_client.get(url, headers=headers)
            with httpx.Client(timeout=self.config.timeout_s) as client:
                return client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to validation server failed: {e}") from e

    async def _get_async(self, url: str) -> httpx.Response:
        self._debug("Sending request to URL: %s", url)
        headers = {"User-Agent": self.config.user_agent}
        try:
            if self._async_http_client is not None:
                return await self._async_http_client.get(url, headers=headers)
            async with httpx.AsyncClient(timeout=self.config.timeout_s) as client:
                return await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to validation server failed: {e}") from e

    def _parse_response(
        self,
        response: httpx.Response,
        request: VerificationRequest,
    ) -> VerificationResult:
        """Parse a validation server response into a VerificationResult."""
        self._debug("Response code: %s", response.status_code)
        self._debug("Response: %s", response.text)

        try:
            data = response.json()
        except ValueError:
            # Error pages without a JSON body count as a failed connection
            outcome = (
                ValidationType.SERVER_ERROR if response.is_success
                else ValidationType.CONNECTION_ERROR
            )
            return self._finish(
                request,
                outcome,
                f"Invalid validation server response: {response.status_code}",
                response.status_code,
            )

        try:
            server_response = ServerResponse.from_payload(data)
            outcome, reason = classify_response(
                server_response,
                request.challenge,
                self._verify_challenge,
            )
        except ResponseError as e:
            return self._finish(request, ValidationType.SERVER_ERROR, str(e), response.status_code)

        return self._finish(request, outcome, reason, response.status_code)

    def _rejected(self, error: Exception) -> VerificationResult:
        """Result for caller input that cannot form a request."""
        self._debug("Error: %s", error)
        logger.debug("Verification outcome: %s", ValidationType.NOT_FOUND.value)
        return VerificationResult(
            outcome=ValidationType.NOT_FOUND,
            error=f"Invalid verification request: {error}",
        )

    def _connection_error(
        self,
        request: VerificationRequest,
        error: TransportError,
    ) -> VerificationResult:
        if self.config.debug:
            logger.info("Transport failure", exc_info=error)
        return self._finish(request, ValidationType.CONNECTION_ERROR, str(error))

    def _finish(
        self,
        request: VerificationRequest,
        outcome: ValidationType,
        error: str | None = None,
        status_code: int | None = None,
    ) -> VerificationResult:
        if error is not None:
            self._debug("Error: %s", error)
        logger.debug("Verification outcome: %s", outcome.value)
        return VerificationResult(
            outcome=outcome,
            error=error,
            challenge=request.challenge,
            status_code=status_code,
        )

    def _debug(self, msg: str, *args: Any) -> None:
        """Log request/response detail when debug mode is enabled."""
        if self.config.debug:
            logger.info(msg, *args)
