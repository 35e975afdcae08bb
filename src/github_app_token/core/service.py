"""Token service - orchestrates app token signing and installation token exchange."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

import httpx
import logfire

from github_app_token.core.config import Settings, get_settings
from github_app_token.core.duration import format_duration
from github_app_token.core.errors import TokenGenerationError
from github_app_token.github import AppTokenSigner, GitHubClient, utc_now

DEFAULT_LIVENESS = timedelta(minutes=1)


@dataclass(frozen=True)
class TokenRequest:
    """Caller input for a single token issuance."""

    private_key: bytes
    app_id: int
    liveness: timedelta = DEFAULT_LIVENESS
    repository: str | None = None

    @property
    def wants_installation_token(self) -> bool:
        return bool(self.repository)


class TokenService:
    """Issues GitHub App credentials.

    Runs the whole workflow in a single pass:
    1. Sign an app token (JWT)
    2. If a repository was requested, exchange the app token for an
       installation token on that repository

    Tokens are never cached; every call mints a fresh app token.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            settings: Application settings (defaults to environment settings)
            clock: Source of the current time for token claims
            http_client: Optional HTTP client for the GitHub API (for testing)
        """
        self.settings = settings or get_settings()
        self.clock = clock
        self.http_client = http_client

    def generate_app_token(self, request: TokenRequest) -> str:
        """Sign an app token for the request."""
        signer = AppTokenSigner(request.private_key, request.app_id, clock=self.clock)
        return signer.sign(request.liveness)

    def generate_installation_token(self, app_token: str, repository: str) -> str:
        """Exchange a freshly signed app token for an installation token."""
        with GitHubClient(
            app_token,
            base_url=self.settings.api_base_url,
            api_version=self.settings.github_api_version,
            timeout=self.settings.http_timeout,
            http_client=self.http_client,
        ) as client:
            return client.exchange(repository).token

    def issue(self, request: TokenRequest) -> str:
        """Issue the token the request asks for.

        Returns:
            The installation token when a repository was given, otherwise the
            app token

        Raises:
            TokenGenerationError: Labelled with the step that failed
        """
        logfire.info(
            "Generating app token",
            app_id=request.app_id,
            liveness=format_duration(request.liveness),
        )
        try:
            app_token = self.generate_app_token(request)
        except TokenGenerationError as e:
            e.with_context("generate app token")
            raise

        if not request.wants_installation_token:
            return app_token

        logfire.info("Generating installation token", repo=request.repository)
        try:
            return self.generate_installation_token(app_token, request.repository)
        except TokenGenerationError as e:
            e.with_context("generate installation token")
            raise
