"""GitHub API client for exchanging an app token for an installation token."""

from dataclasses import dataclass, field
from typing import Any, Self

import httpx
import logfire

from github_app_token.core.config import DEFAULT_GITHUB_API_URL
from github_app_token.core.errors import (
    InstallationLookupError,
    MalformedRepositoryNameError,
    RemoteCallError,
    TokenCreationError,
)


def _is_name_part(part: str) -> bool:
    return part.isprintable() and not any(char.isspace() for char in part)


@dataclass(frozen=True)
class RepositoryName:
    """A repository identified as ``owner/name``."""

    owner: str
    name: str

    @classmethod
    def parse(cls, value: str) -> Self:
        """Split ``owner/name`` into its two parts.

        Raises:
            MalformedRepositoryNameError: Unless there are exactly two
                non-empty parts separated by a single slash, free of
                whitespace and control characters
        """
        parts = value.split("/")
        if len(parts) != 2 or not all(parts) or not all(map(_is_name_part, parts)):
            raise MalformedRepositoryNameError(value)
        return cls(owner=parts[0], name=parts[1])

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass
class InstallationToken:
    """GitHub App installation access token."""

    token: str
    expires_at: str | None = None
    permissions: dict[str, str] = field(default_factory=dict)
    repository_selection: str | None = None


def _describe_failure(error: httpx.HTTPError) -> tuple[str, int | None]:
    """Render an httpx error, including GitHub's ``message`` when present."""
    if not isinstance(error, httpx.HTTPStatusError):
        return str(error) or type(error).__name__, None

    response = error.response
    description = f"{response.status_code} {response.reason_phrase}".strip()
    try:
        message = response.json().get("message")
    except (ValueError, AttributeError):
        message = None
    if message:
        description = f"{description}: {message}"
    return description, response.status_code


class GitHubClient:
    """Client for the GitHub App installation endpoints.

    Authenticates every request with an app token (JWT) as a bearer
    credential. Each call is attempted exactly once.
    """

    def __init__(
        self,
        app_token: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        api_version: str = "2022-11-28",
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            app_token: Signed GitHub App JWT
            base_url: GitHub API URL
            api_version: Value of the ``X-GitHub-Api-Version`` header
            timeout: Request timeout in seconds
            http_client: Optional HTTP client (for testing). Left open on close.
        """
        self.base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {app_token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": api_version,
            "User-Agent": "generate-github-app-token",
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        error_cls: type[RemoteCallError],
        context: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Make an authenticated request and decode its JSON body.

        Any transport failure, non-2xx status or undecodable body is raised
        as ``error_cls`` with the original exception chained.
        """
        try:
            response = self._client.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers,
                **kwargs,
            )
            logfire.debug(
                "GitHub API request",
                method=method,
                path=path,
                status=response.status_code,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.InvalidURL as e:
            raise error_cls(f"{context} failed: {e}") from e
        except httpx.HTTPError as e:
            description, status_code = _describe_failure(e)
            raise error_cls(f"{context} failed: {description}", status_code=status_code) from e
        except ValueError as e:
            raise error_cls(f"{context} failed: invalid JSON response") from e

        if not isinstance(data, dict):
            raise error_cls(f"{context} failed: unexpected response {data!r}")
        return data

    def find_repository_installation(self, repository: RepositoryName) -> int:
        """Resolve the installation ID of this app on a repository.

        Raises:
            InstallationLookupError: If the repository does not exist, the app
                is not installed on it, or the request fails
        """
        data = self._request(
            "GET",
            f"/repos/{repository.owner}/{repository.name}/installation",
            InstallationLookupError,
            f"installation lookup for {repository}",
        )
        installation_id = data.get("id")
        if isinstance(installation_id, bool) or not isinstance(installation_id, int):
            raise InstallationLookupError(
                f"installation lookup for {repository} failed: response has no installation id"
            )
        return installation_id

    def create_installation_token(self, installation_id: int) -> InstallationToken:
        """Create a new installation access token with default options.

        Raises:
            TokenCreationError: If the request fails or returns no token
        """
        context = f"token creation for installation {installation_id}"
        data = self._request(
            "POST",
            f"/app/installations/{installation_id}/access_tokens",
            TokenCreationError,
            context,
            json={},
        )
        token = data.get("token")
        if not isinstance(token, str) or not token:
            raise TokenCreationError(f"{context} failed: response has no token")

        return InstallationToken(
            token=token,
            expires_at=data.get("expires_at"),
            permissions=data.get("permissions") or {},
            repository_selection=data.get("repository_selection"),
        )

    def exchange(self, repository: str) -> InstallationToken:
        """Exchange the app token for an installation token on ``repository``.

        The repository name is validated before any request is made, and the
        token is only requested once the installation lookup succeeded.
        """
        repo = RepositoryName.parse(repository)
        installation_id = self.find_repository_installation(repo)

        logfire.info(
            "Resolved app installation",
            repo=str(repo),
            installation_id=installation_id,
        )

        return self.create_installation_token(installation_id)
