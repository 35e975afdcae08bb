"""GitHub App integration."""

from github_app_token.github.auth import AppTokenSigner, load_private_key, utc_now
from github_app_token.github.client import GitHubClient, InstallationToken, RepositoryName

__all__ = [
    "AppTokenSigner",
    "GitHubClient",
    "InstallationToken",
    "RepositoryName",
    "load_private_key",
    "utc_now",
]
