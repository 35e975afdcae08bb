"""Fixtures for end-to-end CLI tests."""

from collections.abc import Callable, Iterator
from functools import partial
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from github_app_token.cli.keys import read_private_key
from github_app_token.core.service import TokenService


class GitHubAPIStub:
    """Stand-in for the GitHub API that records the requests it serves."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.installations: dict[str, int] = {}
        self.tokens: dict[int, str] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path.endswith("/installation"):
            repo = path.removeprefix("/repos/").removesuffix("/installation")
            if repo in self.installations:
                return httpx.Response(200, json={"id": self.installations[repo]})

        if request.method == "POST" and path.endswith("/access_tokens"):
            installation_id = int(path.split("/")[3])
            if installation_id in self.tokens:
                return httpx.Response(
                    201,
                    json={
                        "token": self.tokens[installation_id],
                        "expires_at": "2099-01-01T00:00:00Z",
                        "permissions": {"contents": "read"},
                        "repository_selection": "selected",
                    },
                )

        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def github_api() -> Iterator[GitHubAPIStub]:
    """Route every GitHub API call made by the CLI to a stub."""
    stub = GitHubAPIStub()
    http_client = httpx.Client(transport=httpx.MockTransport(stub))
    with patch(
        "github_app_token.cli.generate.TokenService",
        partial(TokenService, http_client=http_client),
    ):
        yield stub
    http_client.close()


@pytest.fixture(autouse=True)
def no_logfire_setup() -> Iterator[None]:
    with patch("github_app_token.cli.generate.configure_logging"):
        yield


@pytest.fixture
def key_file(tmp_path: Path, private_key_pem: bytes) -> Path:
    path = tmp_path / "app.pem"
    path.write_bytes(private_key_pem)
    return path


@pytest.fixture
def read_spy() -> Iterator[Callable[[], int]]:
    """Count private key file reads."""
    with patch(
        "github_app_token.cli.generate.read_private_key", wraps=read_private_key
    ) as spy:
        yield lambda: spy.call_count
