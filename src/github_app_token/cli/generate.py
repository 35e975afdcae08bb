"""Token generation command."""

from __future__ import annotations

from datetime import timedelta
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import logfire
import typer
from rich.console import Console
from rich.text import Text

from github_app_token.cli.keys import read_private_key
from github_app_token.core.config import get_settings
from github_app_token.core.duration import parse_duration
from github_app_token.core.errors import InputValidationError, TokenGenerationError
from github_app_token.core.service import TokenRequest, TokenService
from github_app_token.core.telemetry import SERVICE_NAME, configure_logging

err_console = Console(stderr=True)


def parse_liveness(value: str | timedelta) -> timedelta:
    """Convert a ``-liveness`` value into a timedelta."""
    if isinstance(value, timedelta):
        return value
    try:
        return parse_duration(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def get_version() -> str:
    """Installed package version."""
    try:
        return version(SERVICE_NAME)
    except PackageNotFoundError:
        return "unknown"


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{SERVICE_NAME} {get_version()}")
        raise typer.Exit()


def build_request(
    app_id: int,
    private_key: str | None,
    liveness: timedelta,
    repo: str | None,
) -> TokenRequest:
    """Validate command line input and read the private key.

    Required flags are checked before the key file is touched.

    Raises:
        InputValidationError: If a required flag is missing or invalid
        KeyReadError: If the key file cannot be read
    """
    if not private_key:
        raise InputValidationError("-private-key is required")
    if app_id == 0:
        raise InputValidationError("-id is required")
    if app_id < 0:
        raise InputValidationError(f"-id must be a positive integer, got {app_id}")

    return TokenRequest(
        private_key=read_private_key(Path(private_key)),
        app_id=app_id,
        liveness=liveness,
        repository=repo or None,
    )


def generate(
    app_id: int = typer.Option(
        0,
        "-id",
        "--id",
        envvar="GITHUB_APP_ID",
        show_envvar=False,
        help="GitHub App ID.",
    ),
    private_key: str | None = typer.Option(
        None,
        "-private-key",
        "--private-key",
        envvar="GITHUB_APP_PRIVATE_KEY_PATH",
        show_envvar=False,
        help="Path to the GitHub App private key (PEM).",
    ),
    liveness: timedelta = typer.Option(
        "1m",
        "-liveness",
        "--liveness",
        parser=parse_liveness,
        metavar="DURATION",
        help="App token liveness, e.g. 30s, 1m, 1m30s.",
    ),
    repo: str | None = typer.Option(
        None,
        "-repo",
        "--repo",
        help=(
            "Installed repository qualified name (owner/name); "
            "generates a repository installation token instead of an app token."
        ),
    ),
    verbose: bool = typer.Option(
        False,
        "-v",
        "--verbose",
        help="Log progress to stderr.",
    ),
    show_version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Generate a GitHub App token.

    Prints a signed app token (JWT), or with -repo an installation access
    token for that repository.

    Examples:

        generate-github-app-token -id 12345 -private-key app.pem

        generate-github-app-token -id 12345 -private-key app.pem -repo owner/repo
    """
    settings = get_settings()
    configure_logging(settings, verbose)

    try:
        request = build_request(app_id, private_key, liveness, repo)
        token = TokenService(settings).issue(request)
    except TokenGenerationError as e:
        logfire.error("Token generation failed", error_code=e.code, exit_code=e.exit_code)
        err_console.print(Text.assemble(("Error: ", "red"), str(e)), soft_wrap=True)
        raise typer.Exit(e.exit_code) from None

    typer.echo(token)
