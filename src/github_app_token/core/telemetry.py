"""Logfire setup for the command line tool."""

import sys

import logfire

from github_app_token.core.config import Settings

SERVICE_NAME = "generate-github-app-token"


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """Configure logfire for a single invocation.

    Console output goes to stderr and only when ``verbose`` is set, so stdout
    carries nothing but the token. Spans are exported to Logfire only when a
    write token is present in the environment.
    """
    console: logfire.ConsoleOptions | bool = False
    if verbose:
        console = logfire.ConsoleOptions(
            min_log_level=settings.log_level,
            output=sys.stderr,
        )

    logfire.configure(
        service_name=SERVICE_NAME,
        environment=settings.environment,
        send_to_logfire="if-token-present",
        console=console,
    )
