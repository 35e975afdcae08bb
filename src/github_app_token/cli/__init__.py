"""Command line interface for generating GitHub App tokens."""

from __future__ import annotations

import typer

from github_app_token.cli import generate

app = typer.Typer(
    name="generate-github-app-token",
    help="Generate GitHub App tokens",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "-help", "--help"]},
)

app.command()(generate.generate)


def main() -> None:
    """Main entry point for the CLI."""
    app()


__all__ = ["app", "main"]
