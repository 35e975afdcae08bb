"""Private key file handling for the CLI."""

from pathlib import Path

from github_app_token.core.errors import KeyReadError


def read_private_key(path: Path) -> bytes:
    """Read the raw bytes of a PEM private key file.

    Raises:
        KeyReadError: If the file cannot be read
    """
    try:
        return path.expanduser().read_bytes()
    except OSError as e:
        raise KeyReadError(f"failed to read private key {path}: {e.strerror or e}") from e
