"""Error taxonomy for token generation.

Every failure the tool can report is one of the classes below. Each class
carries the process exit code it maps to, so the command line layer never has
to guess how to terminate.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar, Self


class ErrorCode(StrEnum):
    """Stable error codes for programmatic handling."""

    INVALID_INPUT = "INVALID_INPUT"
    MALFORMED_REPOSITORY_NAME = "MALFORMED_REPOSITORY_NAME"
    KEY_READ_FAILED = "KEY_READ_FAILED"
    KEY_PARSE_FAILED = "KEY_PARSE_FAILED"
    SIGNING_FAILED = "SIGNING_FAILED"
    INSTALLATION_LOOKUP_FAILED = "INSTALLATION_LOOKUP_FAILED"
    TOKEN_CREATION_FAILED = "TOKEN_CREATION_FAILED"


class TokenGenerationError(Exception):
    """Base class for all token generation failures."""

    code: ClassVar[ErrorCode]
    exit_code: ClassVar[int] = 1

    def with_context(self, label: str) -> Self:
        """Prefix the message with the step that failed and return self.

        The error class, its exit code and any chained ``__cause__`` are
        left untouched.
        """
        self.args = (f"{label}: {self}",)
        return self


class InputValidationError(TokenGenerationError):
    """Missing or malformed input, detected before any I/O."""

    code = ErrorCode.INVALID_INPUT
    exit_code = 2


class MalformedRepositoryNameError(InputValidationError):
    """Repository name is not of the form ``owner/name``."""

    code = ErrorCode.MALFORMED_REPOSITORY_NAME

    def __init__(self, repository: str) -> None:
        super().__init__(f"malformed repository name: {repository}")
        self.repository = repository


class KeyReadError(TokenGenerationError):
    """The private key file could not be read."""

    code = ErrorCode.KEY_READ_FAILED
    exit_code = 3


class KeyParseError(TokenGenerationError):
    """The private key bytes are not a usable RSA private key."""

    code = ErrorCode.KEY_PARSE_FAILED
    exit_code = 3


class SigningError(TokenGenerationError):
    """The JWT could not be signed."""

    code = ErrorCode.SIGNING_FAILED
    exit_code = 4


class RemoteCallError(TokenGenerationError):
    """A call to the GitHub API failed."""

    exit_code = 5

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class InstallationLookupError(RemoteCallError):
    """The app installation for a repository could not be resolved."""

    code = ErrorCode.INSTALLATION_LOOKUP_FAILED


class TokenCreationError(RemoteCallError):
    """An installation access token could not be created."""

    code = ErrorCode.TOKEN_CREATION_FAILED


__all__ = [
    "ErrorCode",
    "InputValidationError",
    "InstallationLookupError",
    "KeyParseError",
    "KeyReadError",
    "MalformedRepositoryNameError",
    "RemoteCallError",
    "SigningError",
    "TokenCreationError",
    "TokenGenerationError",
]
