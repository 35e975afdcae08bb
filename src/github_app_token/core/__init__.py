"""Core token generation functionality."""

from github_app_token.core.config import Settings, get_settings
from github_app_token.core.errors import ErrorCode, TokenGenerationError

# Lazy imports to avoid circular import with github
# Import these directly from github_app_token.core.service when needed


def __getattr__(name: str):
    """Lazy import to avoid circular imports."""
    if name in ("TokenRequest", "TokenService"):
        from github_app_token.core.service import TokenRequest, TokenService

        return {"TokenRequest": TokenRequest, "TokenService": TokenService}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ErrorCode",
    "Settings",
    "TokenGenerationError",
    "TokenRequest",
    "TokenService",
    "get_settings",
]
