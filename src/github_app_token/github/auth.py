"""GitHub App JWT signing."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt
import logfire
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from github_app_token.core.duration import format_duration
from github_app_token.core.errors import InputValidationError, KeyParseError, SigningError

SIGNING_ALGORITHM = "RS256"


def utc_now() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(UTC)


def load_private_key(private_key: bytes) -> RSAPrivateKey:
    """Parse PEM-encoded RSA private key bytes.

    Both PKCS#1 (``BEGIN RSA PRIVATE KEY``) and PKCS#8 (``BEGIN PRIVATE KEY``)
    encodings are accepted. Password-protected keys are not.

    Raises:
        KeyParseError: If the bytes are not an unencrypted RSA private key
    """
    try:
        key = load_pem_private_key(private_key, password=None)
    except (ValueError, TypeError) as e:
        raise KeyParseError(f"failed to parse private key: {e}") from e
    except UnsupportedAlgorithm as e:
        raise KeyParseError(f"unsupported private key: {e}") from e

    if not isinstance(key, RSAPrivateKey):
        raise KeyParseError(
            f"private key must be an RSA key, got {type(key).__name__}"
        )
    return key


class AppTokenSigner:
    """Signs JWTs that authenticate as a GitHub App.

    The token carries exactly three claims: ``iss`` (the app ID as a decimal
    string), ``iat`` and ``exp``. Timestamps are whole seconds taken from the
    injected clock, so ``exp - iat`` is always the requested liveness.
    """

    def __init__(
        self,
        private_key: bytes,
        app_id: int,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if isinstance(app_id, bool) or not isinstance(app_id, int) or app_id <= 0:
            raise InputValidationError(f"app ID must be a positive integer, got {app_id!r}")

        self.app_id = app_id
        self.private_key = load_private_key(private_key)
        self.clock = clock

    def build_claims(self, liveness: timedelta) -> dict[str, int | str]:
        """Build the JWT claims for a token valid for ``liveness``.

        Raises:
            InputValidationError: If liveness is shorter than one second
        """
        lifetime = int(liveness.total_seconds())
        if lifetime < 1:
            raise InputValidationError(
                f"token liveness must be at least 1s, got {format_duration(liveness)}"
            )

        issued_at = int(self.clock().timestamp())
        return {
            "iss": str(self.app_id),
            "iat": issued_at,
            "exp": issued_at + lifetime,
        }

    def sign(self, liveness: timedelta) -> str:
        """Generate a signed app token valid for ``liveness``.

        Raises:
            InputValidationError: If liveness is shorter than one second
            SigningError: If PyJWT fails to sign the claims
        """
        claims = self.build_claims(liveness)

        try:
            token = jwt.encode(claims, self.private_key, algorithm=SIGNING_ALGORITHM)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            raise SigningError(f"failed to sign app token: {e}") from e

        logfire.debug(
            "Signed app token",
            app_id=self.app_id,
            issued_at=claims["iat"],
            expires_at=claims["exp"],
        )
        return token
