"""Bearer token verification.

TokenVerifier is the seam AuthMiddleware depends on. SupabaseJwksVerifier is
the implementation used everywhere outside tests; tests plug in the static
key verifier from tests/support/static_verifier.py. Both funnel through
decode_claims so claim rules cannot drift apart.
"""

from collections.abc import Sequence
from typing import Any, Protocol
from uuid import UUID

import jwt
from jwt import PyJWKClient
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidAudienceError,
    InvalidIssuerError,
    InvalidSignatureError,
    InvalidTokenError,
    PyJWKClientConnectionError,
    PyJWKClientError,
)

from soloboss.errors import ApiError, ApiErrorCode, UnauthenticatedError
from soloboss.logging import get_logger

logger = get_logger(__name__)

CLOCK_SKEW_SECONDS = 60

# Supabase cloud signs with RS256, newer Supabase local with ES256
SUPPORTED_ALGORITHMS = ["RS256", "ES256"]

# Checked in order; InvalidSignatureError subclasses DecodeError, which
# subclasses InvalidTokenError.
_DECODE_FAILURES: tuple[tuple[type[InvalidTokenError], str, str], ...] = (
    (ExpiredSignatureError, "expired_token", "Token expired"),
    (InvalidSignatureError, "invalid_signature", "Invalid token signature"),
    (InvalidIssuerError, "invalid_issuer", "Invalid token issuer"),
    (InvalidAudienceError, "invalid_audience", "Invalid token audience"),
    (DecodeError, "decode_error", "Invalid token format"),
    (InvalidTokenError, "invalid_token", "Invalid token"),
)


class TokenVerifier(Protocol):
    def verify(self, token: str) -> dict[str, Any]:
        """Return the token's claims.

        Raises:
            ApiError(E_UNAUTHENTICATED): The token is not acceptable.
            ApiError(E_AUTH_UNAVAILABLE): Keys could not be fetched.
        """
        ...


def _rejected(exc: InvalidTokenError) -> UnauthenticatedError:
    for exc_type, reason, message in _DECODE_FAILURES:
        if isinstance(exc, exc_type):
            break
    logger.warning("auth_failure", reason=reason, error=str(exc))
    return UnauthenticatedError(message=message)


def decode_claims(
    token: str,
    key: Any,
    *,
    issuer: str,
    audiences: Sequence[str],
    algorithms: Sequence[str] = SUPPORTED_ALGORITHMS,
) -> dict[str, Any]:
    """Decode token with key and enforce the claims the API relies on.

    The signature must match, exp/iss/aud must hold (exp with a minute of
    leeway either way), and sub must be a UUID, since it becomes the
    caller's user id.

    Raises:
        UnauthenticatedError: With a message naming the failed check.
    """
    try:
        claims = jwt.decode(
            token,
            key,
            algorithms=list(algorithms),
            audience=list(audiences),
            issuer=issuer,
            leeway=CLOCK_SKEW_SECONDS,
            options={"require": ["exp", "iss", "sub"], "verify_aud": True},
        )
    except InvalidTokenError as e:
        raise _rejected(e) from e

    sub = claims.get("sub")
    if not sub:
        logger.warning("auth_failure", reason="missing_sub")
        raise UnauthenticatedError(message="Invalid token: missing sub")
    try:
        UUID(sub)
    except (ValueError, TypeError) as e:
        logger.warning("auth_failure", reason="invalid_sub")
        raise UnauthenticatedError(message="Invalid token: sub is not a valid UUID") from e

    return claims


class SupabaseJwksVerifier:
    """Verify tokens against the signing keys a Supabase project publishes.

    PyJWKClient caches the key set for cache_ttl seconds and refetches once
    when a token names a kid it has not seen.
    """

    def __init__(
        self,
        jwks_url: str,
        issuer: str,
        audiences: list[str],
        cache_ttl: int = 3600,
        timeout: int = 5,
    ):
        self.jwks_url = jwks_url
        self.issuer = issuer.rstrip("/")
        self.audiences = audiences
        self._jwks_client = PyJWKClient(jwks_url, cache_keys=True, lifespan=cache_ttl, timeout=timeout)

    def _signing_key(self, token: str) -> Any:
        try:
            return self._jwks_client.get_signing_key_from_jwt(token).key
        except PyJWKClientConnectionError as e:
            logger.warning("auth_failure", reason="jwks_unavailable", error=str(e))
            raise ApiError(ApiErrorCode.E_AUTH_UNAVAILABLE, "Authentication service unavailable") from e
        except PyJWKClientError as e:
            logger.warning("auth_failure", reason="signing_key_not_found", error=str(e))
            raise UnauthenticatedError(message="Invalid token: signing key not found") from e
        except DecodeError as e:
            raise _rejected(e) from e

    def verify(self, token: str) -> dict[str, Any]:
        return decode_claims(
            token,
            self._signing_key(token),
            issuer=self.issuer,
            audiences=self.audiences,
        )
