"""Test helpers for authentication and common test operations.

Provides:
- Token minting for test authentication
- Header generation for test requests
"""

import time
from uuid import UUID, uuid4

import jwt

from tests.support.static_verifier import (
    DEFAULT_AUDIENCE,
    DEFAULT_ISSUER,
    StaticKeyVerifier,
    generate_rsa_private_key_pem,
)

DEFAULT_EXPIRES_IN = 3600  # 1 hour


def mint_test_token(
    user_id: UUID | str,
    expires_in: int = DEFAULT_EXPIRES_IN,
    issuer: str = DEFAULT_ISSUER,
    audience: str = DEFAULT_AUDIENCE,
    private_key: bytes | None = None,
    **extra_claims,
) -> str:
    """Mint a signed RS256 test JWT.

    Args:
        user_id: The user ID to set as the `sub` claim.
        expires_in: Token validity in seconds from now (negative for expired).
        issuer: The `iss` claim value.
        audience: The `aud` claim value.
        private_key: Signing key. Defaults to the StaticKeyVerifier key.
        **extra_claims: Additional claims to include in the token.
    """
    now = int(time.time())
    payload = {
        "sub": str(user_id),
        "iss": issuer,
        "aud": audience,
        "iat": now,
        "exp": now + expires_in,
        **extra_claims,
    }
    return jwt.encode(
        payload, private_key or StaticKeyVerifier.get_private_key(), algorithm="RS256"
    )


def mint_token_with_bad_signature(user_id: UUID | str) -> str:
    """Mint a token signed with a different key (bad signature)."""
    return mint_test_token(user_id, private_key=generate_rsa_private_key_pem())


def auth_headers(user_id: UUID | str, **token_kwargs) -> dict[str, str]:
    """Return headers dict with valid Authorization for the given user."""
    token = mint_test_token(user_id, **token_kwargs)
    return {"Authorization": f"Bearer {token}"}


def create_test_user_id() -> UUID:
    """Generate a random UUID for a test user."""
    return uuid4()
