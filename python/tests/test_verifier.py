"""Unit tests for token verification.

Tests decode_claims directly against the static test key, and the
SupabaseJwksVerifier with its JWKS client mocked.
"""

from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from jwt.exceptions import DecodeError, PyJWKClientConnectionError, PyJWKClientError

from soloboss.auth.verifier import SupabaseJwksVerifier, decode_claims
from soloboss.errors import ApiError, ApiErrorCode
from tests.helpers import mint_test_token, mint_token_with_bad_signature
from tests.support.static_verifier import DEFAULT_AUDIENCE, DEFAULT_ISSUER, StaticKeyVerifier


def _decode(token: str) -> dict:
    return decode_claims(
        token,
        StaticKeyVerifier.get_public_key(),
        issuer=DEFAULT_ISSUER,
        audiences=[DEFAULT_AUDIENCE],
    )


def _assert_unauthenticated(token: str, message: str) -> None:
    with pytest.raises(ApiError) as exc_info:
        _decode(token)
    assert exc_info.value.code == ApiErrorCode.E_UNAUTHENTICATED
    assert exc_info.value.message == message


class TestDecodeClaims:
    def test_valid_token(self):
        user_id = uuid4()

        claims = _decode(mint_test_token(user_id))

        assert claims["sub"] == str(user_id)

    def test_any_allowed_audience(self):
        token = mint_test_token(uuid4(), audience="authenticated")

        claims = decode_claims(
            token,
            StaticKeyVerifier.get_public_key(),
            issuer=DEFAULT_ISSUER,
            audiences=[DEFAULT_AUDIENCE, "authenticated"],
        )

        assert claims["aud"] == "authenticated"

    def test_expired_token(self):
        _assert_unauthenticated(mint_test_token(uuid4(), expires_in=-3600), "Token expired")

    def test_clock_skew_accepted(self):
        """Tokens expired by less than 60 seconds still pass."""
        assert _decode(mint_test_token(uuid4(), expires_in=-30))

    def test_clock_skew_exceeded(self):
        _assert_unauthenticated(mint_test_token(uuid4(), expires_in=-120), "Token expired")

    def test_bad_signature(self):
        _assert_unauthenticated(mint_token_with_bad_signature(uuid4()), "Invalid token signature")

    def test_wrong_issuer(self):
        _assert_unauthenticated(
            mint_test_token(uuid4(), issuer="https://evil.example.com"), "Invalid token issuer"
        )

    def test_wrong_audience(self):
        _assert_unauthenticated(mint_test_token(uuid4(), audience="other"), "Invalid token audience")

    def test_garbage_token(self):
        _assert_unauthenticated("not-a-jwt", "Invalid token format")

    def test_empty_sub(self):
        _assert_unauthenticated(mint_test_token(""), "Invalid token: missing sub")

    def test_non_uuid_sub(self):
        _assert_unauthenticated(
            mint_test_token("user-123"), "Invalid token: sub is not a valid UUID"
        )


class TestSupabaseJwksVerifier:
    """SupabaseJwksVerifier with the PyJWKClient lookup mocked."""

    @pytest.fixture
    def verifier(self):
        return SupabaseJwksVerifier(
            jwks_url="http://localhost:54321/auth/v1/.well-known/jwks.json",
            issuer=DEFAULT_ISSUER + "/",
            audiences=[DEFAULT_AUDIENCE],
        )

    def _lookup(self, verifier, **kwargs):
        return patch.object(verifier._jwks_client, "get_signing_key_from_jwt", **kwargs)

    def test_issuer_trailing_slash_stripped(self, verifier):
        assert verifier.issuer == DEFAULT_ISSUER

    def test_valid_token(self, verifier):
        user_id = uuid4()
        signing_key = MagicMock(key=StaticKeyVerifier.get_public_key())

        with self._lookup(verifier, return_value=signing_key):
            claims = verifier.verify(mint_test_token(user_id))

        assert claims["sub"] == str(user_id)

    def test_claims_still_validated(self, verifier):
        signing_key = MagicMock(key=StaticKeyVerifier.get_public_key())

        with self._lookup(verifier, return_value=signing_key):
            with pytest.raises(ApiError) as exc_info:
                verifier.verify(mint_test_token(uuid4(), expires_in=-3600))

        assert exc_info.value.message == "Token expired"

    @pytest.mark.parametrize(
        "error,code,message",
        [
            (
                PyJWKClientConnectionError("connection refused"),
                ApiErrorCode.E_AUTH_UNAVAILABLE,
                "Authentication service unavailable",
            ),
            (
                PyJWKClientError("Unable to find a signing key"),
                ApiErrorCode.E_UNAUTHENTICATED,
                "Invalid token: signing key not found",
            ),
            (DecodeError("bad header"), ApiErrorCode.E_UNAUTHENTICATED, "Invalid token format"),
        ],
    )
    def test_key_lookup_failures(self, verifier, error, code, message):
        with self._lookup(verifier, side_effect=error):
            with pytest.raises(ApiError) as exc_info:
                verifier.verify(mint_test_token(uuid4()))

        assert exc_info.value.code == code
        assert exc_info.value.message == message
        assert exc_info.value.status_code == (503 if code == ApiErrorCode.E_AUTH_UNAVAILABLE else 401)

    def test_unreachable_jwks_endpoint(self):
        """A JWKS URL nobody listens on surfaces as E_AUTH_UNAVAILABLE."""
        verifier = SupabaseJwksVerifier(
            jwks_url="http://127.0.0.1:9/jwks.json",
            issuer=DEFAULT_ISSUER,
            audiences=[DEFAULT_AUDIENCE],
            timeout=1,
        )

        with pytest.raises(ApiError) as exc_info:
            verifier.verify(mint_test_token(uuid4()))

        assert exc_info.value.code == ApiErrorCode.E_AUTH_UNAVAILABLE
