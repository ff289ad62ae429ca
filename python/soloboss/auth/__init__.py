"""Authentication module.

This module provides:
- Token verification (Supabase JWKS verifier)
- Auth middleware for FastAPI
- Request state with caller identity

Note: Test-only verifiers are in tests/support/static_verifier.py
"""

from soloboss.auth.middleware import AuthMiddleware, Caller, get_caller
from soloboss.auth.verifier import SupabaseJwksVerifier, TokenVerifier, decode_claims

__all__ = [
    "AuthMiddleware",
    "Caller",
    "get_caller",
    "SupabaseJwksVerifier",
    "TokenVerifier",
    "decode_claims",
]
