"""
Authentication module for NetOps Core

Provides:
- JWT token creation and validation
- Password hashing utilities

The FastAPI dependencies live in ``netops_core.auth.middleware``; it depends on
the user store and is imported directly by the routes.
"""

from .jwt import (
    create_access_token,
    decode_token,
    is_token_expired,
    TokenData,
    TokenType,
)

from .password import (
    hash_password,
    verify_password,
    hash_password_async,
    verify_password_async,
)

__all__ = [
    # JWT
    "create_access_token",
    "decode_token",
    "is_token_expired",
    "TokenData",
    "TokenType",
    # Password
    "hash_password",
    "verify_password",
    "hash_password_async",
    "verify_password_async",
]
