"""
JWT Token Utilities for NetOps

Provides functions for creating and validating the bearer tokens used for
authentication. A token carries only the user id as its subject; the role is
read from the database on every request.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from enum import Enum

from pydantic import BaseModel
from jose import jwt, JWTError

from netops_core.config import get_settings

log = logging.getLogger(__name__)


class TokenType(str, Enum):
    """Token type enumeration"""
    ACCESS = "access"


class TokenData(BaseModel):
    """Data contained in a JWT token"""
    sub: str  # Subject (user id)
    exp: datetime  # Expiration time
    iat: datetime  # Issued at time
    type: TokenType


def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create an access token for a user.

    Args:
        user_id: The id of the user to create a token for
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT access token string
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": str(user_id),
        "exp": expire,
        "iat": now,
        "type": TokenType.ACCESS.value,
    }

    token = jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    log.debug(f"Created access token for user id: {user_id}")

    return token


def decode_token(token: str) -> Optional[TokenData]:
    """
    Decode and validate a JWT token (signature and expiry).

    Args:
        token: The JWT token string to decode

    Returns:
        TokenData if valid, None if invalid or expired
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])

        return TokenData(
            sub=payload["sub"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            type=TokenType(payload["type"]),
        )

    except JWTError as e:
        log.warning(f"JWT decode error: {e}")
        return None

    except (KeyError, ValueError) as e:
        log.warning(f"Malformed token payload: {e}")
        return None


def is_token_expired(token_data: TokenData) -> bool:
    """
    Check if a token is expired.

    Args:
        token_data: The decoded token data

    Returns:
        True if expired, False otherwise
    """
    return datetime.now(timezone.utc) > token_data.exp
