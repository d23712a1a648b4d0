"""Password hashing utilities.

Passwords are stored only as salted bcrypt hashes. Hashing is deliberately slow,
so async callers should use the ``*_async`` variants, which run the work on the
worker thread pool instead of the event loop.
"""

from typing import Optional

import bcrypt
from fastapi.concurrency import run_in_threadpool

from netops_core.config import get_settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: The plain text password to hash
        rounds: bcrypt cost factor (defaults to BCRYPT_ROUNDS)

    Returns:
        The bcrypt hash as a string
    """
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(provided_password: str, stored_hash: str) -> bool:
    """
    Verify a password against a stored hash.

    Args:
        provided_password: The password to verify
        stored_hash: The stored bcrypt hash

    Returns:
        True if the password matches, False otherwise
    """
    if not stored_hash or not provided_password:
        return False

    try:
        return bcrypt.checkpw(provided_password.encode("utf-8"), stored_hash.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash
        return False


async def hash_password_async(password: str) -> str:
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(provided_password: str, stored_hash: str) -> bool:
    return await run_in_threadpool(verify_password, provided_password, stored_hash)
