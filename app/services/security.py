"""
Password Hashing

bcrypt hashing and verification. Both are CPU-bound on purpose, so they
run in the threadpool instead of on the event loop.
"""

import bcrypt
from fastapi.concurrency import run_in_threadpool

from app.core.config import get_settings

# bcrypt only looks at the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72


def _hash(password: bytes, rounds: int) -> str:
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _check(password: bytes, hashed: bytes) -> bool:
    return bcrypt.checkpw(password, hashed)


async def hash_password(password: str) -> str:
    """
    Hash a plaintext password with a random salt.

    Args:
        password: Plaintext secret, at most 72 bytes once UTF-8 encoded

    Returns:
        str: 60-character bcrypt hash ($2b$...)
    """
    rounds = get_settings().bcrypt_rounds
    return await run_in_threadpool(_hash, password.encode("utf-8"), rounds)


async def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        raw = password.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates can never match a stored hash
        return False
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return await run_in_threadpool(_check, raw, hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False
