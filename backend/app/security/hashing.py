# backend/app/security/hashing.py
"""
Password hashing with bcrypt.

- Cost factor from settings.BCRYPT_ROUNDS (12 by default)
- bcrypt.checkpw compares in constant time; never compare hashes by hand
- Malformed stored hashes verify as False instead of raising, so every
  login failure looks the same to the caller

bcrypt only reads the first 72 bytes of a password, the bytes beyond that
are dropped explicitly before hashing and verifying.
"""
from functools import lru_cache
from typing import Optional

import bcrypt
from starlette.concurrency import run_in_threadpool

from backend.app.core.config import settings

BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError:
        # "Invalid salt" and friends: the stored hash is not a bcrypt hash
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return get_password_hash("bankr-timing-equalizer")


def prepare_dummy_hash() -> None:
    """Compute the dummy hash now instead of on the first unknown-email login."""
    _dummy_hash()


def dummy_verify(plain_password: str) -> bool:
    """
    Spend the same CPU as a real verification and return False.

    Used when the email is unknown so the response time does not reveal
    whether the account exists.
    """
    verify_password(plain_password or "x", _dummy_hash())
    return False


# bcrypt is CPU-bound; keep it off the event loop.

async def hash_password_async(password: str) -> str:
    return await run_in_threadpool(get_password_hash, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


async def dummy_verify_async(plain_password: str) -> bool:
    return await run_in_threadpool(dummy_verify, plain_password)
