"""
Password hashing (bcrypt) and bearer tokens (PyJWT, HS256).

bcrypt is deliberately slow, so the async helpers push the work onto
Starlette's threadpool instead of blocking the event loop.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

from vetclinic.config.settings import Settings
from vetclinic.exceptions.base import InvalidTokenError, ValidationFailedError

# bcrypt only looks at the first 72 bytes of the secret
BCRYPT_MAX_BYTES = 72


def _encode_password(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValidationFailedError(
            f"The password must be at most {BCRYPT_MAX_BYTES} bytes long.", fields=["password"]
        )
    return encoded


def hash_password_sync(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(_encode_password(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password_sync(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed digest or over-long password
        return False


async def hash_password(password: str, rounds: int = 12) -> str:
    return await run_in_threadpool(hash_password_sync, password, rounds)


async def verify_password(password: str, hashed: str) -> bool:
    return await run_in_threadpool(verify_password_sync, password, hashed)


def create_access_token(claims: dict[str, Any], settings: Settings,
                        expires_delta: timedelta | None = None) -> str:
    """
    Issue a signed token carrying `claims` plus `iat` and `exp`.
    Defaults to JWT_EXPIRES_MINUTES from settings (one hour).
    """
    now = datetime.now(timezone.utc)
    ttl = expires_delta if expires_delta is not None else timedelta(minutes=settings.JWT_EXPIRES_MINUTES)
    payload = {**claims, "iat": now, "exp": now + ttl}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        InvalidTokenError: expired, tampered or otherwise unreadable token.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError() from exc
