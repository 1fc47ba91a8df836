"""Password hashing and opaque token generation."""

import secrets
from functools import lru_cache

from passlib.context import CryptContext

from shared.config import get_settings


@lru_cache(maxsize=1)
def _pwd_context() -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=get_settings().bcrypt_rounds,
    )


def hash_password(password: str) -> str:
    return _pwd_context().hash(password)


def verify_password(password: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return _pwd_context().verify(password, hashed)


def generate_token(nbytes: int = 32) -> str:
    """URL-safe random token for session ids and password reset links."""
    return secrets.token_urlsafe(nbytes)
