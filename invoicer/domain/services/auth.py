# invoicer/domain/services/auth.py
"""
Password hashing and JWT helpers for API users.

Access and refresh tokens share the signing secret and are told apart by
their ``type`` claim.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt as _bcrypt
from jose import jwt

from invoicer.config.settings import settings

ACCESS_TOKEN_TYPE = "user_access"
REFRESH_TOKEN_TYPE = "user_refresh"


# ---------------------------------------------------------------------------
# Password hashing (bcrypt directly)
# ---------------------------------------------------------------------------

def hash_password(plain: str) -> str:
    return _bcrypt.hashpw(plain.encode(), _bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    return _bcrypt.checkpw(plain.encode(), hashed.encode())


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------

def create_access_token(user_id: str) -> tuple[str, int]:
    """Return (encoded_jwt, expires_in_seconds)."""
    expire_minutes = settings.USER_JWT_ACCESS_EXPIRE_MINUTES
    payload = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=expire_minutes),
    }
    token = jwt.encode(payload, settings.USER_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return token, expire_minutes * 60


def create_refresh_token(user_id: str) -> str:
    payload = {
        "sub": str(user_id),
        "type": REFRESH_TOKEN_TYPE,
        "exp": datetime.now(timezone.utc) + timedelta(days=settings.USER_JWT_REFRESH_EXPIRE_DAYS),
    }
    return jwt.encode(payload, settings.USER_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and verify signature/expiry. Raises ``jose.JWTError`` when invalid."""
    return jwt.decode(token, settings.USER_JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
