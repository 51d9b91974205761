from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from storefront.core.config import Settings
from storefront.core.errors import Unauthenticated

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
ALGORITHM = "HS256"
RESET_TOKEN_BYTES = 20


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_session_token(user_id: int, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.SESSION_TTL_DAYS)).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings) -> dict[str, Any]:
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])


def decode_session_token(token: str, settings: Settings) -> int:
    """Return the user id carried by a session token.

    Raises ``Unauthenticated`` for a bad signature, an expired token or a
    missing/non-numeric subject.
    """
    try:
        payload = decode_token(token, settings)
    except JWTError:
        raise Unauthenticated("Invalid session")

    sub = payload.get("sub")
    if not sub or not str(sub).isdigit():
        raise Unauthenticated("Invalid session subject")
    return int(sub)


def generate_reset_token() -> str:
    return secrets.token_hex(RESET_TOKEN_BYTES)
