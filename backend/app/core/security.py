# backend/app/core/security.py
"""Password hashing and JWT issue/verify"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.core.config import settings
from app.core.errors import InvalidToken
from app.logger import get_logger

log = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with a fresh random salt"""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash"""
    hash_bytes = hashed_password.encode("utf-8") if isinstance(hashed_password, str) else hashed_password
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hash_bytes)
    except ValueError:
        # stored value is not a bcrypt hash
        log.warning("Stored password hash is malformed")
        return False


def create_access_token(
    user_id: str,
    email: str,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed token carrying the user's id and email"""
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    claims = {
        "userId": user_id,
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry; raise InvalidToken on any failure"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        raise InvalidToken("token expired") from e
    except JWTError as e:
        raise InvalidToken(f"token rejected: {e}") from e

    if not payload.get("userId") or not payload.get("email"):
        raise InvalidToken("token missing userId/email claims")
    return payload
