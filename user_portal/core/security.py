# Password hashing and JWT helpers
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

import bcrypt
import jwt

from user_portal.core.config import settings

LOGGER = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a plain-text password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Compare a plain-text password against a stored bcrypt hash.

    A password longer than bcrypt accepts can never have been stored, so it
    is a mismatch. A malformed hash is treated as a mismatch too.
    """
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        return False

    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        LOGGER.warning("Stored password hash is malformed")
        return False


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT carrying `data` plus `iat` and `exp` claims."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=settings.JWT_ACCESS_TOKEN_EXPIRE_HOURS))

    to_encode = dict(data)
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_user_token(user) -> str:
    """Mint the session token for a User."""
    token_data = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
    }
    return create_access_token(data=token_data)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify a JWT.

    Returns the payload, or None if the token is expired, forged or garbage.
    """
    try:
        return jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.PyJWTError as e:
        LOGGER.debug("Rejected session token: %s", e)
        return None
