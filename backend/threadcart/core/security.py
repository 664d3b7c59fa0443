from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

import jwt
from jwt import PyJWTError
from passlib.context import CryptContext

from threadcart.core.config import settings

logger = logging.getLogger(__name__)

# Create the context once and reuse it
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plain-text password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain-text password against its stored hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a hash this context recognises
        logger.warning("Password hash could not be identified")
        return False


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed access token for a user id."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"sub": str(subject), "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Verify and decode an access token.

    Returns the payload, or None if the token is invalid or expired.
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except PyJWTError as e:
        logger.warning(f"Rejected access token: {e}")
        return None
