"""Password hashing and access token utilities."""
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from tandem.config import settings
from tandem.models.session import TokenData


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string

    Example:
        >>> hashed = hash_password("mypassword123")
        >>> hashed.startswith("$2b$")
        True
    """
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Previously hashed password

    Returns:
        True if password matches hash, False otherwise
    """
    password_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def create_access_token(
    user_id: str, session_id: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token for a logged-in session.

    Args:
        user_id: User ID, encoded as the ``sub`` claim
        session_id: Session ID, encoded as the ``sid`` claim
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode = {
        "sub": user_id,
        "sid": session_id,
        "exp": expire,
    }

    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> TokenData:
    """
    Verify and decode a JWT access token.

    Args:
        token: JWT token string to verify

    Returns:
        The user and session ids carried by the token

    Raises:
        JWTError: If token is invalid, expired, or missing a claim
    """
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    user_id = payload.get("sub")
    session_id = payload.get("sid")

    if user_id is None or session_id is None:
        raise JWTError("Token payload missing 'sub' or 'sid' claim")

    return TokenData(user_id=user_id, session_id=session_id)
