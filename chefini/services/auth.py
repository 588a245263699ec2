"""
Chefini API - Authentication Service.

JWT token generation, password/OTP hashing and the request-scoped session
context carried by every authenticated request.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import logging

import bcrypt
from jose import jwt, JWTError

from settings import settings

logger = logging.getLogger(__name__)


# Maximum password length for bcrypt (72 bytes)
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class SessionContext:
    """
    Authenticated caller, decoded from the bearer token.

    Attributes:
        user_id: Public uid of the user (string form).
        email: Lowercase email of the user.
        provider: Strategy that established the session ("credentials" or "google").
    """

    user_id: str
    email: str
    provider: str = "credentials"


def _prepare_secret(secret: str) -> bytes:
    """
    Prepare a password or OTP for bcrypt.

    Bcrypt only uses the first 72 bytes of any input, so the value is
    encoded and truncated to keep hashing and verification consistent.
    """
    return secret.encode('utf-8')[:MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password (or reset code) using salted bcrypt.

    Example:
        >>> hashed = hash_password("leftovers")
        >>> verify_password("leftovers", hashed)
        True
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(_prepare_secret(password), salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password (or reset code) against a bcrypt hash.

    Returns False for a missing hash or a malformed one instead of raising.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            _prepare_secret(plain_password),
            hashed_password.encode('utf-8')
        )
    except Exception as e:
        logger.warning(f"Password verification failed: {e}")
        return False


# Reset codes go through the same salted one-way hash as passwords.
hash_otp = hash_password
verify_otp_hash = verify_password


def _encode(data: Dict[str, Any], expire: datetime, token_type: str) -> str:
    to_encode = data.copy()
    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc),
        "type": token_type,
    })
    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Token payload (must include 'sub'; 'email' and 'provider' are
            carried into the session context).
        expires_delta: Optional custom expiration time.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return _encode(data, expire, "access")


def create_refresh_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT refresh token with longer expiration."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    )
    return _encode(data, expire, "refresh")


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT access token.

    Returns:
        Token payload if valid, None otherwise. Refresh tokens are rejected.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    if payload.get("type") != "access":
        return None
    return payload


def verify_refresh_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT refresh token."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"Refresh token verification failed: {e}")
        return None

    if payload.get("type") != "refresh":
        logger.warning("Token is not a refresh token")
        return None
    return payload


def session_from_payload(payload: Dict[str, Any]) -> Optional[SessionContext]:
    """Build the session context from a decoded token payload."""
    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        return None
    return SessionContext(
        user_id=user_id,
        email=email,
        provider=payload.get("provider", "credentials"),
    )


def token_claims(session: SessionContext) -> Dict[str, Any]:
    """Claims embedded in both access and refresh tokens."""
    return {
        "sub": session.user_id,
        "email": session.email,
        "provider": session.provider,
    }
