"""
Authentication utilities for JWT token management.
Tokens are issued by the account service; this API only verifies them and reads the principal.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, ExpiredSignatureError, jwt
from sejour.config import settings


class TokenPayload:
    """JWT token payload structure."""

    def __init__(self, user_id: int, username: Optional[str], exp: datetime):
        self.user_id = user_id
        self.username = username
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from dictionary."""
        return cls(
            user_id=int(data["sub"]),
            username=data.get("username"),
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )


def create_access_token(
    user_id: int,
    username: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token for a principal.

    Args:
        user_id: Principal id, stored as the subject claim
        username: Optional display name claim
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    to_encode = {
        "sub": str(user_id),
        "username": username,
        "exp": expire,
        "iat": now,
        "type": "access"
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> TokenPayload:
    """
    Verify and decode JWT access token.

    Args:
        token: JWT token string

    Returns:
        TokenPayload of a valid token

    Raises:
        ExpiredSignatureError: If token has expired
        JWTError: If token is invalid
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )

    if payload.get("type") != "access":
        raise JWTError("Invalid token type. Expected access")

    subject = payload.get("sub")
    if not subject or not str(subject).isdigit():
        raise JWTError("Invalid token payload")

    return TokenPayload.from_dict(payload)

