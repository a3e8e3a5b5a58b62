from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig
from bizhub.domain.entities import Principal


def create_access_token(
    user_id: UUID, email: str, expires_delta: timedelta = timedelta(minutes=15)
) -> str:
    """
    Create JWT access token as issued by the identity provider

    Args:
        user_id: User UUID
        email: User email
        expires_delta: Token expiration duration

    Returns:
        JWT token string
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "email": email,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        return jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
    except JWTError:
        return None


def principal_from_token(token: str) -> Optional[Principal]:
    """Principal carried by a valid token, None for anything else"""
    payload = verify_jwt(token)
    if payload is None:
        return None
    try:
        return Principal(id=UUID(payload["user_id"]), email=payload["email"])
    except (KeyError, TypeError, ValueError):
        return None
