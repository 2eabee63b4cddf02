# todo_api/domains/auth/service.py
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import jwt

from todo_api.core.settings import settings

from .types import JwtPayload


def create_access_token(
    user_id: str, expires_in: Optional[timedelta] = None
) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user_id: Becomes the ``sub`` claim
        expires_in: Token lifetime, defaults to ``JWT_EXPIRES_MINUTES``

    Returns:
        Encoded JWT
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_in or timedelta(minutes=settings.JWT_EXPIRES_MINUTES)
    payload = {
        "sub": user_id,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
        "jti": str(uuid4()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> JwtPayload:
    """
    Verify a token's signature and expiry.

    Raises:
        jwt.PyJWTError: If the token is malformed, forged or expired
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )
    return JwtPayload(**dict(payload))
