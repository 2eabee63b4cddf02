# todo_api/domains/auth/dependencies.py
import logging

import jwt
from fastapi import Header

from todo_api.shared.exceptions import InvalidTokenError

from .service import decode_access_token
from .types import Principal

logger = logging.getLogger(__name__)


def get_current_principal(authorization: str = Header(None)) -> Principal:
    """
    Extracts and validates the bearer token from the Authorization header.
    Returns the authenticated principal (from the `sub` claim).
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError("Missing token")

    token = authorization.split(" ", 1)[1]
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise InvalidTokenError("Invalid or expired token")

    if not payload.sub:
        raise InvalidTokenError("Invalid or expired token")
    return Principal(user_id=payload.sub)
