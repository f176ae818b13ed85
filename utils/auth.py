"""
Authorization guard.

Resolves the requesting user id from a bearer JWT and provides the single
ownership predicate used by every topic-scoped workflow.
"""

import os
import logging
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from utils.exceptions import AuthenticationError, ForbiddenError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

TOKEN_FAILED_MESSAGE = "Not authorized, token failed"


def decode_user_id(token: str) -> str:
    """
    Decode a bearer token and return the user id it carries.

    The id is read from the `id` claim, falling back to `sub`.

    Raises:
        AuthenticationError: bad signature, expired token, or no user id.
    """
    secret = os.getenv("JWT_SECRET")
    if not secret:
        logger.error("JWT_SECRET is not configured")
        raise AuthenticationError(TOKEN_FAILED_MESSAGE)

    algorithm = os.getenv("JWT_ALGORITHM", "HS256")
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.PyJWTError as e:
        logger.warning(f"Token rejected: {e}")
        raise AuthenticationError(TOKEN_FAILED_MESSAGE) from e

    user_id = payload.get("id") or payload.get("sub")
    if not user_id:
        raise AuthenticationError(TOKEN_FAILED_MESSAGE)
    return str(user_id)


def get_current_user_id(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """FastAPI dependency: the authenticated user id, or 401."""
    if not creds or not creds.credentials:
        raise AuthenticationError()
    return decode_user_id(creds.credentials)


def ensure_owner(owner_id: str, requester_id: str, resource: str = "resource") -> None:
    """Raise ForbiddenError unless requester_id owns the resource."""
    if owner_id != requester_id:
        logger.warning(f"User {requester_id} denied access to {resource} owned by {owner_id}")
        raise ForbiddenError(context={"resource": resource})
