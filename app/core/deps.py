"""
FastAPI dependencies for authentication and authorization.

The resolved Principal is handed to endpoints as a dependency value:

- get_optional_principal: Principal or None, never raises
- get_current_principal: must be logged in
- get_admin_principal: must be logged in as an admin
- ensure_self_or_admin: must be an admin or the user named in the path
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from app.core.errors import UnauthorizedError
from app.core.security import decode_token
from app.schemas.auth import Principal

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error=False: a missing header is not an error at this stage
security = HTTPBearer(auto_error=False)


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Principal]:
    """
    Extract the principal from a bearer token if one was provided.

    A missing, malformed or invalid token is not an error here; the request
    just proceeds without a principal.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials.strip())
    except JWTError as e:
        logger.debug(f"Ignoring invalid bearer token: {e}")
        return None

    return Principal.from_claims(payload)


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """
    Require a logged-in principal.

    Raises:
        UnauthorizedError: If no valid token was provided
    """
    if principal is None:
        raise UnauthorizedError()
    return principal


async def get_admin_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """
    Require a logged-in admin.

    Raises:
        UnauthorizedError: If not logged in or not an admin
    """
    if principal is None or not principal.is_admin:
        raise UnauthorizedError()
    return principal


async def ensure_self_or_admin(
    username: str,
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """
    Require an admin, or the user whose `username` is in the route path.

    Use on routes declaring a `{username}` path parameter. This service
    has no such routes yet; user accounts live outside it, and the guard
    is exercised by tests/test_auth.py until user routes are added.

    Raises:
        UnauthorizedError: If not logged in, or logged in as someone else
    """
    if not principal.is_admin and principal.username != username:
        raise UnauthorizedError()
    return principal
