"""
Authentication dependencies for protecting endpoints
Reference: https://fastapi.tiangolo.com/tutorial/dependencies/
"""
import logging
from functools import lru_cache
from typing import Optional

from authlib.jose import JsonWebToken
from authlib.jose.errors import ExpiredTokenError, JoseError
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from artforms.core.config import settings
from artforms.core.database import get_db
from artforms.core.exceptions import AuthError, ForbiddenError
from artforms.models.user import User, UserType

logger = logging.getLogger(__name__)

# HTTPBearer extracts the Bearer token from the Authorization header
# auto_error=False so a missing header is reported as our AuthError (401)
# Reference: https://fastapi.tiangolo.com/reference/security/#fastapi.security.HTTPBearer
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_token_decoder() -> JsonWebToken:
    """
    JWT decoder restricted to the configured algorithm.

    Reference: https://docs.authlib.org/en/latest/jose/jwt.html
    """
    return JsonWebToken([settings.JWT_ALGORITHM])


def decode_access_token(token: str) -> dict:
    """
    Decode and validate an access token.

    Returns:
        Dict of validated claims

    Raises:
        AuthError: If the signature is bad, the token is malformed or expired
    """
    try:
        claims = get_token_decoder().decode(token, settings.JWT_SECRET)
        claims.validate()
    except ExpiredTokenError as e:
        raise AuthError("Token expired") from e
    except JoseError as e:
        logger.debug(f"Rejected access token: {type(e).__name__}: {e}")
        raise AuthError("Invalid token") from e
    return dict(claims)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user.

    Usage:
        @router.post("/protected")
        async def protected_route(current_user: User = Depends(get_current_user)):
            return {"user_id": current_user.id}

    Raises:
        AuthError: 401 if the token is missing, invalid, expired or names no user
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Not authorized to access this route")

    claims = decode_access_token(credentials.credentials)

    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        logger.warning("Token missing or malformed sub claim")
        raise AuthError("Invalid token") from None

    user = await db.scalar(select(User).where(User.id == user_id))
    if not user:
        raise AuthError("User belonging to this token no longer exists")

    logger.debug(f"Authenticated user {user.id}")
    return user


async def require_artist(current_user: User = Depends(get_current_user)) -> User:
    """
    Dependency restricting a route to users registered as artists.

    Raises:
        ForbiddenError: 403 if the user is not an artist
    """
    if current_user.user_type != UserType.ARTIST.value:
        raise ForbiddenError("Only artists can perform this action")
    return current_user
