"""
Authentication module for access-token validation.
Provides the FastAPI dependency that resolves the calling user.

Access tokens are HS256 JWTs signed with the shared JWT_SECRET. The user
id is the "sub" claim, falling back to "_id" for tokens issued by the
legacy session service.
"""
import logging
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def validate_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Validate an access token and return the user_id."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid access token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")

    user_id = payload.get("sub") or payload.get("_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing user ID")
    logger.debug(f"Access token validated for user: {user_id}")
    return str(user_id)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate via Bearer JWT.
    Returns user_id string.

    Usage:
        @router.get("/protected")
        async def protected_route(user_id: str = Depends(get_current_user)):
            return {"user_id": user_id}
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured")
        raise HTTPException(status_code=500, detail="Authentication not configured")

    token = authorization.split(" ", 1)[1]
    return validate_token(token, settings.jwt_secret, settings.jwt_algorithm)
