"""
Request-scoped dependencies: bearer-token authentication.

A missing, malformed or expired token yields an anonymous caller rather than
an error; operations that need a user decide how to reject it.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tourhub.core.db import get_db
from tourhub.core.jwt import decode_token
from tourhub.models.user import User

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def resolve_user(db: AsyncSession, authorization: Optional[str]) -> Optional[User]:
    """
    Resolve the user behind an Authorization header.

    Args:
        db: Database session
        authorization: Raw Authorization header value

    Returns:
        Active User, or None for anonymous/invalid/locked callers
    """
    token = extract_bearer_token(authorization)
    if not token:
        return None

    payload = decode_token(token)
    if not payload or "sub" not in payload:
        logger.warning("Invalid or expired access token")
        return None

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        logger.warning("Access token subject is not a user id")
        return None

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        return None
    return user


async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """FastAPI dependency returning the caller or None."""
    return await resolve_user(db, request.headers.get("Authorization"))


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """FastAPI dependency that requires an authenticated caller."""
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid authentication token")
    return user
