"""JWT issue / verify utilities for access tokens"""
from datetime import datetime, timedelta, timezone
from typing import Dict, Any
import jwt

from tourhub.config.settings import settings


def _build_payload(subject: str, expires_minutes: int, scopes: list[str] | None = None) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "sub": subject,
        "scopes": scopes or [],
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }


def create_access_token(subject: str, scopes: list[str] | None = None, expires_minutes: int | None = None) -> str:
    expires = expires_minutes or settings.security.access_token_expire_minutes
    return jwt.encode(
        _build_payload(subject, expires, scopes),
        settings.security.jwt_secret,
        algorithm=settings.security.jwt_algorithm,
    )


def decode_token(token: str) -> Dict[str, Any] | None:
    try:
        return jwt.decode(token, settings.security.jwt_secret, algorithms=[settings.security.jwt_algorithm])
    except jwt.PyJWTError:
        return None
