"""
Core infrastructure for the favorites service.
Provides the exception hierarchy and per-user mutation locking.
"""

from .exceptions import (
    ErrorCode,
    TourHubException,
    AuthenticationRequiredError,
    FavoriteRuleError,
)
from .concurrency_manager import UserLockRegistry, user_locks

__all__ = [
    "ErrorCode",
    "TourHubException",
    "AuthenticationRequiredError",
    "FavoriteRuleError",
    "UserLockRegistry",
    "user_locks",
]
