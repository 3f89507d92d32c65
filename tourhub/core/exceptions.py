"""
Custom exceptions for the TourHub favorites service.

Business-rule failures derive from FavoriteRuleError and are reported to
GraphQL callers as ``success: false`` result objects; everything else
propagates as a GraphQL or HTTP error.
"""

from typing import Optional, Dict, Any, Iterable
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Authentication errors
    UNAUTHENTICATED = "UNAUTHENTICATED"

    # Favorites business rules
    TOUR_NOT_FOUND = "TOUR_NOT_FOUND"
    FAVORITE_ALREADY_EXISTS = "FAVORITE_ALREADY_EXISTS"
    FAVORITE_NOT_FOUND = "FAVORITE_NOT_FOUND"
    FAVORITE_ORDER_MISMATCH = "FAVORITE_ORDER_MISMATCH"
    FAVORITE_CONFLICT = "FAVORITE_CONFLICT"
    INVALID_PAGINATION = "INVALID_PAGINATION"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class TourHubException(Exception):
    """Base exception for the favorites service."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class AuthenticationRequiredError(TourHubException):
    """Raised when an operation needs a signed-in user."""

    def __init__(self, message: str = "You must be logged in to manage favorites"):
        super().__init__(
            message=message,
            error_code=ErrorCode.UNAUTHENTICATED,
            status_code=401
        )


class FavoriteRuleError(TourHubException):
    """Expected business-rule failure, surfaced as a result object."""


class TourNotFoundError(FavoriteRuleError):
    """Raised when the referenced tour does not exist or is deleted."""

    def __init__(self, tour_id: Any):
        super().__init__(
            message="Tour not found",
            error_code=ErrorCode.TOUR_NOT_FOUND,
            details={"tour_id": str(tour_id)},
            status_code=404
        )


class FavoriteAlreadyExistsError(FavoriteRuleError):
    """Raised when adding a tour that is already an active favorite."""

    def __init__(self, tour_id: Any):
        super().__init__(
            message="Tour is already in your favorites",
            error_code=ErrorCode.FAVORITE_ALREADY_EXISTS,
            details={"tour_id": str(tour_id)},
            status_code=409
        )


class FavoriteNotFoundError(FavoriteRuleError):
    """Raised when removing a tour that is not an active favorite."""

    def __init__(self, tour_id: Any):
        super().__init__(
            message="Tour is not in your favorites",
            error_code=ErrorCode.FAVORITE_NOT_FOUND,
            details={"tour_id": str(tour_id)},
            status_code=404
        )


class FavoriteOrderMismatchError(FavoriteRuleError):
    """
    Raised when a reorder request is not exactly the caller's active
    favorite set.
    """

    def __init__(
        self,
        unknown_ids: Iterable[str] = (),
        missing_ids: Iterable[str] = (),
        duplicate_ids: Iterable[str] = ()
    ):
        details = {
            "unknown_ids": sorted(unknown_ids),
            "missing_ids": sorted(missing_ids),
            "duplicate_ids": sorted(duplicate_ids),
        }
        if details["unknown_ids"]:
            message = "Some favorites do not exist or do not belong to you"
        elif details["duplicate_ids"]:
            message = "Favorite list contains duplicate ids"
        else:
            message = "Favorite list is out of date, reload and try again"
        super().__init__(
            message=message,
            error_code=ErrorCode.FAVORITE_ORDER_MISMATCH,
            details=details,
            status_code=422
        )


class FavoriteConflictError(FavoriteRuleError):
    """Raised when a concurrent write for the same (user, tour) won the race."""

    def __init__(self, tour_id: Any):
        super().__init__(
            message="Favorite was modified concurrently, please retry",
            error_code=ErrorCode.FAVORITE_CONFLICT,
            details={"tour_id": str(tour_id)},
            status_code=409
        )


class InvalidPaginationError(FavoriteRuleError):
    """Raised when limit/offset are out of range."""

    def __init__(self, limit: Optional[int], offset: Optional[int], max_limit: int):
        super().__init__(
            message=f"limit must be between 1 and {max_limit} and offset must not be negative",
            error_code=ErrorCode.INVALID_PAGINATION,
            details={"limit": limit, "offset": offset, "max_limit": max_limit},
            status_code=400
        )
