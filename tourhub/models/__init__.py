"""
ORM models for the TourHub favorites service.
"""

from .user import User
from .tour import Tour
from .favorite import Favorite

__all__ = [
    "User",
    "Tour",
    "Favorite",
]
