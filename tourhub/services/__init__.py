# Business logic services

from .favorite_service import FavoriteService

__all__ = [
    'FavoriteService',
]
