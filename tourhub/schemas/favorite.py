"""
Favorite schemas shared by the GraphQL resolvers and the client
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from tourhub.schemas.base import CamelModel
from tourhub.schemas.tour import TourRead
from tourhub.schemas.user import UserRead


def _isoformat(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ""


class FavoriteRead(CamelModel):
    """A user's saved tour as exposed on the wire"""
    id: str
    user: UserRead
    tour: TourRead
    is_deleted: Optional[bool] = None
    order: Optional[int] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, favorite) -> "FavoriteRead":
        return cls(
            id=str(favorite.id),
            user=UserRead.from_model(favorite.user),
            tour=TourRead.from_model(favorite.tour),
            is_deleted=favorite.is_deleted,
            order=favorite.order or 0,
            created_at=_isoformat(favorite.created_at),
            updated_at=_isoformat(favorite.updated_at),
        )


class FavoriteResponse(CamelModel):
    """Result of add/remove/toggle"""
    success: bool
    message: str
    favorite: Optional[FavoriteRead] = None


class FavoritesListResponse(CamelModel):
    """Paginated favorites listing"""
    success: bool
    message: str
    favorites: List[FavoriteRead] = Field(default_factory=list)
    total: int = 0


class ReorderResponse(CamelModel):
    """Result of a bulk reorder"""
    success: bool
    message: str
    favorites: List[FavoriteRead] = Field(default_factory=list)
