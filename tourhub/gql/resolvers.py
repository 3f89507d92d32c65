"""
Favorites resolvers.

Business-rule failures come back as ``success: false`` result objects;
a missing user raises AuthenticationRequiredError, which the error formatter
turns into an UNAUTHENTICATED GraphQL error.
"""
import logging
from typing import Optional, Type, TypeVar

from ariadne import MutationType, QueryType
from graphql import GraphQLResolveInfo

from tourhub.core.concurrency_manager import user_locks
from tourhub.core.exceptions import AuthenticationRequiredError, FavoriteRuleError
from tourhub.core.metrics import record_favorite_latency, record_outcome
from tourhub.models.user import User
from tourhub.schemas.favorite import (
    FavoriteRead,
    FavoriteResponse,
    FavoritesListResponse,
    ReorderResponse,
)
from tourhub.schemas.user import UserRead
from tourhub.services.favorite_service import FavoriteService

logger = logging.getLogger(__name__)

query = QueryType()
mutation = MutationType()

R = TypeVar("R", FavoriteResponse, FavoritesListResponse, ReorderResponse)

ADDED_MESSAGE = "Tour added to your favorites"
REMOVED_MESSAGE = "Tour removed from your favorites"


def _require_user(info: GraphQLResolveInfo, message: Optional[str] = None) -> User:
    user = info.context.get("user")
    if user is None:
        raise AuthenticationRequiredError(message) if message else AuthenticationRequiredError()
    return user


def _service(info: GraphQLResolveInfo) -> FavoriteService:
    return FavoriteService(info.context["db"])


def _failure(response_cls: Type[R], operation: str, exc: FavoriteRuleError) -> R:
    logger.warning(
        f"{operation} rejected: {exc.message}",
        extra={"operation": operation, "error_code": exc.error_code.value, "details": exc.details},
    )
    record_outcome(operation, "failure")
    return response_cls(success=False, message=exc.message)


@query.field("me")
async def resolve_me(_, info: GraphQLResolveInfo):
    user = info.context.get("user")
    return UserRead.from_model(user) if user else None


@query.field("getFavorites")
async def resolve_get_favorites(_, info: GraphQLResolveInfo, limit=None, offset=None):
    user = _require_user(info, "You must be logged in to view your favorites")
    with record_favorite_latency("getFavorites"):
        try:
            favorites, total = await _service(info).list_favorites(user.id, limit, offset)
        except FavoriteRuleError as exc:
            return _failure(FavoritesListResponse, "getFavorites", exc)

    record_outcome("getFavorites", "success")
    return FavoritesListResponse(
        success=True,
        message="Favorites fetched successfully",
        favorites=[FavoriteRead.from_model(f) for f in favorites],
        total=total,
    )


@query.field("isFavorite")
async def resolve_is_favorite(_, info: GraphQLResolveInfo, tour_id):
    user = info.context.get("user")
    if user is None:
        return False
    with record_favorite_latency("isFavorite"):
        return await _service(info).is_favorite(user.id, tour_id)


@query.field("getTourFavorites")
async def resolve_get_tour_favorites(_, info: GraphQLResolveInfo, tour_id):
    _require_user(info)
    with record_favorite_latency("getTourFavorites"):
        try:
            favorites = await _service(info).list_tour_favorites(tour_id)
        except FavoriteRuleError as exc:
            return _failure(FavoritesListResponse, "getTourFavorites", exc)

    record_outcome("getTourFavorites", "success")
    return FavoritesListResponse(
        success=True,
        message="Tour favorites fetched successfully",
        favorites=[FavoriteRead.from_model(f) for f in favorites],
        total=len(favorites),
    )


@mutation.field("addToFavorites")
async def resolve_add_to_favorites(_, info: GraphQLResolveInfo, tour_id):
    user = _require_user(info, "You must be logged in to add favorites")
    async with user_locks.hold(user.id):
        with record_favorite_latency("addToFavorites"):
            try:
                favorite = await _service(info).add_favorite(user.id, tour_id)
            except FavoriteRuleError as exc:
                return _failure(FavoriteResponse, "addToFavorites", exc)

    record_outcome("addToFavorites", "success")
    return FavoriteResponse(
        success=True,
        message=ADDED_MESSAGE,
        favorite=FavoriteRead.from_model(favorite),
    )


@mutation.field("removeFromFavorites")
async def resolve_remove_from_favorites(_, info: GraphQLResolveInfo, tour_id):
    user = _require_user(info)
    async with user_locks.hold(user.id):
        with record_favorite_latency("removeFromFavorites"):
            try:
                favorite = await _service(info).remove_favorite(user.id, tour_id)
            except FavoriteRuleError as exc:
                return _failure(FavoriteResponse, "removeFromFavorites", exc)

    record_outcome("removeFromFavorites", "success")
    return FavoriteResponse(
        success=True,
        message=REMOVED_MESSAGE,
        favorite=FavoriteRead.from_model(favorite),
    )


@mutation.field("toggleFavorite")
async def resolve_toggle_favorite(_, info: GraphQLResolveInfo, tour_id):
    user = _require_user(info)
    async with user_locks.hold(user.id):
        with record_favorite_latency("toggleFavorite"):
            try:
                favorite, added = await _service(info).toggle_favorite(user.id, tour_id)
            except FavoriteRuleError as exc:
                return _failure(FavoriteResponse, "toggleFavorite", exc)

    record_outcome("toggleFavorite", "success")
    return FavoriteResponse(
        success=True,
        message=ADDED_MESSAGE if added else REMOVED_MESSAGE,
        favorite=FavoriteRead.from_model(favorite),
    )


@mutation.field("reorderFavorites")
async def resolve_reorder_favorites(_, info: GraphQLResolveInfo, favorite_ids):
    user = _require_user(info, "You must be logged in to reorder favorites")
    async with user_locks.hold(user.id):
        with record_favorite_latency("reorderFavorites"):
            try:
                favorites = await _service(info).reorder_favorites(user.id, favorite_ids)
            except FavoriteRuleError as exc:
                return _failure(ReorderResponse, "reorderFavorites", exc)

    record_outcome("reorderFavorites", "success")
    return ReorderResponse(
        success=True,
        message="Favorite order updated" if favorite_ids else "Nothing to reorder",
        favorites=[FavoriteRead.from_model(f) for f in favorites],
    )
