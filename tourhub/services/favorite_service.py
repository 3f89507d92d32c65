"""
Favorite Service - user-scoped ordered favorites with soft delete
"""
import logging
from typing import Optional, List, Sequence, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tourhub.config.settings import settings
from tourhub.core.exceptions import (
    TourNotFoundError,
    FavoriteAlreadyExistsError,
    FavoriteNotFoundError,
    FavoriteOrderMismatchError,
    FavoriteConflictError,
    InvalidPaginationError,
)
from tourhub.models.favorite import Favorite
from tourhub.models.tour import Tour

logger = logging.getLogger(__name__)


def _parse_id(value) -> Optional[int]:
    """GraphQL IDs arrive as strings; anything non-numeric matches no row."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class FavoriteService:
    """Manages a user's favorite tours: toggle, listing and ordering"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _active_favorites(self, user_id: int, *columns):
        stmt = select(*columns) if columns else select(Favorite)
        return stmt.join(Tour, Favorite.tour_id == Tour.id).where(
            Favorite.user_id == user_id,
            Favorite.is_deleted.is_(False),
            Tour.is_deleted.is_(False),
        )

    async def _get_tour(self, tour_id) -> Tour:
        parsed = _parse_id(tour_id)
        tour = None
        if parsed is not None:
            stmt = select(Tour).where(Tour.id == parsed, Tour.is_deleted.is_(False))
            result = await self.db.execute(stmt)
            tour = result.scalar_one_or_none()
        if not tour:
            raise TourNotFoundError(tour_id)
        return tour

    async def _find_favorite(self, user_id: int, tour_id: int) -> Optional[Favorite]:
        stmt = select(Favorite).where(
            Favorite.user_id == user_id,
            Favorite.tour_id == tour_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _next_order(self, user_id: int) -> int:
        # Deleted rows count too, so a re-added tour always lands at the tail
        stmt = select(func.max(Favorite.order)).where(Favorite.user_id == user_id)
        result = await self.db.execute(stmt)
        return (result.scalar() or 0) + 1

    async def _reload(self, favorite_id: int) -> Favorite:
        stmt = (
            select(Favorite)
            .where(Favorite.id == favorite_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def _commit(self, tour_id) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Concurrent favorite write for tour {tour_id}: {e.orig}")
            raise FavoriteConflictError(tour_id) from e

    async def _activate(self, user_id: int, tour: Tour, existing: Optional[Favorite]) -> Favorite:
        order = await self._next_order(user_id)
        if existing:
            existing.is_deleted = False
            existing.order = order
            favorite = existing
        else:
            favorite = Favorite(user_id=user_id, tour_id=tour.id, order=order)
            self.db.add(favorite)
        await self._commit(tour.id)
        logger.info(
            f"User {user_id} favorited tour {tour.id}",
            extra={"user_id": user_id, "tour_id": tour.id, "order": order},
        )
        return await self._reload(favorite.id)

    async def _deactivate(self, user_id: int, favorite: Favorite) -> Favorite:
        favorite.is_deleted = True
        await self._commit(favorite.tour_id)
        logger.info(
            f"User {user_id} removed tour {favorite.tour_id} from favorites",
            extra={"user_id": user_id, "tour_id": favorite.tour_id},
        )
        return await self._reload(favorite.id)

    async def add_favorite(self, user_id: int, tour_id) -> Favorite:
        """
        Add a tour to the user's favorites

        Re-activates a soft-deleted record for the same tour instead of
        creating a second row.

        Raises:
            TourNotFoundError: tour missing or deleted
            FavoriteAlreadyExistsError: tour already an active favorite
        """
        tour = await self._get_tour(tour_id)
        existing = await self._find_favorite(user_id, tour.id)
        if existing and not existing.is_deleted:
            raise FavoriteAlreadyExistsError(tour_id)
        return await self._activate(user_id, tour, existing)

    async def remove_favorite(self, user_id: int, tour_id) -> Favorite:
        """
        Soft-delete the user's active favorite for a tour

        Raises:
            FavoriteNotFoundError: no active favorite for this tour
        """
        parsed = _parse_id(tour_id)
        existing = await self._find_favorite(user_id, parsed) if parsed is not None else None
        if not existing or existing.is_deleted:
            raise FavoriteNotFoundError(tour_id)
        return await self._deactivate(user_id, existing)

    async def toggle_favorite(self, user_id: int, tour_id) -> Tuple[Favorite, bool]:
        """
        Flip favorite state for (user, tour)

        Returns:
            (favorite, added) where added is True when the tour became a favorite
        """
        tour = await self._get_tour(tour_id)
        existing = await self._find_favorite(user_id, tour.id)
        if existing and not existing.is_deleted:
            return await self._deactivate(user_id, existing), False
        return await self._activate(user_id, tour, existing), True

    async def is_favorite(self, user_id: int, tour_id) -> bool:
        """True iff the tour is listed in the user's favorites (deleted tours never are)"""
        parsed = _parse_id(tour_id)
        if parsed is None:
            return False
        stmt = self._active_favorites(user_id, func.count(Favorite.id)).where(
            Favorite.tour_id == parsed
        )
        result = await self.db.execute(stmt)
        return (result.scalar() or 0) > 0

    async def list_favorites(
        self,
        user_id: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> Tuple[List[Favorite], int]:
        """
        List the user's active favorites in display order

        Args:
            user_id: User ID
            limit: Page size (defaults to the configured page size)
            offset: Number of favorites to skip

        Returns:
            (page of favorites, total active favorites)
        """
        max_limit = settings.favorites.max_page_size
        limit = settings.favorites.default_page_size if limit is None else limit
        offset = 0 if offset is None else offset
        if limit < 1 or limit > max_limit or offset < 0:
            raise InvalidPaginationError(limit, offset, max_limit)

        count_stmt = self._active_favorites(user_id, func.count(Favorite.id))
        total = (await self.db.execute(count_stmt)).scalar() or 0

        stmt = (
            self._active_favorites(user_id)
            .order_by(Favorite.order.asc(), Favorite.created_at.desc(), Favorite.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def list_all_favorites(self, user_id: int) -> List[Favorite]:
        stmt = self._active_favorites(user_id).order_by(
            Favorite.order.asc(), Favorite.created_at.desc(), Favorite.id.desc()
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_tour_favorites(self, tour_id) -> List[Favorite]:
        """Active favorites of a tour across all users, newest first"""
        tour = await self._get_tour(tour_id)
        stmt = (
            select(Favorite)
            .where(Favorite.tour_id == tour.id, Favorite.is_deleted.is_(False))
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def reorder_favorites(self, user_id: int, favorite_ids: Sequence) -> List[Favorite]:
        """
        Rewrite ``order`` so the user's favorites follow ``favorite_ids``

        The list must be exactly the user's active favorite set. Nothing is
        written unless it is; an empty list changes nothing.

        Raises:
            FavoriteOrderMismatchError: unknown, foreign, duplicate or missing ids
        """
        current = await self.list_all_favorites(user_id)
        if not favorite_ids:
            return current

        by_id = {str(f.id): f for f in current}
        submitted = [str(fid) for fid in favorite_ids]

        seen = set()
        duplicates = set()
        for fid in submitted:
            if fid in seen:
                duplicates.add(fid)
            seen.add(fid)
        unknown = seen - by_id.keys()
        missing = by_id.keys() - seen

        if unknown or missing or duplicates:
            logger.warning(
                f"Rejected reorder for user {user_id}",
                extra={
                    "user_id": user_id,
                    "unknown_ids": sorted(unknown),
                    "missing_ids": sorted(missing),
                    "duplicate_ids": sorted(duplicates),
                },
            )
            raise FavoriteOrderMismatchError(unknown, missing, duplicates)

        for position, fid in enumerate(submitted, start=1):
            by_id[fid].order = position
        await self.db.commit()

        logger.info(
            f"User {user_id} reordered {len(submitted)} favorites",
            extra={"user_id": user_id, "count": len(submitted)},
        )
        return await self.list_all_favorites(user_id)
