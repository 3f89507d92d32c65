"""
Favorites client: GraphQL calls plus the store reconciliation protocol.

After a favorite flag changes the client
  1. evicts the cached flag of that tour,
  2. writes the confirmed value (which notifies every subscribed view),
  3. refetches the flag of every watched tour,
and after a successful reorder or remove it refetches the favorites page
instead of patching it.
"""
import logging
from typing import Any, Dict, List, Optional

from tourhub.client import operations
from tourhub.client.queue import MutationQueue
from tourhub.client.reorder import reorder_by_drop
from tourhub.client.store import FavoriteStore, PendingWrite
from tourhub.client.transport import GraphQLTransport
from tourhub.config.settings import settings
from tourhub.schemas.favorite import FavoriteResponse, FavoritesListResponse, ReorderResponse

logger = logging.getLogger(__name__)


class FavoritesClientError(Exception):
    """A read the client depends on came back with ``success: false``."""


class FavoritesClient:
    def __init__(
        self,
        transport: GraphQLTransport,
        store: Optional[FavoriteStore] = None,
        queue: Optional[MutationQueue] = None,
        page_size: Optional[int] = None,
    ):
        self.transport = transport
        self.store = store or FavoriteStore()
        self.queue = queue or MutationQueue()
        self.page_size = page_size or settings.favorites.default_page_size

    async def _execute(self, document: str, variables: Dict[str, Any], name: str) -> Dict[str, Any]:
        return await self.transport.execute(document, variables, operation_name=name)

    # Reads

    async def is_favorite(self, tour_id, refresh: bool = False) -> bool:
        """Favorited flag of a tour, served from the store unless ``refresh``."""
        tour_id = str(tour_id)
        cached = self.store.get_status(tour_id)
        if cached is not None and not refresh:
            return cached

        data = await self._execute(operations.IS_FAVORITE, {"tourId": tour_id}, "IsFavorite")
        value = bool(data["isFavorite"])
        if not self.store.has_pending(tour_id):
            self.store.set_status(tour_id, value)
        return value

    async def _fetch_page(self, limit: int, offset: int) -> FavoritesListResponse:
        data = await self._execute(
            operations.GET_FAVORITES, {"limit": limit, "offset": offset}, "GetFavorites"
        )
        return FavoritesListResponse.model_validate(data["getFavorites"])

    async def list_favorites(self, page: int = 1, limit: Optional[int] = None) -> FavoritesListResponse:
        """Fetch one page (1-based) of favorites and make it the store's current page."""
        limit = limit or self.page_size
        offset = (page - 1) * limit
        result = await self._fetch_page(limit, offset)
        if result.success:
            self.store.replace_page(result.favorites, result.total, limit, offset)
        else:
            logger.warning(f"Loading favorites failed: {result.message}")
        return result

    async def fetch_all_favorite_ids(self) -> List[str]:
        """Every active favorite id in display order, across all pages."""
        limit = settings.favorites.max_page_size
        ids: List[str] = []
        offset = 0
        while True:
            result = await self._fetch_page(limit, offset)
            if not result.success:
                raise FavoritesClientError(result.message)
            ids.extend(f.id for f in result.favorites)
            offset += len(result.favorites)
            if not result.favorites or offset >= result.total:
                return ids

    async def get_tour_favorites(self, tour_id) -> FavoritesListResponse:
        data = await self._execute(
            operations.GET_TOUR_FAVORITES, {"tourId": str(tour_id)}, "GetTourFavorites"
        )
        return FavoritesListResponse.model_validate(data["getTourFavorites"])

    async def refresh_watched(self) -> None:
        """Refetch the flag of every tour a view is subscribed to."""
        for tour_id in sorted(self.store.watched_tours()):
            if not self.store.has_pending(tour_id):
                await self.is_favorite(tour_id, refresh=True)

    async def _refresh_page(self) -> None:
        current = self.store.page
        if current is None:
            return
        self.store.invalidate_page()
        limit = current.limit or self.page_size
        await self.list_favorites(page=current.offset // limit + 1, limit=limit)

    # Mutations

    async def _reconcile(self, pending: PendingWrite, confirmed: bool) -> None:
        self.store.evict(pending.tour_id)
        self.store.commit(pending, confirmed)
        await self.refresh_watched()
        await self._refresh_page()

    async def _mutate_flag(self, document: str, name: str, field: str, tour_id: str, predicted: bool) -> FavoriteResponse:
        pending = self.store.apply_optimistic(tour_id, predicted)
        try:
            data = await self._execute(document, {"tourId": tour_id}, name)
        except Exception:
            self.store.rollback(pending)
            raise

        result = FavoriteResponse.model_validate(data[field])
        if not result.success or result.favorite is None:
            logger.warning(f"{name} for tour {tour_id} rejected: {result.message}")
            self.store.rollback(pending)
            await self.is_favorite(tour_id, refresh=True)
            return result

        logger.info(result.message, extra={"tour_id": tour_id, "operation": name})
        await self._reconcile(pending, not result.favorite.is_deleted)
        return result

    async def _toggle(self, tour_id: str) -> FavoriteResponse:
        # Toggle is not a set operation: predict from fresh server state
        current = await self.is_favorite(tour_id, refresh=True)
        return await self._mutate_flag(
            operations.TOGGLE_FAVORITE, "ToggleFavorite", "toggleFavorite", tour_id, not current
        )

    async def toggle(self, tour_id) -> FavoriteResponse:
        return await self.queue.run(self._toggle, str(tour_id))

    async def add(self, tour_id) -> FavoriteResponse:
        return await self.queue.run(
            self._mutate_flag,
            operations.ADD_TO_FAVORITES, "AddToFavorites", "addToFavorites", str(tour_id), True,
        )

    async def remove(self, tour_id) -> FavoriteResponse:
        return await self.queue.run(
            self._mutate_flag,
            operations.REMOVE_FROM_FAVORITES, "RemoveFromFavorites", "removeFromFavorites", str(tour_id), False,
        )

    async def _reorder(self, favorite_ids: List[str]) -> ReorderResponse:
        data = await self._execute(
            operations.REORDER_FAVORITES, {"favoriteIds": favorite_ids}, "ReorderFavorites"
        )
        result = ReorderResponse.model_validate(data["reorderFavorites"])
        if result.success:
            await self._refresh_page()
        else:
            logger.warning(f"Reorder rejected: {result.message}")
        return result

    async def reorder(self, favorite_ids: List[str]) -> ReorderResponse:
        """Submit the complete new order of the user's favorites."""
        return await self.queue.run(self._reorder, [str(fid) for fid in favorite_ids])

    async def _move(self, dragged_id: str, target_id: str) -> Optional[ReorderResponse]:
        ids = await self.fetch_all_favorite_ids()
        new_order = reorder_by_drop(ids, dragged_id, target_id)
        if new_order is None:
            return None
        return await self._reorder(new_order)

    async def move(self, dragged_id, target_id) -> Optional[ReorderResponse]:
        """
        Drop one favorite onto another's position.

        Returns None when the drop changes nothing.
        """
        return await self.queue.run(self._move, str(dragged_id), str(target_id))

    async def aclose(self) -> None:
        await self.transport.aclose()
