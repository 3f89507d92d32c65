"""
Normalized client-side favorites store.

Holds one favorited flag per tour plus the last fetched favorites page.
Views subscribe to a tour id (or to LIST_KEY for the page) and are notified
synchronously on every change, so every card showing the same tour flips
together. Optimistic writes are tracked with PendingWrite tokens that are
either committed with the server's answer or rolled back.
"""
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from tourhub.schemas.favorite import FavoriteRead

logger = logging.getLogger(__name__)

LIST_KEY = "__favorites__"

Listener = Callable[[str, Any], None]


@dataclass
class PendingWrite:
    """A tentative favorited flag awaiting server confirmation."""
    token: int
    tour_id: str
    previous: Optional[bool]
    predicted: bool


@dataclass
class FavoritesPage:
    favorites: List[FavoriteRead] = field(default_factory=list)
    total: int = 0
    limit: Optional[int] = None
    offset: int = 0
    stale: bool = False


class FavoriteStore:
    def __init__(self):
        self._status: Dict[str, bool] = {}
        self._pending: Dict[int, PendingWrite] = {}
        self._listeners: Dict[str, List[Listener]] = {}
        self._tokens = itertools.count(1)
        self.page: Optional[FavoritesPage] = None

    # Subscriptions

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """
        Register ``listener(key, value)`` for a tour id or LIST_KEY.

        Returns a callable that removes the subscription.
        """
        key = str(key)
        self._listeners.setdefault(key, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(key, [])
            if listener in listeners:
                listeners.remove(listener)
            if not listeners:
                self._listeners.pop(key, None)

        return unsubscribe

    def watched_tours(self) -> Set[str]:
        """Tour ids that currently have subscribers."""
        return {key for key in self._listeners if key != LIST_KEY}

    def _publish(self, key: str, value: Any) -> None:
        for listener in list(self._listeners.get(key, [])):
            try:
                listener(key, value)
            except Exception:
                logger.exception(f"Favorites listener for {key} failed")

    # Favorited flags

    def get_status(self, tour_id: str) -> Optional[bool]:
        """Cached flag, or None when unknown."""
        return self._status.get(str(tour_id))

    def set_status(self, tour_id: str, value: bool) -> None:
        tour_id = str(tour_id)
        if self._status.get(tour_id) == value:
            return
        self._status[tour_id] = value
        self._publish(tour_id, value)

    def evict(self, tour_id: str) -> None:
        """Forget the cached flag without notifying; the next write publishes."""
        self._status.pop(str(tour_id), None)

    def has_pending(self, tour_id: str) -> bool:
        tour_id = str(tour_id)
        return any(p.tour_id == tour_id for p in self._pending.values())

    # Optimistic writes

    def apply_optimistic(self, tour_id: str, predicted: bool) -> PendingWrite:
        tour_id = str(tour_id)
        pending = PendingWrite(
            token=next(self._tokens),
            tour_id=tour_id,
            previous=self._status.get(tour_id),
            predicted=predicted,
        )
        self._pending[pending.token] = pending
        self.set_status(tour_id, predicted)
        return pending

    def commit(self, pending: PendingWrite, confirmed: bool) -> None:
        """Settle a pending write with the value the server reported."""
        self._pending.pop(pending.token, None)
        if confirmed != pending.predicted:
            logger.info(
                f"Server contradicted optimistic favorite state for tour {pending.tour_id}",
                extra={"tour_id": pending.tour_id, "predicted": pending.predicted, "confirmed": confirmed},
            )
        self.set_status(pending.tour_id, confirmed)

    def rollback(self, pending: PendingWrite) -> None:
        """Undo a pending write after a failed mutation."""
        if self._pending.pop(pending.token, None) is None:
            return
        if pending.previous is None:
            self._status.pop(pending.tour_id, None)
            self._publish(pending.tour_id, None)
        else:
            self.set_status(pending.tour_id, pending.previous)

    # Favorites page

    def replace_page(self, favorites: List[FavoriteRead], total: int, limit: Optional[int], offset: int) -> None:
        self.page = FavoritesPage(favorites=list(favorites), total=total, limit=limit, offset=offset)
        for favorite in favorites:
            if not self.has_pending(favorite.tour.id):
                self.set_status(favorite.tour.id, not favorite.is_deleted)
        self._publish(LIST_KEY, self.page)

    def invalidate_page(self) -> None:
        if self.page is not None:
            self.page.stale = True
