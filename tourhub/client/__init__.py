"""
Python client for the favorites GraphQL API with a normalized local store.
"""

from .favorites import FavoritesClient, FavoritesClientError
from .queue import MutationQueue
from .reorder import move_item, reorder_by_drop
from .store import FavoriteStore, PendingWrite, LIST_KEY
from .transport import GraphQLTransport, GraphQLRequestError

__all__ = [
    "FavoritesClient",
    "FavoritesClientError",
    "MutationQueue",
    "move_item",
    "reorder_by_drop",
    "FavoriteStore",
    "PendingWrite",
    "LIST_KEY",
    "GraphQLTransport",
    "GraphQLRequestError",
]
