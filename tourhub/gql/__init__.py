"""GraphQL schema, resolvers and request context."""

from .schema import schema
from .context import get_context_value

__all__ = ["schema", "get_context_value"]
