"""Per-request GraphQL context."""
from typing import Any, Dict, Optional

from starlette.requests import Request

from tourhub.core.dependencies import resolve_user


async def get_context_value(request: Request, data: Optional[Any] = None) -> Dict[str, Any]:
    """
    Build the resolver context.

    The database session is opened by the /graphql route dependency and
    attached to ``request.state.db``; the user is None for anonymous callers.
    """
    db = request.state.db
    user = await resolve_user(db, request.headers.get("Authorization"))
    return {
        "request": request,
        "db": db,
        "user": user,
        "request_id": getattr(request.state, "request_id", None),
    }
