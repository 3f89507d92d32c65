"""
GraphQL endpoint - favorites queries and mutations
"""
from ariadne.asgi import GraphQL
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tourhub.config.settings import settings
from tourhub.core.db import get_db
from tourhub.core.error_handlers import error_handler
from tourhub.gql import schema, get_context_value

router = APIRouter(tags=["graphql"])

graphql_app = GraphQL(
    schema,
    context_value=get_context_value,
    error_formatter=error_handler.format_graphql_error,
    debug=settings.debug,
)


@router.get("/graphql")
@router.post("/graphql")
async def handle_graphql(request: Request, db: AsyncSession = Depends(get_db)):
    """
    Execute a GraphQL operation (POST) or serve the explorer (GET)

    The session opened here lives for the whole operation and is closed
    once the response is produced.
    """
    request.state.db = db
    return await graphql_app.handle_request(request)
