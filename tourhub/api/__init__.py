# API endpoints and routers

from .health_endpoints import router as health_router
from .auth_endpoints import router as auth_router
from .graphql_endpoints import router as graphql_router

__all__ = [
    "health_router",
    "auth_router",
    "graphql_router",
]
