"""
Error handlers for the FastAPI application and the GraphQL endpoint.

REST routes answer with a StandardErrorResponse body; GraphQL errors keep the
GraphQL error shape and carry the error code in ``extensions.code``.
"""

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from ariadne import format_error
from graphql import GraphQLError
import logging
import time
from typing import Dict, Any, Optional

from tourhub.core.exceptions import TourHubException, FavoriteRuleError, ErrorCode
from tourhub.schemas.base import StandardErrorResponse

logger = logging.getLogger(__name__)


def unwrap_original_error(error: GraphQLError) -> Optional[Exception]:
    """Follow ``original_error`` links down to the exception a resolver raised."""
    original = error.original_error
    while isinstance(original, GraphQLError) and original.original_error is not None:
        original = original.original_error
    return original


class ErrorHandler:
    """
    Error handling with logging and per-code frequency tracking.
    """

    def __init__(self):
        self.error_counts: Dict[str, int] = {}
        self.last_error_time: Dict[str, float] = {}

    async def handle_tourhub_exception(
        self,
        request: Request,
        exc: TourHubException
    ) -> JSONResponse:
        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.error(
            f"TourHubException in request {request_id}: {exc.message}",
            extra={
                'request_id': request_id,
                'error_code': exc.error_code.value,
                'status_code': exc.status_code,
                'details': exc.details,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )
        self._track_error(exc.error_code.value)

        return self._create_error_response(
            error_code=exc.error_code.value,
            message=exc.message,
            details=exc.details,
            request_id=request_id,
            status_code=exc.status_code
        )

    async def handle_validation_error(
        self,
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """
        Handle Pydantic validation errors with detailed field information.
        """
        request_id = getattr(request.state, 'request_id', 'unknown')

        validation_errors = []
        for error in exc.errors():
            validation_errors.append({
                'field': '.'.join(str(loc) for loc in error['loc']),
                'message': error['msg'],
                'type': error['type'],
            })

        logger.warning(
            f"Validation error in request {request_id}: {len(validation_errors)} field errors",
            extra={
                'request_id': request_id,
                'validation_errors': validation_errors,
                'request_path': request.url.path
            }
        )

        return self._create_error_response(
            error_code=ErrorCode.VALIDATION_ERROR.value,
            message="Request validation failed",
            details={'validation_errors': validation_errors},
            request_id=request_id,
            status_code=422
        )

    async def handle_http_exception(
        self,
        request: Request,
        exc: HTTPException
    ) -> JSONResponse:
        request_id = getattr(request.state, 'request_id', 'unknown')

        error_code_map = {
            400: ErrorCode.VALIDATION_ERROR,
            401: ErrorCode.UNAUTHENTICATED,
            404: ErrorCode.NOT_FOUND,
        }
        error_code = error_code_map.get(exc.status_code, ErrorCode.INTERNAL_SERVER_ERROR)

        logger.warning(
            f"HTTP exception in request {request_id}: {exc.status_code} - {exc.detail}",
            extra={
                'request_id': request_id,
                'status_code': exc.status_code,
                'detail': exc.detail,
                'request_path': request.url.path
            }
        )
        self._track_error(error_code.value)

        return self._create_error_response(
            error_code=error_code.value,
            message=str(exc.detail),
            request_id=request_id,
            status_code=exc.status_code
        )

    async def handle_generic_exception(
        self,
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        request_id = getattr(request.state, 'request_id', 'unknown')

        logger.error(
            f"Unhandled exception in request {request_id}: {type(exc).__name__}: {str(exc)}",
            exc_info=exc,
            extra={
                'request_id': request_id,
                'exception_type': type(exc).__name__,
                'request_path': request.url.path,
                'request_method': request.method,
            }
        )
        self._track_error(ErrorCode.INTERNAL_SERVER_ERROR.value)

        return self._create_error_response(
            error_code=ErrorCode.INTERNAL_SERVER_ERROR.value,
            message="An internal server error occurred",
            request_id=request_id,
            status_code=500
        )

    def format_graphql_error(self, error: GraphQLError, debug: bool = False) -> Dict[str, Any]:
        """
        Ariadne error formatter.

        TourHubExceptions keep their message and expose code and details;
        unexpected exceptions are logged with traceback and masked unless
        running in debug mode.
        """
        formatted = format_error(error, debug)
        extensions = dict(formatted.get("extensions") or {})
        original = unwrap_original_error(error)

        if isinstance(original, TourHubException):
            log = logger.warning if isinstance(original, FavoriteRuleError) else logger.info
            log(
                f"GraphQL {original.error_code.value} at {error.path}: {original.message}",
                extra={'error_code': original.error_code.value, 'graphql_path': error.path}
            )
            extensions["code"] = original.error_code.value
            if original.details:
                extensions["details"] = original.details
            self._track_error(original.error_code.value)
        elif original is not None:
            logger.error(
                f"Unhandled resolver exception at {error.path}: {type(original).__name__}: {original}",
                exc_info=original,
                extra={'graphql_path': error.path}
            )
            extensions["code"] = ErrorCode.INTERNAL_SERVER_ERROR.value
            if not debug:
                formatted["message"] = "An internal server error occurred"
            self._track_error(ErrorCode.INTERNAL_SERVER_ERROR.value)
        else:
            extensions.setdefault("code", ErrorCode.VALIDATION_ERROR.value)

        formatted["extensions"] = extensions
        return formatted

    def _create_error_response(
        self,
        error_code: str,
        message: str,
        request_id: str,
        status_code: int,
        details: Optional[Dict[str, Any]] = None
    ) -> JSONResponse:
        error_response = StandardErrorResponse(
            error_code=error_code,
            message=message,
            details=details,
            request_id=request_id,
        )
        return JSONResponse(
            status_code=status_code,
            content=error_response.model_dump(mode="json")
        )

    def _track_error(self, error_code: str) -> None:
        current_time = time.time()

        self.error_counts[error_code] = self.error_counts.get(error_code, 0) + 1
        self.last_error_time[error_code] = current_time

        if self.error_counts[error_code] % 10 == 0:
            logger.warning(
                f"High frequency error detected: {error_code} occurred {self.error_counts[error_code]} times"
            )

    def get_error_statistics(self) -> Dict[str, Any]:
        current_time = time.time()

        return {
            'error_counts': dict(self.error_counts),
            'recent_errors': {
                code: count for code, count in self.error_counts.items()
                if current_time - self.last_error_time.get(code, 0) < 3600  # Last hour
            },
            'total_errors': sum(self.error_counts.values())
        }


# Global error handler instance
error_handler = ErrorHandler()


def setup_error_handlers(app):
    """
    Set up all error handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(TourHubException)
    async def tourhub_exception_handler(request: Request, exc: TourHubException):
        return await error_handler.handle_tourhub_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return await error_handler.handle_validation_error(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        fastapi_exc = HTTPException(status_code=exc.status_code, detail=exc.detail)
        return await error_handler.handle_http_exception(request, fastapi_exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return await error_handler.handle_generic_exception(request, exc)
