"""
HTTP transport for the favorites GraphQL API.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from tourhub.config.settings import settings

logger = logging.getLogger(__name__)


class GraphQLRequestError(Exception):
    """The server answered with a GraphQL ``errors`` list."""

    def __init__(self, errors: List[Dict[str, Any]], operation: Optional[str] = None):
        self.errors = errors
        self.operation = operation
        message = "; ".join(e.get("message", "unknown error") for e in errors) or "GraphQL request failed"
        super().__init__(message)

    @property
    def codes(self) -> List[str]:
        return [e.get("extensions", {}).get("code") for e in self.errors if e.get("extensions", {}).get("code")]

    @property
    def is_unauthenticated(self) -> bool:
        return "UNAUTHENTICATED" in self.codes


class GraphQLTransport:
    """
    Posts GraphQL operations with an optional bearer token.

    Network and HTTP status errors propagate as httpx exceptions; they are
    never retried here.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.url = url or settings.client.api_url
        self.token = token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout or settings.client.timeout_seconds
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def execute(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Execute an operation and return its ``data``.

        Raises:
            GraphQLRequestError: response contained GraphQL errors
            httpx.HTTPError: transport failure or non-2xx status
        """
        payload: Dict[str, Any] = {"query": document, "variables": variables or {}}
        if operation_name:
            payload["operationName"] = operation_name

        response = await self._client.post(self.url, json=payload, headers=self._headers())
        if response.status_code >= 500 or response.status_code in (401, 403, 404):
            response.raise_for_status()
        body = response.json()

        errors = body.get("errors")
        if errors:
            logger.error(
                f"GraphQL operation {operation_name or 'anonymous'} failed: {errors}",
                extra={"operation": operation_name, "errors": errors},
            )
            raise GraphQLRequestError(errors, operation_name)

        if response.is_error:
            response.raise_for_status()
        return body.get("data") or {}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "GraphQLTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
