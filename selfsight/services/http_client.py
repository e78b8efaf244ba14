"""
Shared HTTP Client Manager with Connection Pooling.

Provides a centralized, pooled httpx.AsyncClient used for calls to the hosted
server functions. Creating a new AsyncClient for each request wastes
connection setup/teardown.

Usage:
    from selfsight.services.http_client import http_client_manager

    client = await http_client_manager.get_client()
    response = await client.post(url, json=body)

Lifecycle:
    # In main.py lifespan
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await http_client_manager.startup()
        yield
        await http_client_manager.shutdown()
"""

import logging
from typing import Optional

import httpx

from selfsight.core.config import settings

logger = logging.getLogger("SelfSight.HTTP.Client")


class HTTPClientManager:
    """
    Manages a shared httpx.AsyncClient with connection pooling.

    Configuration:
    - max_connections: Maximum total connections (default: 100)
    - max_keepalive_connections: Max idle connections to keep (default: 20)
    - default_timeout: Request timeout in seconds (default: HTTP_TIMEOUT_SECONDS)
    - transport: Optional custom transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        default_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._max_connections = max_connections
        self._max_keepalive_connections = max_keepalive_connections
        self._default_timeout = default_timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self._max_connections,
            max_keepalive_connections=self._max_keepalive_connections,
        )

    async def startup(self) -> None:
        """Create the pooled AsyncClient. Call during application startup."""
        if self._client is not None:
            logger.warning("HTTP client manager already initialized")
            return

        self._client = httpx.AsyncClient(
            limits=self.limits,
            timeout=httpx.Timeout(self._default_timeout),
            follow_redirects=True,
            transport=self._transport,
        )
        logger.info(
            f"HTTP client manager initialized "
            f"(max_connections={self._max_connections}, "
            f"max_keepalive={self._max_keepalive_connections})"
        )

    async def shutdown(self) -> None:
        """Close the shared client and release all connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("HTTP client manager shut down")

    async def get_client(self) -> httpx.AsyncClient:
        """Return the shared client, starting it lazily if needed."""
        if self._client is None:
            logger.warning(
                "HTTP client accessed before startup - initializing now. "
                "Consider calling startup() during app initialization."
            )
            await self.startup()
        return self._client


http_client_manager = HTTPClientManager()
