"""Connection provider for the container engine API.

Supports both Unix socket and TCP connections. The provider owns the
underlying httpx client; callers inject it into the resource APIs instead
of looking up a shared global.
"""

import asyncio
import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Protocol

import httpx

from podbind.config import ConnectionConfig
from podbind.encoder import Body, Request, build_request, iter_body
from podbind.errors import EngineConnectionError
from podbind.logging_schema import LogEvent

logger = logging.getLogger(__name__)

_LIBPOD_PREFIX = "/v{version}/libpod"


class Connection:
    """An established engine connection.

    Each ``issue`` sends exactly one request and never retries.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_version: str | None = None,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self._client = client
        self._prefix = _LIBPOD_PREFIX.format(version=api_version) if api_version else ""
        self._chunk_size = chunk_size

    async def issue(
        self,
        body: Body | None,
        method: str,
        path_template: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        *path_args: str,
    ) -> httpx.Response:
        """Encode and send one request."""
        request = build_request(
            method, path_template, *path_args, params=params, body=body, headers=headers
        )
        return await self.send(request)

    async def send(self, request: Request) -> httpx.Response:
        """Send an already encoded request."""
        content = None
        if request.body is not None:
            content = iter_body(request.body, self._chunk_size)

        http_request = self._client.build_request(
            request.method,
            self._prefix + request.path,
            params=request.params,
            headers=request.headers or None,
            content=content,
        )
        logger.debug("%s %s", request.method, http_request.url.raw_path.decode())
        return await self._client.send(http_request)


class ConnectionProvider(Protocol):
    """Supplies established connections to resource APIs."""

    async def acquire(self) -> Connection: ...


class EngineClient:
    """Default connection provider backed by an httpx.AsyncClient.

    Usage:
        async with EngineClient(ConnectionConfig(host="unix:///run/podman/podman.sock")) as engine:
            secrets = SecretsAPI(engine)
            await secrets.list()
    """

    def __init__(
        self,
        config: ConnectionConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or ConnectionConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    def _create_client(self) -> httpx.AsyncClient:
        """Create a new HTTP client for the configured host."""
        host = self._config.host
        timeout = self._config.api_timeout

        if host.startswith("unix://"):
            socket_path = host.removeprefix("unix://")
            if not socket_path:
                raise EngineConnectionError(f"Missing socket path in host: {host}")
            transport = self._transport or httpx.AsyncHTTPTransport(uds=socket_path)
            return httpx.AsyncClient(
                transport=transport,
                base_url="http://d",
                timeout=timeout,
            )

        if host.startswith("tcp://"):
            base_url = host.replace("tcp://", "http://", 1)
        elif host.startswith(("http://", "https://")):
            base_url = host
        else:
            raise EngineConnectionError(f"Unsupported engine host scheme: {host}")

        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise EngineConnectionError(f"Invalid engine host: {host}") from exc
        if not url.host:
            raise EngineConnectionError(f"Missing address in host: {host}")

        return httpx.AsyncClient(base_url=url, transport=self._transport, timeout=timeout)

    async def _ping(self, client: httpx.AsyncClient) -> None:
        try:
            resp = await client.get("/_ping")
        except httpx.TransportError as exc:
            raise EngineConnectionError(
                f"Unable to reach engine at {self._config.host}: {exc}"
            ) from exc
        if resp.status_code != 200:
            raise EngineConnectionError(
                f"Engine ping at {self._config.host} returned HTTP {resp.status_code}"
            )

    async def _open_client(self) -> httpx.AsyncClient:
        client = self._create_client()
        if self._config.ping_on_acquire:
            try:
                await self._ping(client)
            except BaseException:
                await client.aclose()
                raise
        logger.debug(
            "Opened engine connection: %s",
            self._config.host,
            extra={"event": LogEvent.CONNECTION_OPENED},
        )
        return client

    async def acquire(self) -> Connection:
        """Get a connection, creating the HTTP client on first use.

        Concurrent first calls share one client and at most one ping.
        """
        client = self._client
        if client is None or client.is_closed:
            async with self._lock:
                client = self._client
                if client is None or client.is_closed:
                    client = await self._open_client()
                    self._client = client
        return Connection(
            client,
            api_version=self._config.api_version,
            chunk_size=self._config.upload_chunk_size,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug(
                "Closed engine connection: %s",
                self._config.host,
                extra={"event": LogEvent.CONNECTION_CLOSED},
            )
        self._client = None

    async def __aenter__(self) -> "EngineClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
