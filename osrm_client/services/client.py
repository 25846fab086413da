"""Client facade: build the URL, send one GET, decode the answer.

``OSRMClient`` works over ``httpx.AsyncClient`` and ``SyncOSRMClient`` over
``httpx.Client``. Both perform exactly one HTTP call per operation and never
retry; the first failure is raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from osrm_client.config import Settings, get_settings
from osrm_client.data.responses import (
    MatchResponse,
    NearestResponse,
    RouteResponse,
    ServiceResponse,
    TableResponse,
    TileResponse,
    TripResponse,
)
from osrm_client.errors import DecodingError, TransportError, ValidationError
from osrm_client.services.base import BaseRequest
from osrm_client.services.decoder import (
    decode_response,
    decode_tile,
    parse_envelope,
    parse_json,
    raise_for_code,
)
from osrm_client.services.match_service import MatchRequest
from osrm_client.services.nearest_service import NearestRequest
from osrm_client.services.route_service import RouteRequest
from osrm_client.services.table_service import TableRequest
from osrm_client.services.tile_service import TileRequest
from osrm_client.services.trip_service import TripRequest

logger = logging.getLogger(__name__)

Request = Union[BaseRequest, TileRequest]
Result = Union[ServiceResponse, TileResponse]


@dataclass(frozen=True)
class ClientConfig:
    """Location of the engine instance; read-only for the client lifetime."""

    base_url: str
    version: str = "v1"

    def __post_init__(self):
        if not self.base_url:
            raise ValidationError("OSRM base URL not set")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> ClientConfig:
        settings = settings or get_settings()
        return cls(base_url=settings.osrm_base_url, version=settings.osrm_api_version)


def handle_response(
    request: Request,
    status_code: int,
    content: bytes,
    content_type: Optional[str] = None,
) -> Result:
    """Turn a raw HTTP answer into a typed result or a typed error."""
    if isinstance(request, TileRequest):
        return decode_tile(status_code, content, content_type)

    if not 200 <= status_code < 300:
        # The engine reports invalid requests as 400 with a JSON envelope
        try:
            envelope = parse_envelope(parse_json(content))
        except DecodingError as e:
            raise TransportError(
                f"OSRM answered HTTP {status_code}", status_code=status_code
            ) from e
        raise_for_code(envelope)
        raise TransportError(
            f"OSRM answered HTTP {status_code} with code {envelope.code}",
            status_code=status_code,
        )

    result = decode_response(request.service, content)

    if isinstance(request, TableRequest) and result.shape != request.expected_shape:
        raise DecodingError(
            f"Table shape {result.shape} does not match the requested "
            f"{request.expected_shape}",
            {"expected": request.expected_shape, "actual": result.shape},
        )
    return result


def _expect(request: Request, request_cls: type) -> None:
    if not isinstance(request, request_cls):
        raise ValidationError(
            f"Expected a {request_cls.__name__}, got {type(request).__name__}"
        )


class _ClientBase:
    """Configuration shared by the async and sync clients."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        version: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Engine base URL. Defaults to the configured one.
            version: API version segment. Defaults to the configured one.
            timeout: HTTP timeout in seconds for clients created here.
            config: Complete configuration, overrides base_url and version.
        """
        settings = get_settings()
        self.config = config or ClientConfig(
            base_url=base_url or settings.osrm_base_url,
            version=version or settings.osrm_api_version,
        )
        self.timeout = timeout or settings.osrm_timeout_seconds
        self.headers = {"User-Agent": settings.osrm_user_agent}

    def url_for(self, request: Request) -> str:
        """Full URL a request will be sent to."""
        return request.url(self.config.base_url, self.config.version)

    def _transport_error(self, url: str, error: httpx.HTTPError) -> TransportError:
        logger.error(f"OSRM request failed: {error}")
        return TransportError(f"Request to {url} failed: {error}", details={"url": url})


class OSRMClient(_ClientBase):
    """Async client for the OSRM HTTP services.

    Use as an async context manager, or pass an existing ``httpx.AsyncClient``
    which then stays owned by the caller.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        version: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(base_url, version, timeout, config)
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self):
        """Enter async context manager."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, headers=self.headers)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager."""
        if self._owns_client and self._client:
            await self._client.aclose()
            self._client = None

    async def _get(self, request: Request) -> httpx.Response:
        if not self._client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        url = self.url_for(request)
        logger.debug(f"GET {url}")
        try:
            return await self._client.get(url)
        except httpx.HTTPError as e:
            raise self._transport_error(url, e) from e

    async def send(self, request: Request) -> Result:
        """Send any request and decode the answer."""
        response = await self._get(request)
        return handle_response(
            request,
            response.status_code,
            response.content,
            response.headers.get("content-type"),
        )

    async def debug(self, request: Request) -> str:
        """Send a request and return the raw response text, undecoded."""
        response = await self._get(request)
        return response.text

    async def route(self, request: RouteRequest) -> RouteResponse:
        _expect(request, RouteRequest)
        return await self.send(request)

    async def table(self, request: TableRequest) -> TableResponse:
        _expect(request, TableRequest)
        return await self.send(request)

    async def match(self, request: MatchRequest) -> MatchResponse:
        _expect(request, MatchRequest)
        return await self.send(request)

    async def trip(self, request: TripRequest) -> TripResponse:
        _expect(request, TripRequest)
        return await self.send(request)

    async def nearest(self, request: NearestRequest) -> NearestResponse:
        _expect(request, NearestRequest)
        return await self.send(request)

    async def tile(self, request: TileRequest) -> TileResponse:
        _expect(request, TileRequest)
        return await self.send(request)


class SyncOSRMClient(_ClientBase):
    """Blocking client for the OSRM HTTP services, over ``httpx.Client``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        version: Optional[str] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        super().__init__(base_url, version, timeout, config)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=self.timeout, headers=self.headers)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the HTTP client if we own it."""
        if self._owns_client:
            self._client.close()

    def _get(self, request: Request) -> httpx.Response:
        url = self.url_for(request)
        logger.debug(f"GET {url}")
        try:
            return self._client.get(url)
        except httpx.HTTPError as e:
            raise self._transport_error(url, e) from e

    def send(self, request: Request) -> Result:
        """Send any request and decode the answer."""
        response = self._get(request)
        return handle_response(
            request,
            response.status_code,
            response.content,
            response.headers.get("content-type"),
        )

    def debug(self, request: Request) -> str:
        return self._get(request).text

    def route(self, request: RouteRequest) -> RouteResponse:
        _expect(request, RouteRequest)
        return self.send(request)

    def table(self, request: TableRequest) -> TableResponse:
        _expect(request, TableRequest)
        return self.send(request)

    def match(self, request: MatchRequest) -> MatchResponse:
        _expect(request, MatchRequest)
        return self.send(request)

    def trip(self, request: TripRequest) -> TripResponse:
        _expect(request, TripRequest)
        return self.send(request)

    def nearest(self, request: NearestRequest) -> NearestResponse:
        _expect(request, NearestRequest)
        return self.send(request)

    def tile(self, request: TileRequest) -> TileResponse:
        _expect(request, TileRequest)
        return self.send(request)
