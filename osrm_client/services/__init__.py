"""Services for the OSRM client."""

from osrm_client.services.base import (
    BaseRequest,
    RequestBuilder,
)
from osrm_client.services.client import (
    ClientConfig,
    OSRMClient,
    SyncOSRMClient,
    handle_response,
)
from osrm_client.services.decoder import (
    decode_response,
    decode_tile,
)
from osrm_client.services.match_service import (
    MatchRequest,
    MatchRequestBuilder,
)
from osrm_client.services.nearest_service import (
    NearestRequest,
    NearestRequestBuilder,
)
from osrm_client.services.query import (
    QueryBuilder,
    format_value,
)
from osrm_client.services.route_service import (
    RouteRequest,
    RouteRequestBuilder,
)
from osrm_client.services.table_service import (
    TableRequest,
    TableRequestBuilder,
)
from osrm_client.services.tile_service import (
    TileRequest,
    TileRequestBuilder,
)
from osrm_client.services.trip_service import (
    TripRequest,
    TripRequestBuilder,
)

__all__ = [
    # Base
    "BaseRequest",
    "RequestBuilder",
    # Client
    "ClientConfig",
    "OSRMClient",
    "SyncOSRMClient",
    "handle_response",
    # Decoder
    "decode_response",
    "decode_tile",
    # Query
    "QueryBuilder",
    "format_value",
    # Requests
    "MatchRequest",
    "MatchRequestBuilder",
    "NearestRequest",
    "NearestRequestBuilder",
    "RouteRequest",
    "RouteRequestBuilder",
    "TableRequest",
    "TableRequestBuilder",
    "TileRequest",
    "TileRequestBuilder",
    "TripRequest",
    "TripRequestBuilder",
]
