"""Typed client for the OSRM HTTP services."""

from osrm_client.data import *  # noqa: F401,F403
from osrm_client.data import __all__ as _data_all
from osrm_client.errors import (
    DecodingError,
    EncodingError,
    EngineError,
    OSRMClientError,
    TransportError,
    UnknownEngineError,
    ValidationError,
)
from osrm_client.services import *  # noqa: F401,F403
from osrm_client.services import __all__ as _services_all

__version__ = "0.1.0"

__all__ = [
    "DecodingError",
    "EncodingError",
    "EngineError",
    "OSRMClientError",
    "TransportError",
    "UnknownEngineError",
    "ValidationError",
    *_data_all,
    *_services_all,
]
