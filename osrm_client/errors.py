"""Exception hierarchy for the OSRM client.

Every failure raised by this package derives from :class:`OSRMClientError`,
so callers can catch one type and inspect the subclass to decide what to do.
"""

from __future__ import annotations

from typing import Optional


class OSRMClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(OSRMClientError):
    """A request was structurally invalid before any network activity."""


class EncodingError(OSRMClientError):
    """The query builder was handed values it cannot render."""


class TransportError(OSRMClientError):
    """The HTTP call failed or returned a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class DecodingError(OSRMClientError):
    """A response body did not match the expected payload shape."""


class EngineError(OSRMClientError):
    """The engine answered with a non-Ok status code."""

    code: str = ""

    def __init__(self, code: str, message: str = "") -> None:
        super().__init__(message or code, {"code": code})
        self.code = code
        self.engine_message = message

    def __str__(self) -> str:
        if self.engine_message:
            return f"{self.code}: {self.engine_message}"
        return self.code

    @staticmethod
    def from_code(code: str, message: str = "") -> "EngineError":
        """Build the error subclass registered for ``code``."""
        error_cls = ENGINE_ERRORS.get(code, UnknownEngineError)
        return error_cls(code, message)


class InvalidUrlError(EngineError):
    """URL string is invalid."""

    code = "InvalidUrl"


class InvalidServiceError(EngineError):
    """Service name is invalid."""

    code = "InvalidService"


class InvalidVersionError(EngineError):
    """Version is not found."""

    code = "InvalidVersion"


class InvalidOptionsError(EngineError):
    """Options are invalid."""

    code = "InvalidOptions"


class InvalidQueryError(EngineError):
    """The query string is syntactically malformed."""

    code = "InvalidQuery"


class InvalidValueError(EngineError):
    """The successfully parsed query parameters are invalid."""

    code = "InvalidValue"


class NoSegmentError(EngineError):
    """One of the input coordinates could not snap to a street segment."""

    code = "NoSegment"


class TooBigError(EngineError):
    """The request size violates a service specific size restriction."""

    code = "TooBig"


class NoRouteError(EngineError):
    """No route was found between the coordinates."""

    code = "NoRoute"


class NoTableError(EngineError):
    """No route was found between any source and destination."""

    code = "NoTable"


class NoMatchError(EngineError):
    """No matchings were found for the trace."""

    code = "NoMatch"


class NoTripsError(EngineError):
    """No trips were found because the input coordinates are not connected."""

    code = "NoTrips"


class EngineNotImplementedError(EngineError):
    """The requested combination of options is not supported by the engine."""

    code = "NotImplemented"


class DisabledDatasetError(EngineError):
    """The requested dataset is disabled on the engine."""

    code = "DisabledDataset"


class UnknownEngineError(EngineError):
    """The engine answered with a code this client does not know about."""


ENGINE_ERRORS: dict[str, type[EngineError]] = {
    cls.code: cls
    for cls in (
        InvalidUrlError,
        InvalidServiceError,
        InvalidVersionError,
        InvalidOptionsError,
        InvalidQueryError,
        InvalidValueError,
        NoSegmentError,
        TooBigError,
        NoRouteError,
        NoTableError,
        NoMatchError,
        NoTripsError,
        EngineNotImplementedError,
        DisabledDatasetError,
    )
}
