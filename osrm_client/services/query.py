"""Rendering of request options into the engine's query-string grammar."""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional, Sequence
from urllib.parse import quote

from osrm_client.errors import EncodingError

UNLIMITED_TOKEN = "unlimited"


def format_value(value: Any) -> str:
    """Render a single option value.

    Booleans become ``true``/``false``, infinite numbers become the
    ``unlimited`` token and other numbers are written as fixed decimals
    without scientific notation.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isinf(value) and value > 0:
            return UNLIMITED_TOKEN
        if not math.isfinite(value):
            raise EncodingError(f"Cannot encode number {value!r}")
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    if isinstance(value, str):
        return value
    if hasattr(value, "to_wire"):
        return value.to_wire()
    raise EncodingError(f"Cannot encode option value of type {type(value).__name__}")


class QueryBuilder:
    """Collects options in order and renders a canonical query string.

    Args:
        coordinate_count: Number of coordinates in the request, used to check
            the length of per-waypoint options.
    """

    def __init__(self, coordinate_count: int):
        self.coordinate_count = coordinate_count
        self._params: list[tuple[str, str]] = []

    def scalar(self, name: str, value: Any) -> QueryBuilder:
        """Add a single-valued option; ``None`` is omitted."""
        if value is not None:
            self._params.append((name, format_value(value)))
        return self

    def per_waypoint(
        self, name: str, values: Optional[Sequence[Any]]
    ) -> QueryBuilder:
        """Add an option with one slot per coordinate.

        ``None`` slots render as empty values between separators.
        """
        if values is None:
            return self
        values = list(values)
        if len(values) != self.coordinate_count:
            raise EncodingError(
                f"Option '{name}' has {len(values)} values for "
                f"{self.coordinate_count} coordinates",
                {"option": name},
            )
        rendered = ";".join("" if v is None else format_value(v) for v in values)
        self._params.append((name, rendered))
        return self

    def joined(
        self, name: str, values: Optional[Iterable[Any]], separator: str = ";"
    ) -> QueryBuilder:
        """Add a list option (indices, classes) joined by ``separator``."""
        if values is None:
            return self
        self._params.append((name, separator.join(format_value(v) for v in values)))
        return self

    def items(self) -> list[tuple[str, str]]:
        return list(self._params)

    def render(self) -> str:
        return "&".join(
            f"{name}={quote(value, safe=';,')}" for name, value in self._params
        )
