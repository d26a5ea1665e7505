"""Turn decoded SMHI documents into forecast model objects.

Forecast documents look like::

    {
        "referenceTime": "2024-05-01T06:00:00Z",
        "geometry": {"type": "Point", "coordinates": [[16.02, 58.0]]},
        "timeSeries": [
            {
                "validTime": "2024-05-01T07:00:00Z",
                "parameters": [{"name": "t", "values": [9.4], ...}, ...],
            },
            ...
        ],
    }
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from .engines.types import ApprovedTime
from .exceptions import ForecastPayloadError
from .parameters import is_canonical
from .series import ForecastSeries
from .timeutils import parse_iso_datetime

logger = logging.getLogger(__name__)


def decode(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ForecastPayloadError(
            "Forecast response is not valid JSON"
        ) from exc
    if not isinstance(data, dict):
        raise ForecastPayloadError("Forecast response must be a JSON object")
    return data


def build_forecast(payload: Mapping[str, Any]) -> ForecastSeries:
    """Build a `ForecastSeries` from a decoded point forecast document."""

    entries = payload.get("timeSeries")
    if not isinstance(entries, list):
        raise ForecastPayloadError("Forecast is missing 'timeSeries'")

    by_time: dict[datetime, dict[str, float]] = {}
    skipped: set[str] = set()
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ForecastPayloadError("timeSeries entries must be objects")
        valid_time = _parse_time(entry.get("validTime"), "validTime")
        if valid_time in by_time:
            raise ForecastPayloadError(
                f"Duplicate validTime {valid_time.isoformat()}"
            )
        values: dict[str, float] = {}
        for parameter in entry.get("parameters") or []:
            name, value = _first_value(parameter)
            if not is_canonical(name):
                skipped.add(name)
                continue
            values[name] = value
        by_time[valid_time] = values

    if skipped:
        logger.debug(
            "forecasts.parse.skipped_parameters names=%s",
            ",".join(sorted(skipped)),
        )

    reference_time = _parse_time(payload.get("referenceTime"), "referenceTime")
    lon, lat = _coordinates(payload.get("geometry"))
    return ForecastSeries(by_time, reference_time, lat, lon)


def parse_approved_time(payload: Mapping[str, Any]) -> ApprovedTime:
    return ApprovedTime(
        approved_time=_parse_time(
            payload.get("approvedTime"), "approvedTime"
        ),
        reference_time=_parse_time(
            payload.get("referenceTime"), "referenceTime"
        ),
    )


def _parse_time(raw: Any, field: str) -> datetime:
    try:
        return parse_iso_datetime(raw)
    except ValueError as exc:
        raise ForecastPayloadError(
            f"Invalid or missing '{field}': {raw!r}"
        ) from exc


def _first_value(parameter: Any) -> tuple[str, float]:
    if not isinstance(parameter, Mapping):
        raise ForecastPayloadError("Forecast parameters must be objects")
    name = parameter.get("name")
    values = parameter.get("values")
    if not isinstance(name, str) or not isinstance(values, list) or not values:
        raise ForecastPayloadError(
            f"Parameter entry needs a name and values: {parameter!r}"
        )
    value = values[0]
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ForecastPayloadError(
            f"Parameter {name!r} has non-numeric value {value!r}"
        )
    return name, value


def _coordinates(geometry: Any) -> tuple[float, float]:
    """Return ``(lon, lat)`` from a GeoJSON point geometry.

    SMHI nests the pair one level deeper than plain GeoJSON.
    """

    coords = (
        geometry.get("coordinates") if isinstance(geometry, Mapping) else None
    )
    if (
        isinstance(coords, Sequence)
        and len(coords) == 1
        and isinstance(coords[0], Sequence)
    ):
        coords = coords[0]
    if not isinstance(coords, Sequence) or len(coords) < 2:
        raise ForecastPayloadError(f"Invalid forecast geometry: {geometry!r}")
    try:
        return float(coords[0]), float(coords[1])
    except (TypeError, ValueError) as exc:
        raise ForecastPayloadError(
            f"Invalid forecast geometry: {geometry!r}"
        ) from exc
