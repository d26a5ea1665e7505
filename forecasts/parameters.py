"""Canonical SMHI forecast parameters and their human-friendly aliases.

See https://opendata.smhi.se/apidocs/metfcst/parameters.html for the
meaning and units of each key.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from .exceptions import UnknownParameterError

CANONICAL_PARAMETERS: Final[tuple[str, ...]] = (
    "msl",
    "t",
    "vis",
    "wd",
    "ws",
    "r",
    "tstm",
    "tcc_mean",
    "lcc_mean",
    "mcc_mean",
    "hcc_mean",
    "gust",
    "pmin",
    "pmax",
    "spp",
    "pcat",
    "pmean",
    "pmedian",
    "Wsymb2",
)

PARAMETER_ALIASES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "pressure": "msl",
        "temperature": "t",
        "visibility": "vis",
        "wind_direction": "wd",
        "wind_speed": "ws",
        "relative_humidity": "r",
        "humidity": "r",
        "thunder_probability": "tstm",
        "total_cloud_cover": "tcc_mean",
        "low_cloud_cover": "lcc_mean",
        "medium_cloud_cover": "mcc_mean",
        "high_cloud_cover": "hcc_mean",
        "wind_gust": "gust",
        "precipitation_min": "pmin",
        "precip_min": "pmin",
        "precipitation_max": "pmax",
        "precip_max": "pmax",
        "percent_frozen_precipitation": "spp",
        "frozen_precip": "spp",
        "precipitation_category": "pcat",
        "precip_cat": "pcat",
        "precipitation_mean": "pmean",
        "precip_mean": "pmean",
        "precipitation_median": "pmedian",
        "precip_median": "pmedian",
        "weather_symbol": "Wsymb2",
        "symbol": "Wsymb2",
        "wsymb": "Wsymb2",
    }
)

_CANONICAL_SET: Final[frozenset[str]] = frozenset(CANONICAL_PARAMETERS)
_ORDER: Final[Mapping[str, int]] = MappingProxyType(
    {key: idx for idx, key in enumerate(CANONICAL_PARAMETERS)}
)


def is_canonical(name: object) -> bool:
    return isinstance(name, str) and name in _CANONICAL_SET


def resolve_parameter(name: object) -> str:
    """Return the canonical key for a canonical key or alias.

    Lookup is case-sensitive. Raises `UnknownParameterError` for anything
    that is neither.
    """

    if isinstance(name, str):
        if name in _CANONICAL_SET:
            return name
        canonical = PARAMETER_ALIASES.get(name)
        if canonical is not None:
            return canonical
    raise UnknownParameterError(f"Unknown forecast parameter: {name!r}")


def known_names() -> tuple[str, ...]:
    """Canonical keys followed by every alias."""

    return CANONICAL_PARAMETERS + tuple(PARAMETER_ALIASES)


def aliases_for(key: str) -> tuple[str, ...]:
    canonical = resolve_parameter(key)
    return tuple(
        alias for alias, target in PARAMETER_ALIASES.items()
        if target == canonical
    )


def registry_order(key: str) -> int:
    """Position of a canonical key in `CANONICAL_PARAMETERS`."""

    return _ORDER[key]
