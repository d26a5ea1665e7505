from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .engines.base import ForecastProvider
from .engines.registry import build_registry, validate_provider
from .engines.types import ApprovedTime, Location
from .metrics import (
    forecasts_provider_errors_total,
    forecasts_provider_latency_seconds,
    forecasts_provider_requests_total,
)
from .parsing import build_forecast, decode, parse_approved_time
from .series import ForecastSeries

logger = logging.getLogger(__name__)

PROVIDER_REGISTRY = build_registry()


def get_provider(name: str | None = None) -> ForecastProvider:
    return PROVIDER_REGISTRY[validate_provider(name, PROVIDER_REGISTRY)]


def get_point_forecast(
    lat: float,
    lon: float,
    *,
    provider: ForecastProvider | None = None,
) -> ForecastSeries:
    """Fetch and parse the point forecast for a location."""

    impl = provider or get_provider()
    location = Location(lat=lat, lon=lon)
    text = _fetch(impl, "point", lambda: impl.point_forecast(location))
    series = build_forecast(decode(text))
    logger.info(
        "forecasts.point.fetched provider=%s lat=%s lon=%s samples=%s "
        "reference_time=%s",
        impl.name,
        series.latitude,
        series.longitude,
        len(series),
        series.reference_time.isoformat(),
    )
    return series


def get_approved_time(
    *, provider: ForecastProvider | None = None
) -> ApprovedTime:
    impl = provider or get_provider()
    text = _fetch(impl, "approved_time", impl.approved_time)
    approved = parse_approved_time(decode(text))
    logger.info(
        "forecasts.approved_time.fetched provider=%s approved_time=%s",
        impl.name,
        approved.approved_time.isoformat(),
    )
    return approved


def _fetch(
    provider: ForecastProvider, endpoint: str, call: Callable[[], str]
) -> str:
    forecasts_provider_requests_total.labels(
        provider=provider.name, endpoint=endpoint
    ).inc()
    start_time = time.perf_counter()
    try:
        return call()
    except Exception as exc:
        forecasts_provider_errors_total.labels(
            provider=provider.name,
            endpoint=endpoint,
            error_type=exc.__class__.__name__,
        ).inc()
        logger.warning(
            "forecasts.provider.failed provider=%s endpoint=%s err=%s",
            provider.name,
            endpoint,
            exc,
        )
        raise
    finally:
        forecasts_provider_latency_seconds.labels(
            provider=provider.name, endpoint=endpoint
        ).observe(time.perf_counter() - start_time)
