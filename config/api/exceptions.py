from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from forecasts.exceptions import (
    ForecastError,
    ForecastPayloadError,
    NoForecastAtTimeError,
)

from .responses import JSONValue

if TYPE_CHECKING:
    from rest_framework.response import Response

logger = logging.getLogger(__name__)


def _to_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, Mapping):
        return {str(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_to_json_value(v) for v in value]
    return str(value)


def _forecast_error_status(exc: ForecastError) -> int:
    from rest_framework import status

    if isinstance(exc, NoForecastAtTimeError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ForecastPayloadError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_400_BAD_REQUEST


def custom_exception_handler(
    exc: Exception,
    context: dict[str, Any],
) -> Response:
    # Lazy imports: safe even if settings aren't configured at import time.
    from rest_framework import status
    from rest_framework.views import exception_handler as drf_exception_handler

    from .responses import envelope, error_response

    if isinstance(exc, ForecastError):
        return error_response(
            str(exc),
            errors={"code": exc.code},
            status_code=_forecast_error_status(exc),
        )

    if isinstance(exc, httpx.HTTPError):
        logger.warning("api.upstream_failed err=%s", exc)
        return error_response(
            "Upstream forecast service unavailable",
            errors={"code": "upstream_unavailable", "detail": str(exc)},
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.error("api.unhandled err=%s", exc, exc_info=exc)
        return error_response(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = _to_json_value(response.data)
    message = "Request failed"
    if isinstance(detail, dict):
        maybe = detail.get("detail")
        if isinstance(maybe, str):
            message = maybe

    response.data = envelope(ok=False, message=message, errors=detail)
    return response
