"""SMHI open data meteorological forecast provider (pmp3g, version 2)."""

from __future__ import annotations

import logging
from typing import Final, cast

import httpx
from django.conf import settings

from .base import ForecastProvider
from .types import Location, ProviderName

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL: Final[str] = "https://opendata-download-metfcst.smhi.se"
API_ENDPOINT: Final[str] = "/api/category/pmp3g/version/2"
DEFAULT_TIMEOUT: Final[float] = 10.0


def format_coordinate(value: float) -> str:
    """Render a coordinate with at most six decimals, as the API requires."""

    text = f"{round(float(value), 6):.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class SmhiProvider(ForecastProvider):
    """Fetch raw forecast documents from SMHI.

    Each call is a single GET; failures surface as `httpx` exceptions.
    """

    name: ProviderName = "smhi"

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        configured = base_url or cast(
            str, getattr(settings, "SMHI_BASE_URL", DEFAULT_BASE_URL)
        )
        self.base_url = configured.rstrip("/")
        self.timeout_seconds = timeout_seconds or float(
            getattr(settings, "SMHI_REQUEST_TIMEOUT_SECONDS", DEFAULT_TIMEOUT)
        )
        self._http = httpx.Client(timeout=self.timeout_seconds)

    @property
    def api_url(self) -> str:
        return f"{self.base_url}{API_ENDPOINT}"

    def approved_time_url(self) -> str:
        return f"{self.api_url}/approvedtime.json"

    def point_forecast_url(self, loc: Location) -> str:
        return (
            f"{self.api_url}/geotype/point"
            f"/lon/{format_coordinate(loc.lon)}"
            f"/lat/{format_coordinate(loc.lat)}/data.json"
        )

    def approved_time(self) -> str:
        return self._get(self.approved_time_url())

    def point_forecast(self, loc: Location) -> str:
        return self._get(self.point_forecast_url(loc))

    def close(self) -> None:
        self._http.close()

    def _get(self, url: str) -> str:
        logger.debug("smhi.request url=%s", url)
        response = self._http.request("GET", url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.text
