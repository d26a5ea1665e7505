from __future__ import annotations

from abc import ABC, abstractmethod

from .types import Location, ProviderName


class ForecastProvider(ABC):
    """Abstract base for point forecast sources.

    Providers return the raw response body; decoding and model building
    happen in `forecasts.parsing`.
    """

    name: ProviderName

    @abstractmethod
    def approved_time(self) -> str:
        """Return the approved-time document for the latest forecast."""

    @abstractmethod
    def point_forecast(self, loc: Location) -> str:
        """Return the full forecast document for a point."""
