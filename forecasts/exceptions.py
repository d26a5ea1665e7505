"""Errors raised by the forecast data model and its parsing boundary.

Every error carries a short machine-readable ``code`` so the API layer can
report it without string matching.
"""

from __future__ import annotations


class ForecastError(Exception):
    """Base class for forecast query and construction failures."""

    code: str = "forecast_error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return self.message


class UnknownParameterError(ForecastError, ValueError):
    """Name is neither a canonical parameter key nor a known alias."""

    code = "unknown_parameter"


class MissingParameterError(ForecastError, KeyError):
    """Parameter is known but absent from a particular sample."""

    code = "missing_parameter"


class SampleIndexError(ForecastError, IndexError):
    code = "index_out_of_range"


class NoForecastAtTimeError(ForecastError, LookupError):
    """No sample exists at or after the requested instant."""

    code = "no_forecast_at_time"


class InvalidRangeError(ForecastError, ValueError):
    code = "invalid_range"


class IllegalArgumentError(ForecastError, TypeError):
    """Argument of the wrong type for a series constructor or query."""

    code = "illegal_argument"


class UnknownOperationError(ForecastError, TypeError):
    code = "unknown_operation"


class ForecastPayloadError(ForecastError, ValueError):
    """Decoded upstream JSON does not have the expected shape."""

    code = "bad_payload"
