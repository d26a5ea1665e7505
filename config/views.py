"""Project-level non-DRF views.

This module contains the root landing endpoint used for quick service checks
and links to the forecast endpoints and API documentation.
"""

from __future__ import annotations

from django.http import HttpRequest, JsonResponse


def home(request: HttpRequest) -> JsonResponse:
    """Return basic service metadata and documentation links."""
    return JsonResponse(
        {
            "ok": True,
            "service": "smhi-forecasts",
            "forecasts": "/api/v1/forecasts/point/",
            "parameters": "/api/v1/forecasts/parameters/",
            "docs": "/api/docs/",
        }
    )
