from __future__ import annotations

from django.urls import path

from .views import (
    ForecastApprovedTimeView,
    ForecastParametersView,
    ForecastPointView,
)

urlpatterns = [
    path(
        "forecasts/point/",
        ForecastPointView.as_view(),
        name="forecasts-point",
    ),
    path(
        "forecasts/approved-time/",
        ForecastApprovedTimeView.as_view(),
        name="forecasts-approved-time",
    ),
    path(
        "forecasts/parameters/",
        ForecastParametersView.as_view(),
        name="forecasts-parameters",
    ),
]
