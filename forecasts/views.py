"""Forecast API endpoints.

Responses: wrapped by `config.api.responses.success_response`
(status/message/data/errors). Query errors from the forecast model are
translated by `config.api.exceptions.custom_exception_handler`.
"""

from __future__ import annotations

from datetime import datetime
from typing import cast

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiTypes,
    extend_schema,
    inline_serializer,
)
from rest_framework import serializers
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from config.api.openapi import (
    error_envelope_serializer,
    success_envelope_serializer,
)
from config.api.responses import JSONValue, success_response

from .serializers import (
    ApprovedTimeSerializer,
    ParameterInfoSerializer,
    PointForecastParamsSerializer,
    serialize_approved_time,
    serialize_parameters,
    serialize_series,
    serialize_value_at,
)
from .series import BaseSeries
from .services import get_approved_time, get_point_forecast

forecast_error_schema = error_envelope_serializer("ForecastErrorResponse")

point_success_schema = success_envelope_serializer(
    "ForecastPointSuccess",
    data=inline_serializer(
        name="ForecastPointData",
        fields={
            "reference_time": serializers.DateTimeField(),
            "latitude": serializers.FloatField(),
            "longitude": serializers.FloatField(),
            "parameter": serializers.CharField(required=False),
            "parameters": serializers.ListField(
                child=serializers.CharField(), required=False
            ),
            "samples": serializers.JSONField(),
        },
    ),
)

approved_time_success_schema = success_envelope_serializer(
    "ForecastApprovedTimeSuccess",
    data=ApprovedTimeSerializer(),
)

parameters_success_schema = success_envelope_serializer(
    "ForecastParametersSuccess",
    data=inline_serializer(
        name="ForecastParametersData",
        fields={"parameters": ParameterInfoSerializer(many=True)},
    ),
)


def _narrow(
    series: BaseSeries, start: datetime | None, end: datetime | None
) -> BaseSeries:
    if (start is None and end is None) or not series:
        return series
    lower = start if start is not None else series.samples[0].timestamp
    upper = end if end is not None else series.samples[-1].timestamp
    return series.between(lower, upper)


class ForecastPointView(APIView):
    """Point forecast for a location, optionally narrowed.

    Auth: AllowAny.
    Response: success envelope with the series (reference time, location,
    samples) or, when `at` is given, the first sample at or after it.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="lat",
                type=OpenApiTypes.FLOAT,
                location=OpenApiParameter.QUERY,
                required=True,
            ),
            OpenApiParameter(
                name="lon",
                type=OpenApiTypes.FLOAT,
                location=OpenApiParameter.QUERY,
                required=True,
            ),
            OpenApiParameter(
                name="parameter",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Parameter key or alias (e.g. t, temperature)",
            ),
            OpenApiParameter(
                name="start",
                type=OpenApiTypes.DATETIME,
                location=OpenApiParameter.QUERY,
                required=False,
            ),
            OpenApiParameter(
                name="end",
                type=OpenApiTypes.DATETIME,
                location=OpenApiParameter.QUERY,
                required=False,
            ),
            OpenApiParameter(
                name="at",
                type=OpenApiTypes.DATETIME,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Return the first forecast at or after this time",
            ),
        ],
        responses={
            200: point_success_schema,
            400: forecast_error_schema,
            404: forecast_error_schema,
            502: forecast_error_schema,
        },
    )
    def get(self, request: Request) -> Response:
        serializer = PointForecastParamsSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        series: BaseSeries = get_point_forecast(
            lat=float(params["lat"]),
            lon=float(params["lon"]),
        )
        parameter = params.get("parameter")
        if parameter:
            series = series.project(parameter)
        series = _narrow(series, params.get("start"), params.get("end"))

        at = params.get("at")
        if at is not None:
            return success_response(serialize_value_at(series, at))
        return success_response(serialize_series(series))


class ForecastApprovedTimeView(APIView):
    """Approval and reference time of the latest forecast run."""

    permission_classes = [AllowAny]

    @extend_schema(
        responses={
            200: approved_time_success_schema,
            502: forecast_error_schema,
        },
    )
    def get(self, request: Request) -> Response:
        return success_response(serialize_approved_time(get_approved_time()))


class ForecastParametersView(APIView):
    """Canonical parameter keys and the aliases accepted for each."""

    permission_classes = [AllowAny]

    @extend_schema(responses={200: parameters_success_schema})
    def get(self, request: Request) -> Response:
        return success_response(
            {"parameters": cast(JSONValue, serialize_parameters())}
        )
