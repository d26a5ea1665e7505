from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from rest_framework import serializers

from config.api.responses import JSONValue

from .exceptions import UnknownParameterError
from .parameters import (
    CANONICAL_PARAMETERS,
    aliases_for,
    known_names,
    resolve_parameter,
)
from .series import BaseSeries, ForecastSeries, ParameterSeries


class PointForecastParamsSerializer(serializers.Serializer):
    lat: ClassVar[serializers.FloatField] = serializers.FloatField(
        min_value=-90.0, max_value=90.0
    )
    lon: ClassVar[serializers.FloatField] = serializers.FloatField(
        min_value=-180.0, max_value=180.0
    )
    parameter: ClassVar[serializers.CharField] = serializers.CharField(
        required=False, allow_null=True, allow_blank=True
    )
    start: ClassVar[serializers.DateTimeField] = serializers.DateTimeField(
        required=False
    )
    end: ClassVar[serializers.DateTimeField] = serializers.DateTimeField(
        required=False
    )
    at: ClassVar[serializers.DateTimeField] = serializers.DateTimeField(
        required=False
    )

    def validate_parameter(self, value: str | None) -> str | None:
        if not value:
            return None
        try:
            return resolve_parameter(value)
        except UnknownParameterError as exc:
            raise serializers.ValidationError(
                "Unknown parameter. Expected one of: "
                + ", ".join(known_names())
            ) from exc

class SampleSerializer(serializers.Serializer):
    timestamp: ClassVar[serializers.DateTimeField] = (
        serializers.DateTimeField()
    )
    values: ClassVar[serializers.DictField] = serializers.DictField(
        child=serializers.FloatField()
    )


class ParameterSampleSerializer(serializers.Serializer):
    timestamp: ClassVar[serializers.DateTimeField] = (
        serializers.DateTimeField()
    )
    value: ClassVar[serializers.FloatField] = serializers.FloatField(
        allow_null=True
    )


class SeriesMetaSerializer(serializers.Serializer):
    reference_time: ClassVar[serializers.DateTimeField] = (
        serializers.DateTimeField()
    )
    latitude: ClassVar[serializers.FloatField] = serializers.FloatField()
    longitude: ClassVar[serializers.FloatField] = serializers.FloatField()


class ForecastAtSerializer(serializers.Serializer):
    requested_at: ClassVar[serializers.DateTimeField] = (
        serializers.DateTimeField()
    )
    timestamp: ClassVar[serializers.DateTimeField] = (
        serializers.DateTimeField()
    )
    parameter: ClassVar[serializers.CharField] = serializers.CharField(
        allow_null=True
    )
    value: ClassVar[serializers.FloatField] = serializers.FloatField(
        allow_null=True
    )
    values: ClassVar[serializers.DictField] = serializers.DictField(
        child=serializers.FloatField(), allow_null=True
    )


class ApprovedTimeSerializer(serializers.Serializer):
    approved_time: ClassVar[serializers.DateTimeField] = (
        serializers.DateTimeField()
    )
    reference_time: ClassVar[serializers.DateTimeField] = (
        serializers.DateTimeField()
    )


class ParameterInfoSerializer(serializers.Serializer):
    key: ClassVar[serializers.CharField] = serializers.CharField()
    aliases: ClassVar[serializers.ListField] = serializers.ListField(
        child=serializers.CharField()
    )


def serialize_series(series: BaseSeries) -> dict[str, JSONValue]:
    data: dict[str, JSONValue] = dict(SeriesMetaSerializer(series).data)
    if isinstance(series, ParameterSeries):
        data["parameter"] = series.parameter
        rows = [
            {
                "timestamp": sample.timestamp,
                "value": sample.values.get(series.parameter),
            }
            for sample in series
        ]
        data["samples"] = list(
            ParameterSampleSerializer(rows, many=True).data
        )
    elif isinstance(series, ForecastSeries):
        data["parameters"] = list(series.parameters())
        data["samples"] = list(SampleSerializer(series, many=True).data)
    return data


def serialize_value_at(
    series: BaseSeries, requested_at: datetime
) -> dict[str, JSONValue]:
    sample = series.sample_at(requested_at)
    row: dict[str, object] = {
        "requested_at": requested_at,
        "timestamp": sample.timestamp,
        "parameter": None,
        "value": None,
        "values": None,
    }
    if isinstance(series, ParameterSeries):
        row["parameter"] = series.parameter
        row["value"] = sample.values.get(series.parameter)
    else:
        row["values"] = sample.values
    return dict(ForecastAtSerializer(row).data)


def serialize_approved_time(payload: object) -> dict[str, JSONValue]:
    return dict(ApprovedTimeSerializer(payload).data)


def serialize_parameters() -> list[dict[str, JSONValue]]:
    rows = [
        {"key": key, "aliases": list(aliases_for(key))}
        for key in CANONICAL_PARAMETERS
    ]
    return list(ParameterInfoSerializer(rows, many=True).data)
