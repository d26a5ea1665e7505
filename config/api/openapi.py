"""drf-spectacular helpers for documenting the project's response envelopes.

`config.api.responses.envelope` shapes every response body, including the
ones produced by the global DRF exception handler. These helpers build
matching serializers for the OpenAPI schema only.
"""

from __future__ import annotations

from drf_spectacular.utils import inline_serializer
from rest_framework import serializers
from rest_framework.serializers import Serializer


def success_envelope_serializer(
    name: str,
    *,
    data: serializers.Field,
) -> Serializer:
    """Build an OpenAPI schema matching `success_response`."""

    return inline_serializer(
        name=name,
        fields={
            "status": serializers.IntegerField(),
            "message": serializers.CharField(),
            "data": data,
            "errors": serializers.JSONField(allow_null=True),
        },
    )


def error_envelope_serializer(name: str) -> Serializer:
    """Build an OpenAPI schema matching `error_response`.

    Forecast model failures carry a machine-readable `errors.code`.
    """

    return inline_serializer(
        name=name,
        fields={
            "status": serializers.IntegerField(),
            "message": serializers.CharField(),
            "data": serializers.JSONField(allow_null=True),
            "errors": inline_serializer(
                name=f"{name}Errors",
                fields={
                    "code": serializers.CharField(required=False),
                    "detail": serializers.JSONField(required=False),
                },
                allow_null=True,
            ),
        },
    )
