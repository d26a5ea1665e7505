from __future__ import annotations

# ruff: noqa: S101
import httpx
import pytest
from django.conf import LazySettings

from forecasts.engines.smhi import SmhiProvider, format_coordinate
from forecasts.engines.types import Location


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (16.0, "16"),
        (57.999628, "57.999628"),
        (57.99962812345, "57.999628"),
        (-3.5, "-3.5"),
        (-0.0000001, "0"),
    ],
)
def test_format_coordinate(value: float, expected: str) -> None:
    assert format_coordinate(value) == expected


def test_point_forecast_url() -> None:
    provider = SmhiProvider(base_url="https://smhi.example/")
    url = provider.point_forecast_url(Location(lat=57.999628, lon=16.017767))
    assert url == (
        "https://smhi.example/api/category/pmp3g/version/2"
        "/geotype/point/lon/16.017767/lat/57.999628/data.json"
    )
    assert provider.approved_time_url() == (
        "https://smhi.example/api/category/pmp3g/version/2/approvedtime.json"
    )


def test_base_url_and_timeout_from_settings(settings: LazySettings) -> None:
    settings.SMHI_BASE_URL = "https://mirror.example"
    settings.SMHI_REQUEST_TIMEOUT_SECONDS = 3.5
    provider = SmhiProvider()
    assert provider.api_url == (
        "https://mirror.example/api/category/pmp3g/version/2"
    )
    assert provider.timeout_seconds == 3.5


def test_point_forecast_returns_body_text(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    provider = SmhiProvider(base_url="https://smhi.example")
    calls: list[tuple[str, str]] = []

    def fake_request(method: str, url: str, **_: object) -> httpx.Response:
        calls.append((method, url))
        return httpx.Response(
            200,
            text='{"timeSeries": []}',
            request=httpx.Request(method, url),
        )

    monkeypatch.setattr(provider._http, "request", fake_request)
    body = provider.point_forecast(Location(lat=58.0, lon=16.0))
    assert body == '{"timeSeries": []}'
    assert calls == [
        (
            "GET",
            "https://smhi.example/api/category/pmp3g/version/2"
            "/geotype/point/lon/16/lat/58/data.json",
        )
    ]


def test_http_errors_propagate_without_retry(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    provider = SmhiProvider(base_url="https://smhi.example")
    attempts = {"count": 0}

    def fake_request(method: str, url: str, **_: object) -> httpx.Response:
        attempts["count"] += 1
        return httpx.Response(503, request=httpx.Request(method, url))

    monkeypatch.setattr(provider._http, "request", fake_request)
    with pytest.raises(httpx.HTTPStatusError):
        provider.approved_time()
    assert attempts["count"] == 1


def test_network_errors_propagate(monkeypatch: pytest.MonkeyPatch) -> None:
    provider = SmhiProvider(base_url="https://smhi.example")

    def fake_request(*_: object, **__: object) -> httpx.Response:
        raise httpx.ConnectError(
            "network", request=httpx.Request("GET", "x")
        )

    monkeypatch.setattr(provider._http, "request", fake_request)
    with pytest.raises(httpx.RequestError):
        provider.point_forecast(Location(lat=58.0, lon=16.0))
