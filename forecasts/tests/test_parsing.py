from __future__ import annotations

# ruff: noqa: S101
import json
import logging
from datetime import UTC, datetime

import pytest

from forecasts.exceptions import ForecastPayloadError
from forecasts.parsing import build_forecast, decode, parse_approved_time
from forecasts.series import ForecastSeries

from .fakes import (
    REFERENCE_TIME,
    T10,
    T11,
    T12,
    approved_time_payload,
    smhi_payload,
)


def test_build_forecast_from_smhi_document() -> None:
    payload = smhi_payload(
        {
            T12: {"t": 7.0, "Wsymb2": 3},
            T10: {"t": 5.0, "Wsymb2": 1},
            T11: {"t": 6.0, "Wsymb2": 2},
        },
        lon=16.017767,
        lat=57.999628,
    )
    series = build_forecast(decode(json.dumps(payload)))

    assert isinstance(series, ForecastSeries)
    assert series.timestamps() == (T10, T11, T12)
    assert series.reference_time == REFERENCE_TIME
    assert series.latitude == pytest.approx(57.999628)
    assert series.longitude == pytest.approx(16.017767)
    assert series.project("temperature").to_dict() == {
        T10: 5.0,
        T11: 6.0,
        T12: 7.0,
    }
    assert series.at_index(2)["symbol"] == 3


def test_build_forecast_skips_unknown_parameters(
    caplog: pytest.LogCaptureFixture,
) -> None:
    payload = smhi_payload({T10: {"t": 5.0, "prob_fog": 12.0}})
    with caplog.at_level(logging.DEBUG, logger="forecasts.parsing"):
        series = build_forecast(payload)
    assert series.at_index(0).parameters == ("t",)
    assert "prob_fog" in caplog.text


def test_build_forecast_accepts_flat_geometry() -> None:
    payload = smhi_payload({T10: {"t": 5.0}})
    payload["geometry"] = {"type": "Point", "coordinates": [18.06, 59.33]}
    series = build_forecast(payload)
    assert (series.longitude, series.latitude) == (18.06, 59.33)


def test_build_forecast_uses_first_value() -> None:
    payload = smhi_payload({T10: {"t": 5.0}})
    entries = payload["timeSeries"]
    assert isinstance(entries, list)
    entries[0]["parameters"][0]["values"] = [4.5, 9.9]
    assert build_forecast(payload).at_time(T10)["t"] == 4.5


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.pop("timeSeries"),
        lambda p: p.update(referenceTime="yesterday"),
        lambda p: p.update(geometry={"coordinates": []}),
        lambda p: p.update(geometry=None),
        lambda p: p["timeSeries"][0].update(validTime=None),
        lambda p: p["timeSeries"][0]["parameters"][0].update(values=[]),
        lambda p: p["timeSeries"][0]["parameters"][0].update(values=["x"]),
        lambda p: p["timeSeries"].append("not-an-entry"),
    ],
)
def test_build_forecast_rejects_malformed_documents(mutate: object) -> None:
    payload = json.loads(json.dumps(smhi_payload({T10: {"t": 5.0}})))
    assert callable(mutate)
    mutate(payload)
    with pytest.raises(ForecastPayloadError) as excinfo:
        build_forecast(payload)
    assert excinfo.value.code == "bad_payload"


def test_build_forecast_rejects_duplicate_valid_times() -> None:
    payload = smhi_payload({T10: {"t": 5.0}, T11: {"t": 6.0}})
    entries = payload["timeSeries"]
    assert isinstance(entries, list)
    entries[1]["validTime"] = entries[0]["validTime"]
    with pytest.raises(ForecastPayloadError, match="Duplicate validTime"):
        build_forecast(payload)


@pytest.mark.parametrize("text", ["not json", "[1, 2]", '"text"'])
def test_decode_rejects_non_objects(text: str) -> None:
    with pytest.raises(ForecastPayloadError):
        decode(text)


def test_parse_approved_time() -> None:
    approved = parse_approved_time(
        approved_time_payload(
            datetime(2024, 5, 1, 9, 42, tzinfo=UTC), REFERENCE_TIME
        )
    )
    assert approved.approved_time == datetime(2024, 5, 1, 9, 42, tzinfo=UTC)
    assert approved.reference_time == REFERENCE_TIME


def test_parse_approved_time_requires_both_fields() -> None:
    with pytest.raises(ForecastPayloadError):
        parse_approved_time({"approvedTime": "2024-05-01T09:42:00Z"})
