from __future__ import annotations

# ruff: noqa: S101
import dataclasses
from datetime import UTC, datetime, timedelta

import pytest

from forecasts.exceptions import (
    IllegalArgumentError,
    MissingParameterError,
    UnknownParameterError,
)
from forecasts.sample import Sample

NOON = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def test_value_of_resolves_aliases() -> None:
    sample = Sample(NOON, {"t": 11.5, "r": 80})
    assert sample.value_of("t") == 11.5
    assert sample.value_of("temperature") == 11.5
    assert sample["humidity"] == 80
    assert sample.parameters == ("t", "r")


def test_value_of_missing_parameter() -> None:
    sample = Sample(NOON, {"t": 11.5})
    with pytest.raises(MissingParameterError) as excinfo:
        sample.value_of("wind_speed")
    assert excinfo.value.code == "missing_parameter"
    assert "'ws'" in str(excinfo.value)


def test_value_of_unknown_parameter() -> None:
    with pytest.raises(UnknownParameterError):
        Sample(NOON, {"t": 1.0}).value_of("bogus")


def test_sample_rejects_unknown_keys_and_bad_values() -> None:
    with pytest.raises(UnknownParameterError):
        Sample(NOON, {"temperature": 1.0})
    with pytest.raises(IllegalArgumentError):
        Sample(NOON, {"t": "warm"})  # type: ignore[dict-item]
    with pytest.raises(IllegalArgumentError):
        Sample("2024-05-01", {"t": 1.0})  # type: ignore[arg-type]


def test_sample_is_immutable() -> None:
    source = {"t": 1.0}
    sample = Sample(NOON, source)
    source["t"] = 99.0
    assert sample.values["t"] == 1.0
    with pytest.raises(TypeError):
        sample.values["t"] = 2.0  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample.timestamp = NOON  # type: ignore[misc]


def test_naive_timestamp_is_treated_as_utc() -> None:
    sample = Sample(datetime(2024, 5, 1, 12, 0), {"t": 1.0})
    assert sample.timestamp == NOON
    assert sample.timestamp.tzinfo is UTC


def test_ordering_uses_timestamp_only() -> None:
    early = Sample(NOON, {"t": 9.0})
    late = Sample(NOON + timedelta(hours=1), {"t": 1.0})
    twin = Sample(NOON, {"ws": 4.0})

    assert early < late
    assert late >= early
    assert early == twin
    assert hash(early) == hash(twin)
    assert early.compare(late) == -1
    assert late.compare(early) == 1
    assert early.compare(twin) == 0
    assert sorted([late, early]) == [early, late]


def test_repr_lists_values() -> None:
    assert repr(Sample(NOON, {"t": 1.0})) == (
        "Sample(2024-05-01T12:00:00+00:00, {'t': 1.0})"
    )
