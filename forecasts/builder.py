"""Assemble ordered sample tuples for forecast series.

Raw data arrives as a mapping keyed by valid time. Narrowed series reuse
the parent's `Sample` objects and only need the order checked.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from .exceptions import IllegalArgumentError
from .sample import Sample

logger = logging.getLogger(__name__)


def samples_from_mapping(
    data: Mapping[datetime, Mapping[str, float]],
) -> tuple[Sample, ...]:
    """Build samples from ``{valid_time: {key: value}}`` sorted by time."""

    samples: list[Sample] = []
    for timestamp, values in data.items():
        if not isinstance(timestamp, datetime):
            raise IllegalArgumentError(
                "Forecast mapping keys must be datetimes, got "
                f"{type(timestamp).__name__}"
            )
        if not isinstance(values, Mapping):
            raise IllegalArgumentError(
                f"Forecast values at {timestamp.isoformat()} must be a mapping"
            )
        samples.append(Sample(timestamp=timestamp, values=values))
    samples.sort()
    return tuple(samples)


def ordered_samples(samples: Iterable[object]) -> tuple[Sample, ...]:
    """Return `samples` as a tuple sorted ascending by timestamp.

    Input produced by narrowing is already ordered and is returned as is.
    """

    result = tuple(samples)
    for item in result:
        if not isinstance(item, Sample):
            raise IllegalArgumentError(
                f"Expected Sample instances, got {type(item).__name__}"
            )
    if any(
        later.timestamp < earlier.timestamp
        for earlier, later in zip(result, result[1:], strict=False)
    ):
        logger.debug("forecasts.builder.resort samples=%s", len(result))
        result = tuple(sorted(result))
    return result


def coerce_samples(data: object) -> tuple[Sample, ...]:
    """Accept a time-keyed mapping or a sequence of samples."""

    if isinstance(data, Mapping):
        return samples_from_mapping(data)
    if isinstance(data, Sequence) and not isinstance(data, str | bytes):
        return ordered_samples(data)
    raise IllegalArgumentError(
        "Forecast data must be a mapping of datetime to values or a "
        f"sequence of Sample, got {type(data).__name__}"
    )


def project_samples(
    samples: Iterable[Sample], key: str
) -> tuple[Sample, ...]:
    """Single-parameter copies of `samples` for canonical `key`.

    Every timestamp is kept so the projection lines up with its source.
    Samples without a value for `key` become empty samples (gaps).
    """

    projected: list[Sample] = []
    gaps = 0
    for sample in samples:
        if key in sample.values:
            values = {key: sample.values[key]}
        else:
            values = {}
            gaps += 1
        projected.append(Sample(timestamp=sample.timestamp, values=values))
    if gaps:
        logger.debug(
            "forecasts.builder.project_gaps parameter=%s gaps=%s",
            key,
            gaps,
        )
    return tuple(projected)
