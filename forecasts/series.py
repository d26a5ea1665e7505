"""Time-indexed forecast series and their query operations.

A `ForecastSeries` holds samples with every parameter; projecting it onto
one parameter yields a `ParameterSeries` whose lookups return bare numbers.
Both are immutable and every narrowing call returns a new series of the
same type that shares the underlying `Sample` objects::

    series = build_forecast(payload)
    series.project("temperature").at_time(now)           # -> float
    series["precip_mean"].between(now, now + 3 * HOUR)   # -> ParameterSeries
    series.at_time(now)["wd"]                            # -> float
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_left, bisect_right
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from operator import attrgetter
from typing import Generic, Self, TypeVar, overload

from .builder import coerce_samples, project_samples
from .exceptions import (
    IllegalArgumentError,
    InvalidRangeError,
    MissingParameterError,
    NoForecastAtTimeError,
    SampleIndexError,
    UnknownOperationError,
    UnknownParameterError,
)
from .parameters import registry_order, resolve_parameter
from .sample import Sample
from .timeutils import ensure_aware

ItemT = TypeVar("ItemT")
ValueT = TypeVar("ValueT")

_timestamp = attrgetter("timestamp")


@dataclass(frozen=True)
class TimeRange:
    """Inclusive ``[start, end]`` interval of instants.

    A range whose start is after its end contains nothing.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.start, datetime) or not isinstance(
            self.end, datetime
        ):
            raise InvalidRangeError("TimeRange bounds must be datetimes")
        object.__setattr__(self, "start", ensure_aware(self.start))
        object.__setattr__(self, "end", ensure_aware(self.end))

    def __contains__(self, instant: object) -> bool:
        if not isinstance(instant, datetime):
            return False
        return self.start <= ensure_aware(instant) <= self.end


def _instant(value: object) -> datetime:
    if not isinstance(value, datetime):
        raise IllegalArgumentError(
            f"Expected a datetime, got {type(value).__name__}"
        )
    return ensure_aware(value)


def _time_range(args: tuple[object, ...]) -> TimeRange:
    if len(args) == 1:
        (arg,) = args
        if isinstance(arg, TimeRange):
            return arg
        if isinstance(arg, tuple) and len(arg) == 2:
            return _time_range(arg)
    elif len(args) == 2:
        start, end = args
        if isinstance(start, datetime) and isinstance(end, datetime):
            return TimeRange(start, end)
    raise InvalidRangeError(
        "between() expects a TimeRange, a (start, end) tuple or start and "
        "end datetimes"
    )


class BaseSeries(ABC, Generic[ItemT, ValueT]):
    """Shared storage, iteration and time-range narrowing."""

    def __init__(
        self,
        data: object,
        reference_time: datetime,
        latitude: float,
        longitude: float,
    ) -> None:
        self._samples = coerce_samples(data)
        self.reference_time = _instant(reference_time)
        self.latitude = float(latitude)
        self.longitude = float(longitude)

    @property
    def samples(self) -> tuple[Sample, ...]:
        return self._samples

    @property
    def length(self) -> int:
        return len(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __reversed__(self) -> Iterator[Sample]:
        return reversed(self._samples)

    def __bool__(self) -> bool:
        return bool(self._samples)

    def values(self) -> tuple[Sample, ...]:
        return self._samples

    to_a = values

    def timestamps(self) -> tuple[datetime, ...]:
        return tuple(sample.timestamp for sample in self._samples)

    def to_dict(self) -> dict[datetime, ValueT]:
        return {
            sample.timestamp: self._value(sample) for sample in self._samples
        }

    def sample_at(self, when: datetime) -> Sample:
        """First sample whose timestamp is at or after `when`."""

        instant = _instant(when)
        idx = bisect_left(self._samples, instant, key=_timestamp)
        if idx >= len(self._samples):
            raise NoForecastAtTimeError(
                f"No forecast at or after {instant.isoformat()}"
            )
        return self._samples[idx]

    def at_time(self, when: datetime) -> ValueT:
        return self._value(self.sample_at(when))

    def between(self, *args: object) -> Self:
        """Samples within an inclusive range.

        Accepts ``between(TimeRange(a, b))``, ``between((a, b))`` or
        ``between(a, b)``.
        """

        window = _time_range(args)
        lo = bisect_left(self._samples, window.start, key=_timestamp)
        hi = bisect_right(self._samples, window.end, key=_timestamp)
        return self._derive(self._samples[lo:hi])

    def before(self, when: datetime) -> Self:
        idx = bisect_left(self._samples, _instant(when), key=_timestamp)
        return self._derive(self._samples[:idx])

    until = before

    def after(self, when: datetime) -> Self:
        idx = bisect_right(self._samples, _instant(when), key=_timestamp)
        return self._derive(self._samples[idx:])

    def _sample_at_index(self, index: int) -> Sample:
        if isinstance(index, bool) or not isinstance(index, int):
            raise IllegalArgumentError(
                f"Index must be an integer, got {type(index).__name__}"
            )
        if not 0 <= index < len(self._samples):
            raise SampleIndexError(
                f"Index {index} out of range for {len(self._samples)} samples"
            )
        return self._samples[index]

    @overload
    def __getitem__(self, key: int) -> ItemT: ...

    @overload
    def __getitem__(self, key: slice) -> Self: ...

    @overload
    def __getitem__(self, key: datetime) -> ValueT: ...

    @overload
    def __getitem__(self, key: str) -> ParameterSeries: ...

    def __getitem__(
        self, key: int | slice | datetime | str
    ) -> ItemT | Self | ValueT | ParameterSeries:
        if isinstance(key, bool):
            raise UnknownOperationError(f"Unsupported series key: {key!r}")
        if isinstance(key, int):
            return self.at_index(key)
        if isinstance(key, slice):
            if key.step is not None and key.step < 0:
                raise UnknownOperationError(
                    "Reverse slices would break time ordering"
                )
            return self._derive(self._samples[key])
        if isinstance(key, datetime):
            return self.at_time(key)
        if isinstance(key, str):
            try:
                return self.project(key)
            except UnknownParameterError as exc:
                raise UnknownOperationError(
                    f"Unknown series accessor: {key!r}"
                ) from exc
        raise UnknownOperationError(
            f"Unsupported series key of type {type(key).__name__}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseSeries) or type(other) is not type(
            self
        ):
            return NotImplemented
        return self._identity() == other._identity()

    def __repr__(self) -> str:
        listing = ", ".join(repr(sample) for sample in self._samples)
        return (
            f"{type(self).__name__}("
            f"reference_time={self.reference_time.isoformat()}, "
            f"lat={self.latitude}, lon={self.longitude}, [{listing}])"
        )

    __str__ = __repr__

    def _identity(self) -> tuple[object, ...]:
        return (
            self.reference_time,
            self.latitude,
            self.longitude,
            tuple((s.timestamp, dict(s.values)) for s in self._samples),
        )

    def _derive(self, samples: tuple[Sample, ...]) -> Self:
        return type(self)(
            samples, self.reference_time, self.latitude, self.longitude
        )

    @abstractmethod
    def at_index(self, index: int) -> ItemT: ...

    @abstractmethod
    def project(self, name: str) -> ParameterSeries: ...

    @abstractmethod
    def _value(self, sample: Sample) -> ValueT: ...


class ForecastSeries(BaseSeries[Sample, Mapping[str, float]]):
    """Point forecast with every parameter per valid time.

    `data` is either ``{valid_time: {key: value}}`` (sorted on the way in)
    or an ordered sequence of `Sample`.
    """

    def at_index(self, index: int) -> Sample:
        return self._sample_at_index(index)

    def project(self, name: str) -> ParameterSeries:
        key = resolve_parameter(name)
        return ParameterSeries(
            project_samples(self._samples, key),
            self.reference_time,
            self.latitude,
            self.longitude,
            parameter=key,
        )

    def parameters(self) -> tuple[str, ...]:
        present = {key for sample in self._samples for key in sample.values}
        return tuple(sorted(present, key=registry_order))

    def _value(self, sample: Sample) -> Mapping[str, float]:
        return sample.values


class ParameterSeries(BaseSeries[float, float]):
    """Forecast narrowed to a single parameter; lookups return numbers.

    Timestamps match the source series. A sample without a value for the
    parameter is a gap: scalar lookups on it raise `MissingParameterError`
    and `to_dict` leaves it out.
    """

    def __init__(
        self,
        data: object,
        reference_time: datetime,
        latitude: float,
        longitude: float,
        *,
        parameter: str,
    ) -> None:
        super().__init__(data, reference_time, latitude, longitude)
        self.parameter = resolve_parameter(parameter)
        for sample in self._samples:
            if tuple(sample.values) not in ((), (self.parameter,)):
                raise IllegalArgumentError(
                    f"Sample at {sample.timestamp.isoformat()} must carry "
                    f"only {self.parameter!r}, got {sample.parameters!r}"
                )

    def at_index(self, index: int) -> float:
        return self._value(self._sample_at_index(index))

    def project(self, name: str) -> ParameterSeries:
        key = resolve_parameter(name)
        if key != self.parameter:
            raise MissingParameterError(
                f"Series holds only {self.parameter!r}, not {key!r}"
            )
        return self._derive(self._samples)

    def to_dict(self) -> dict[datetime, float]:
        return {
            sample.timestamp: sample.values[self.parameter]
            for sample in self._samples
            if self.parameter in sample.values
        }

    def _value(self, sample: Sample) -> float:
        return sample.value_of(self.parameter)

    def _derive(self, samples: tuple[Sample, ...]) -> Self:
        return type(self)(
            samples,
            self.reference_time,
            self.latitude,
            self.longitude,
            parameter=self.parameter,
        )

    def _identity(self) -> tuple[object, ...]:
        return (self.parameter, *super()._identity())

    def __repr__(self) -> str:
        return super().__repr__().replace(
            "(", f"(parameter={self.parameter!r}, ", 1
        )
