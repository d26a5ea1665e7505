from __future__ import annotations

import functools
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from .exceptions import (
    IllegalArgumentError,
    MissingParameterError,
    UnknownParameterError,
)
from .parameters import is_canonical, resolve_parameter
from .timeutils import ensure_aware


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Sample:
    """Forecast values for every parameter valid at one instant.

    Ordering and equality look at `timestamp` only. `values` is frozen into
    a read-only mapping and may only hold canonical parameter keys.
    """

    timestamp: datetime
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.timestamp, datetime):
            raise IllegalArgumentError(
                "Sample timestamp must be a datetime, got "
                f"{type(self.timestamp).__name__}"
            )
        if not isinstance(self.values, Mapping):
            raise IllegalArgumentError("Sample values must be a mapping")

        frozen: dict[str, float] = {}
        for key, value in self.values.items():
            if not is_canonical(key):
                raise UnknownParameterError(
                    f"Unknown forecast parameter: {key!r}"
                )
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise IllegalArgumentError(
                    f"Value for {key!r} must be numeric, got {value!r}"
                )
            frozen[key] = value

        object.__setattr__(self, "timestamp", ensure_aware(self.timestamp))
        object.__setattr__(self, "values", MappingProxyType(frozen))

    @property
    def parameters(self) -> tuple[str, ...]:
        return tuple(self.values)

    def value_of(self, name: str) -> float:
        key = resolve_parameter(name)
        try:
            return self.values[key]
        except KeyError:
            raise MissingParameterError(
                f"Parameter {key!r} missing at {self.timestamp.isoformat()}"
            ) from None

    def __getitem__(self, name: str) -> float:
        return self.value_of(name)

    def compare(self, other: Sample) -> int:
        if self.timestamp < other.timestamp:
            return -1
        if self.timestamp > other.timestamp:
            return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sample):
            return NotImplemented
        return self.timestamp == other.timestamp

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Sample):
            return NotImplemented
        return self.timestamp < other.timestamp

    def __hash__(self) -> int:
        return hash(self.timestamp)

    def __repr__(self) -> str:
        return f"Sample({self.timestamp.isoformat()}, {dict(self.values)!r})"
