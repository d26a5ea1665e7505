from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

ProviderName = Literal["smhi"]


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float


@dataclass(frozen=True)
class ApprovedTime:
    """When the latest forecast run was approved and which run it is."""

    approved_time: datetime
    reference_time: datetime
