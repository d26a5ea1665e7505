from __future__ import annotations

from datetime import UTC, datetime, tzinfo


def ensure_aware(dt: datetime, tz: tzinfo = UTC) -> datetime:
    """Attach `tz` to a naive datetime; aware datetimes pass through."""

    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=tz)
    return dt


def parse_iso_datetime(raw: object) -> datetime:
    """Parse an ISO8601 timestamp as sent by SMHI (``2024-05-01T12:00:00Z``).

    Naive values are taken to be UTC. Raises ValueError on anything else.
    """

    if not isinstance(raw, str):
        raise ValueError(f"Expected ISO8601 string, got {type(raw).__name__}")
    candidate = raw.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(candidate))

