from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (the form stored in DATETIME columns).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def elapsed_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between two timestamps, never negative."""
    return max(0, int((end - start).total_seconds()))


def parse_bound(value: Optional[str], *, end_of_day: bool = False) -> Optional[datetime]:
    """Parse a `from`/`to` query bound.

    Accepts YYYY-MM-DD or an ISO datetime. A date-only upper bound covers the
    whole day.
    """

    v = (value or "").strip()
    if not v:
        return None

    if len(v) == 10:
        try:
            d = parse_iso_date(v)
        except ValueError:
            raise ValidationError(f"Invalid date: {v!r} (expected YYYY-MM-DD)")
        return datetime.combine(d, time.max.replace(microsecond=0) if end_of_day else time.min)

    try:
        return to_naive_utc(datetime.fromisoformat(v.replace("Z", "+00:00")))
    except ValueError:
        raise ValidationError(f"Invalid datetime: {v!r}")


def parse_optional_time(value: Optional[str]) -> Optional[time]:
    v = (value or "").strip()
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time: {v!r} (expected HH:MM)")
