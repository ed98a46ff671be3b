from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


def parse_hhmm(value: str) -> time:
    """Parse an 'HH:MM' shift time (minute resolution)."""
    try:
        parsed = datetime.strptime(value.strip(), "%H:%M")
    except (AttributeError, ValueError) as e:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM") from e
    return parsed.time()


def get_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone {name!r}") from e


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier. Domain functions never call
    this themselves; callers pass `now` explicitly.
    """
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime, zone: tzinfo) -> datetime:
    """Attach `zone` to naive datetimes; aware ones are left untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=zone)
    return value


def local_date(value: datetime, zone: tzinfo) -> date:
    """Calendar day of `value` as seen in `zone`."""
    return ensure_aware(value, zone).astimezone(zone).date()


def at_local_time(work_date: date, moment: time, zone: tzinfo) -> datetime:
    return datetime.combine(work_date, moment, tzinfo=zone)


def format_hours(hours: float) -> str:
    """Render 7.83 as '7h 50m'."""
    if not hours:
        return "0h"
    whole = int(hours)
    minutes = round((hours - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    return f"{whole}h {minutes}m"
