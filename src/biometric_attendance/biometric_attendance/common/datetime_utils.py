from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def now_utc() -> datetime:
    """Current instant (timezone-aware UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def from_epoch_millis(value) -> datetime:
    """Device timestamps arrive as epoch milliseconds (string or int)."""
    millis = int(str(value).strip())
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def resolve_zone(name: str | None, *, default: str) -> tzinfo:
    zone_name = (name or "").strip() or default
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {zone_name!r}")


def local_work_date(instant: datetime, tz: tzinfo) -> date:
    """Calendar day of an instant as seen in the facility timezone."""
    return instant.astimezone(tz).date()


def scheduled_instant(work_date: date, wall_time: time, tz: tzinfo) -> datetime:
    """Apply a wall-clock shift time to a calendar day in the given timezone."""
    return datetime.combine(work_date, wall_time.replace(tzinfo=None), tzinfo=tz)


def scheduled_window(work_date: date, start: time, end: time, tz: tzinfo) -> tuple[datetime, datetime]:
    """Scheduled start/end instants; an end before the start belongs to the next day."""
    begin = scheduled_instant(work_date, start, tz)
    finish = scheduled_instant(work_date, end, tz)
    if finish <= begin:
        finish = scheduled_instant(work_date + timedelta(days=1), end, tz)
    return begin, finish


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Elapsed whole minutes from start to end (floored)."""
    return int((end - start).total_seconds() // 60)


def overnight_cutoff(work_date: date, start: time, end: time, tz: tzinfo) -> datetime | None:
    """Last instant a scan still belongs to `work_date` for a shift ending after midnight.

    Halfway through the off-duty gap that follows the rolled shift end. None
    for shifts that start and end on the same calendar day.
    """
    if end > start:
        return None
    begin, finish = scheduled_window(work_date, start, end, tz)
    off_duty = max(timedelta(days=1) - (finish - begin), timedelta(0))
    return finish + off_duty / 2
