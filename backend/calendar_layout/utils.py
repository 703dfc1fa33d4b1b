from __future__ import annotations

from datetime import date, datetime, time as dtime, timedelta, timezone, tzinfo


def minutes_between(start: datetime, end: datetime) -> float:
    """Elapsed minutes; aware values are measured on UTC, so DST shifts count."""
    if start.tzinfo is None or end.tzinfo is None:
        return (end - start).total_seconds() / 60
    return (end.timestamp() - start.timestamp()) / 60


def shift_minutes(value: datetime, minutes: float) -> datetime:
    """Move ``value`` forward by elapsed minutes, keeping its timezone."""
    if value.tzinfo is None:
        return value + timedelta(minutes=minutes)
    shifted = value.astimezone(timezone.utc) + timedelta(minutes=minutes)
    return shifted.astimezone(value.tzinfo)


def localize(value: datetime, tz: tzinfo) -> datetime:
    """Attach ``tz`` to naive datetimes and convert aware ones into it."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def day_bounds(day_date: date, tz: tzinfo) -> tuple[datetime, datetime]:
    start = datetime.combine(day_date, dtime.min, tzinfo=tz)
    next_day = datetime.combine(day_date + timedelta(days=1), dtime.min, tzinfo=tz)
    return start, next_day


def week_start_for(anchor_date: date) -> date:
    return anchor_date - timedelta(days=anchor_date.weekday())


def format_css_number(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return text if text not in {"", "-0"} else "0"
