from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from calendar_layout.utils import (
    day_bounds,
    format_css_number,
    localize,
    minutes_between,
    shift_minutes,
    week_start_for,
)


def test_minutes_between() -> None:
    assert minutes_between(datetime(2026, 2, 10, 9), datetime(2026, 2, 10, 10, 30)) == 90
    assert minutes_between(datetime(2026, 2, 10, 9, 0, 30), datetime(2026, 2, 10, 9, 1)) == 0.5


def test_localize_attaches_or_converts() -> None:
    warsaw = ZoneInfo("Europe/Warsaw")
    aware = datetime(2026, 2, 10, 9, tzinfo=timezone.utc)

    assert localize(datetime(2026, 2, 10, 9), warsaw).tzinfo is warsaw
    converted = localize(aware, warsaw)
    assert converted == aware
    assert converted.tzinfo is warsaw
    assert converted.hour == 10


def test_minutes_between_counts_elapsed_time_across_clock_changes() -> None:
    warsaw = ZoneInfo("Europe/Warsaw")
    spring_start, spring_end = day_bounds(date(2026, 3, 29), warsaw)
    autumn_start, autumn_end = day_bounds(date(2026, 10, 25), warsaw)

    assert minutes_between(spring_start, spring_end) == 23 * 60
    assert minutes_between(autumn_start, autumn_end) == 25 * 60
    assert minutes_between(spring_start, datetime(2026, 3, 29, 10, tzinfo=warsaw)) == 9 * 60


def test_shift_minutes_moves_by_elapsed_time() -> None:
    warsaw = ZoneInfo("Europe/Warsaw")
    midnight = datetime(2026, 3, 29, tzinfo=warsaw)

    shifted = shift_minutes(midnight, 8 * 60)

    assert shifted.tzinfo is warsaw
    assert (shifted.hour, shifted.minute) == (9, 0)
    assert shift_minutes(datetime(2026, 3, 29), 90) == datetime(2026, 3, 29, 1, 30)


def test_day_bounds_cover_one_day() -> None:
    start, end = day_bounds(date(2026, 2, 10), timezone.utc)

    assert start == datetime(2026, 2, 10, tzinfo=timezone.utc)
    assert end - start == timedelta(days=1)


def test_week_starts_on_monday() -> None:
    assert week_start_for(date(2026, 2, 11)) == date(2026, 2, 9)
    assert week_start_for(date(2026, 2, 9)) == date(2026, 2, 9)
    assert week_start_for(date(2026, 2, 15)) == date(2026, 2, 9)


def test_format_css_number() -> None:
    assert format_css_number(540.0) == "540"
    assert format_css_number(100 / 3) == "33.3333"
    assert format_css_number(12.5) == "12.5"
    assert format_css_number(0.0) == "0"
