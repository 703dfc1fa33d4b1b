from datetime import datetime

from calendar_layout.models import CalendarEvent
from calendar_layout.overlap import events_overlap


def _event(event_id: str, start: str, end: str) -> CalendarEvent:
    return CalendarEvent(
        id=event_id,
        start_time=datetime.fromisoformat(f"2026-02-10T{start}"),
        end_time=datetime.fromisoformat(f"2026-02-10T{end}"),
    )


def test_partial_overlap_is_symmetric() -> None:
    first = _event("a", "09:00", "10:00")
    second = _event("b", "09:30", "10:30")

    assert events_overlap(first, second) is True
    assert events_overlap(second, first) is True


def test_touching_endpoints_do_not_overlap() -> None:
    first = _event("a", "09:00", "10:00")
    second = _event("b", "10:00", "11:00")

    assert events_overlap(first, second) is False
    assert events_overlap(second, first) is False


def test_containment_and_identical_intervals_overlap() -> None:
    outer = _event("outer", "08:00", "12:00")
    inner = _event("inner", "09:00", "09:15")
    twin = _event("twin", "08:00", "12:00")

    assert events_overlap(outer, inner) is True
    assert events_overlap(outer, twin) is True


def test_disjoint_intervals_do_not_overlap() -> None:
    assert events_overlap(_event("a", "09:00", "10:00"), _event("b", "11:00", "12:00")) is False
