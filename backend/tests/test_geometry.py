from datetime import datetime

from calendar_layout.geometry import MIN_HEIGHT_PX, calculate_event_position, get_event_layout_style
from calendar_layout.models import LayoutedEvent

DAY_START = datetime(2026, 2, 10)


def _layouted(start: str, end: str, column_index: int = 0, total_columns: int = 1) -> LayoutedEvent:
    return LayoutedEvent(
        id="evt",
        start_time=datetime.fromisoformat(f"2026-02-10T{start}"),
        end_time=datetime.fromisoformat(f"2026-02-10T{end}"),
        column_index=column_index,
        total_columns=total_columns,
        cluster_id=0,
    )


def test_half_hour_event_in_first_of_two_columns() -> None:
    geometry = get_event_layout_style(_layouted("09:00", "09:30", 0, 2), DAY_START, 1)

    assert geometry.top == 540
    assert geometry.height == 30
    assert geometry.left_percent == 0
    assert geometry.width_percent == 50


def test_second_column_is_shifted_right() -> None:
    geometry = get_event_layout_style(_layouted("09:00", "09:30", 1, 2), DAY_START, 1)

    assert geometry.left_percent == 50
    assert geometry.width_percent == 50


def test_position_scales_with_pixels_per_minute() -> None:
    position = calculate_event_position(_layouted("01:00", "02:00"), DAY_START, 1.5)

    assert position.top == 90
    assert position.height == 90


def test_short_events_get_minimum_height() -> None:
    position = calculate_event_position(_layouted("09:00", "09:05"), DAY_START, 1)

    assert position.height == MIN_HEIGHT_PX
    assert calculate_event_position(_layouted("09:00", "09:05"), DAY_START, 1, min_height_px=2).height == 5


def test_event_starting_before_day_start_is_clamped_to_top() -> None:
    position = calculate_event_position(_layouted("08:00", "10:00"), datetime(2026, 2, 10, 9), 1)

    assert position.top == 0
    assert position.height == 120


def test_as_css_renders_units() -> None:
    geometry = get_event_layout_style(_layouted("09:00", "10:00", 1, 3), DAY_START, 1)

    assert geometry.as_css() == {
        "position": "absolute",
        "top": "540px",
        "left": "33.3333%",
        "width": "33.3333%",
        "height": "60px",
        "zIndex": 1,
    }
