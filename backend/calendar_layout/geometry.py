from __future__ import annotations

from datetime import datetime
from typing import NamedTuple

from .models import CalendarEvent, EventGeometry, LayoutedEvent
from .utils import minutes_between

MIN_HEIGHT_PX = 20


class EventPosition(NamedTuple):
    top: float
    height: float


def calculate_event_position(
    event: CalendarEvent,
    day_start: datetime,
    pixels_per_minute: float,
    min_height_px: float = MIN_HEIGHT_PX,
) -> EventPosition:
    start_minutes = minutes_between(day_start, event.start_time)
    end_minutes = minutes_between(day_start, event.end_time)

    top = start_minutes * pixels_per_minute
    height = (end_minutes - start_minutes) * pixels_per_minute

    return EventPosition(top=max(0.0, top), height=max(float(min_height_px), height))


def get_event_layout_style(
    layouted_event: LayoutedEvent,
    day_start: datetime,
    pixels_per_minute: float,
    min_height_px: float = MIN_HEIGHT_PX,
) -> EventGeometry:
    top, height = calculate_event_position(layouted_event, day_start, pixels_per_minute, min_height_px)

    total_columns = layouted_event.total_columns
    return EventGeometry(
        top=top,
        height=height,
        left_percent=(layouted_event.column_index / total_columns) * 100,
        width_percent=100 / total_columns,
    )
