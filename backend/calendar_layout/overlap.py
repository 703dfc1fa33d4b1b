from __future__ import annotations

from .models import CalendarEvent


def events_overlap(event_a: CalendarEvent, event_b: CalendarEvent) -> bool:
    """Half-open overlap test; events that only touch at an endpoint do not overlap."""
    return event_a.start_time < event_b.end_time and event_b.start_time < event_a.end_time
