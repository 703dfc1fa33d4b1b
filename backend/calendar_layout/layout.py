from __future__ import annotations

from datetime import datetime
import math
from typing import Any, Sequence

import pandas as pd
from pydantic.alias_generators import to_camel

from .clusters import build_clusters
from .columns import assign_columns
from .models import CalendarEvent, LayoutedEvent, PositionedEvent

DAY_MINUTES = 24 * 60
BASE_START_MIN = 7 * 60
BASE_END_MIN = 21 * 60
COMPACT_MARGIN_MIN = 15

FRAME_COLUMNS = ["position", "id", "start", "end", "all_day"]

_OUTPUT_FIELDS = set(PositionedEvent.model_fields) - set(CalendarEvent.model_fields)
LAYOUT_OUTPUT_KEYS = frozenset(_OUTPUT_FIELDS | {to_camel(name) for name in _OUTPUT_FIELDS})


def event_payload(event: CalendarEvent) -> dict[str, Any]:
    """Dump an input event without layout fields left over from an earlier response."""
    return {key: value for key, value in event.model_dump().items() if key not in LAYOUT_OUTPUT_KEYS}


def calculate_event_layout(events: Sequence[CalendarEvent]) -> list[LayoutedEvent]:
    """Lay out timed events side by side; all-day events are left out.

    The result is ordered by cluster, then by start time within a cluster.
    """
    if not events:
        return []

    timed_events = [event for event in events if not event.all_day]

    result: list[LayoutedEvent] = []
    for group in build_clusters(timed_events):
        assignments = assign_columns(group)
        for event in group.events:
            assignment = assignments[event.id]
            payload = event_payload(event)
            payload.update(
                column_index=assignment.column_index,
                total_columns=assignment.total_columns,
                cluster_id=group.cluster_id,
            )
            result.append(LayoutedEvent.model_validate(payload))

    return result


def as_utc_timestamp(value: datetime | pd.Timestamp) -> pd.Timestamp:
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


def events_frame(events: Sequence[CalendarEvent]) -> pd.DataFrame:
    """Tabular view of the events; naive datetimes are read as UTC."""
    if not events:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    return pd.DataFrame(
        {
            "position": range(len(events)),
            "id": [event.id for event in events],
            "start": pd.to_datetime([as_utc_timestamp(event.start_time) for event in events], utc=True),
            "end": pd.to_datetime([as_utc_timestamp(event.end_time) for event in events], utc=True),
            "all_day": [event.all_day for event in events],
        }
    )


def _offset_minutes(series: pd.Series, anchor: pd.Timestamp, day_minutes: int) -> list[float]:
    offsets = (pd.to_datetime(series.dropna(), utc=True) - anchor).dt.total_seconds() / 60
    return [min(max(float(value), 0.0), float(day_minutes)) for value in offsets.tolist()]


def compute_time_range(
    day_frame: pd.DataFrame,
    day_start: datetime | pd.Timestamp,
    compact: bool = True,
    day_minutes: int = DAY_MINUTES,
) -> tuple[int, int]:
    """Visible grid range for one day, in elapsed minutes after ``day_start``.

    ``day_minutes`` is the length of the day, 1380 or 1500 when clocks change.
    """
    if not compact:
        return 0, day_minutes

    if day_frame.empty:
        return BASE_START_MIN, min(BASE_END_MIN, day_minutes)

    anchor = as_utc_timestamp(day_start)
    start_values = _offset_minutes(day_frame["start"], anchor, day_minutes)
    end_values = _offset_minutes(day_frame["end"], anchor, day_minutes)

    if not start_values or not end_values:
        return BASE_START_MIN, min(BASE_END_MIN, day_minutes)

    min_start = min(start_values)
    max_end = max(end_values)
    range_start = max(0, int(math.floor((min_start - COMPACT_MARGIN_MIN) / 60) * 60))
    range_end = min(day_minutes, int(math.ceil((max_end + COMPACT_MARGIN_MIN) / 60) * 60))

    if range_end - range_start < 60:
        range_end = range_start + 60

    return range_start, range_end
