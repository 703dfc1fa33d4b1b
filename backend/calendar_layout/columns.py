from __future__ import annotations

from dataclasses import dataclass

from .clusters import OverlapGroup
from .models import CalendarEvent
from .overlap import events_overlap


@dataclass(frozen=True)
class ColumnAssignment:
    column_index: int
    total_columns: int


def assign_columns(group: OverlapGroup) -> dict[str, ColumnAssignment]:
    """Greedy first-fit column assignment inside one overlap group.

    Events are placed in ``(start, end)`` order into the first column none of
    whose members they overlap. This is not a minimum coloring for every
    interval shape, and it is kept that way: column order decides which events
    render on the left.
    """
    if not group.events:
        return {}

    if len(group.events) == 1:
        return {group.events[0].id: ColumnAssignment(column_index=0, total_columns=1)}

    ordered = sorted(group.events, key=lambda item: (item.start_time, item.end_time))
    columns: list[list[CalendarEvent]] = []
    placed: dict[str, int] = {}

    for event in ordered:
        column_index = next(
            (
                idx
                for idx, column in enumerate(columns)
                if not any(events_overlap(event, member) for member in column)
            ),
            None,
        )
        if column_index is None:
            column_index = len(columns)
            columns.append([])

        columns[column_index].append(event)
        placed[event.id] = column_index

    total_columns = len(columns)
    return {
        event_id: ColumnAssignment(column_index=column_index, total_columns=total_columns)
        for event_id, column_index in placed.items()
    }
