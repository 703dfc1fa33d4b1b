from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .utils import format_css_number


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalendarEvent(CamelModel):
    """A timed (or all-day) event as delivered by the event-listing service.

    Fields the layout does not use (title, type, owner, ...) are kept as extras
    so they survive the round trip back to the renderer.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    start_time: datetime
    end_time: datetime
    all_day: bool = False


class LayoutedEvent(CalendarEvent):
    column_index: int = Field(ge=0)
    total_columns: int = Field(ge=1)
    cluster_id: int


class EventGeometry(CamelModel):
    model_config = ConfigDict(frozen=True)

    top: float
    height: float
    left_percent: float
    width_percent: float

    def as_css(self) -> dict[str, Any]:
        return {
            "position": "absolute",
            "top": f"{format_css_number(self.top)}px",
            "left": f"{format_css_number(self.left_percent)}%",
            "width": f"{format_css_number(self.width_percent)}%",
            "height": f"{format_css_number(self.height)}px",
            "zIndex": 1,
        }


class PositionedEvent(LayoutedEvent):
    geometry: EventGeometry


class DayLayoutRequest(CamelModel):
    date: date
    events: list[CalendarEvent] = Field(default_factory=list)
    pixels_per_minute: float | None = Field(default=None, gt=0)
    compact: bool | None = None


class WeekLayoutRequest(CamelModel):
    anchor_date: date
    events: list[CalendarEvent] = Field(default_factory=list)
    pixels_per_minute: float | None = Field(default=None, gt=0)
    compact: bool | None = None


class DayLayout(CamelModel):
    date: date
    range_start_min: int
    range_end_min: int
    events: list[PositionedEvent] = Field(default_factory=list)
    all_day_events: list[CalendarEvent] = Field(default_factory=list)


class WeekLayout(CamelModel):
    week_start: date
    week_end: date
    days: list[DayLayout] = Field(default_factory=list)


class HealthResponse(CamelModel):
    status: str
    timezone: str
    cache_entries: int
    cache_max_entries: int | None = None


class ErrorResponse(CamelModel):
    detail: str
    request_id: str | None = None
