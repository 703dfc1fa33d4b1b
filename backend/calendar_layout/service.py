from __future__ import annotations

from datetime import date, timedelta, timezone
import logging
import threading
from typing import Sequence
from zoneinfo import ZoneInfo

import pandas as pd

from .cache import LayoutCache, layout_cache_key
from .config import Settings
from .errors import InvalidEventInterval, LayoutRequestError
from .geometry import get_event_layout_style
from .layout import as_utc_timestamp, compute_time_range, events_frame
from .models import CalendarEvent, DayLayout, HealthResponse, LayoutedEvent, PositionedEvent, WeekLayout
from .utils import day_bounds, localize, minutes_between, shift_minutes, week_start_for

logger = logging.getLogger(__name__)


class LayoutService:
    def __init__(self, settings: Settings, cache: LayoutCache | None = None) -> None:
        self._settings = settings
        self._tz = ZoneInfo(settings.timezone)
        self._cache = cache if cache is not None else LayoutCache(max_entries=settings.cache_max_entries)
        self._lock = threading.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cache(self) -> LayoutCache:
        return self._cache

    def _normalize(self, events: Sequence[CalendarEvent]) -> list[CalendarEvent]:
        normalized: list[CalendarEvent] = []
        seen_ids: set[str] = set()

        for event in events:
            if event.id in seen_ids:
                raise LayoutRequestError(f"Duplicate event id {event.id!r}.")
            seen_ids.add(event.id)

            start_time = localize(event.start_time, self._tz).astimezone(timezone.utc)
            end_time = localize(event.end_time, self._tz).astimezone(timezone.utc)
            if not event.all_day and minutes_between(start_time, end_time) <= 0:
                raise InvalidEventInterval(event.id)

            normalized.append(event.model_copy(update={"start_time": start_time, "end_time": end_time}))

        return normalized

    def _to_grid_timezone(self, event: CalendarEvent) -> CalendarEvent:
        return event.model_copy(
            update={"start_time": event.start_time.astimezone(self._tz), "end_time": event.end_time.astimezone(self._tz)}
        )

    def _layout(self, events: list[CalendarEvent]) -> list[LayoutedEvent]:
        key = layout_cache_key(events)
        with self._lock:
            return self._cache.get_or_compute(key, events)

    def _serialize_day(
        self,
        day_date: date,
        events: list[CalendarEvent],
        frame: pd.DataFrame,
        pixels_per_minute: float,
        compact: bool,
    ) -> DayLayout:
        day_start, day_end = day_bounds(day_date, self._tz)
        day_minutes = round(minutes_between(day_start, day_end))

        if frame.empty:
            range_start_min, range_end_min = compute_time_range(
                frame, day_start, compact=compact, day_minutes=day_minutes
            )
            return DayLayout(date=day_date, range_start_min=range_start_min, range_end_min=range_end_min)

        start_ts = as_utc_timestamp(day_start)
        end_ts = as_utc_timestamp(day_end)
        overlaps_day = (frame["start"] < end_ts) & (frame["end"] > start_ts)
        starts_in_day = (frame["start"] >= start_ts) & (frame["start"] < end_ts)
        day_df = frame[overlaps_day | (frame["all_day"].astype(bool) & starts_in_day)]

        timed_df = day_df[~day_df["all_day"].astype(bool)]
        range_start_min, range_end_min = compute_time_range(
            timed_df, day_start, compact=compact, day_minutes=day_minutes
        )

        timed_events = [events[position] for position in timed_df["position"].tolist()]
        all_day_positions = day_df.loc[day_df["all_day"].astype(bool), "position"].tolist()
        all_day_events = [self._to_grid_timezone(events[position]) for position in all_day_positions]

        anchor = shift_minutes(day_start, range_start_min)
        positioned: list[PositionedEvent] = []
        for layouted in self._layout(timed_events):
            geometry = get_event_layout_style(
                layouted,
                anchor,
                pixels_per_minute,
                min_height_px=self._settings.min_event_height_px,
            )
            payload = {key: value for key, value in layouted.model_dump().items() if key != "geometry"}
            payload.update(
                start_time=layouted.start_time.astimezone(self._tz),
                end_time=layouted.end_time.astimezone(self._tz),
                geometry=geometry,
            )
            positioned.append(PositionedEvent.model_validate(payload))

        logger.debug(
            "Laid out %d timed and %d all-day events for %s",
            len(positioned),
            len(all_day_events),
            day_date.isoformat(),
        )

        return DayLayout(
            date=day_date,
            range_start_min=range_start_min,
            range_end_min=range_end_min,
            events=positioned,
            all_day_events=all_day_events,
        )

    def _resolve_options(self, pixels_per_minute: float | None, compact: bool | None) -> tuple[float, bool]:
        scale = pixels_per_minute if pixels_per_minute is not None else self._settings.pixels_per_minute
        if scale <= 0:
            raise LayoutRequestError("pixels_per_minute must be positive.")
        return scale, self._settings.compact_range if compact is None else compact

    def get_day_layout(
        self,
        day_date: date,
        events: Sequence[CalendarEvent],
        pixels_per_minute: float | None = None,
        compact: bool | None = None,
    ) -> DayLayout:
        scale, compact_value = self._resolve_options(pixels_per_minute, compact)
        normalized = self._normalize(events)
        frame = events_frame(normalized)
        return self._serialize_day(day_date, normalized, frame, scale, compact_value)

    def get_week_layout(
        self,
        anchor_date: date,
        events: Sequence[CalendarEvent],
        pixels_per_minute: float | None = None,
        compact: bool | None = None,
    ) -> WeekLayout:
        scale, compact_value = self._resolve_options(pixels_per_minute, compact)
        normalized = self._normalize(events)
        frame = events_frame(normalized)

        week_start = week_start_for(anchor_date)
        week_end = week_start + timedelta(days=6)

        days: list[DayLayout] = []
        for offset in range(7):
            day_date = week_start + timedelta(days=offset)
            days.append(self._serialize_day(day_date, normalized, frame, scale, compact_value))

        return WeekLayout(week_start=week_start, week_end=week_end, days=days)

    def health(self) -> HealthResponse:
        with self._lock:
            entries = len(self._cache)
        return HealthResponse(
            status="ok",
            timezone=self._settings.timezone,
            cache_entries=entries,
            cache_max_entries=self._cache.max_entries,
        )
