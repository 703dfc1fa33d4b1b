from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    timezone: str
    allowed_origins: list[str]
    pixels_per_minute: float
    min_event_height_px: float
    cache_max_entries: int
    compact_range: bool
    log_level: str


def _parse_origins(raw: str) -> list[str]:
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["http://localhost:5173"]


def _parse_bool(raw: str, default: bool) -> bool:
    normalized = raw.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


@lru_cache
def get_settings() -> Settings:
    try:
        pixels_per_minute = float(os.getenv("PIXELS_PER_MINUTE", "1.0"))
    except ValueError:
        pixels_per_minute = 1.0
    if pixels_per_minute <= 0:
        pixels_per_minute = 1.0

    try:
        min_event_height_px = float(os.getenv("MIN_EVENT_HEIGHT_PX", "20"))
    except ValueError:
        min_event_height_px = 20.0

    try:
        cache_max_entries = int(os.getenv("LAYOUT_CACHE_MAX_ENTRIES", "256"))
    except ValueError:
        cache_max_entries = 256

    timezone = os.getenv("TZ", "Europe/Warsaw")
    allowed_origins = _parse_origins(os.getenv("ALLOWED_ORIGINS", "http://localhost:5173"))

    return Settings(
        timezone=timezone,
        allowed_origins=allowed_origins,
        pixels_per_minute=pixels_per_minute,
        min_event_height_px=max(min_event_height_px, 0.0),
        cache_max_entries=max(cache_max_entries, 1),
        compact_range=_parse_bool(os.getenv("COMPACT_RANGE", "true"), default=True),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
