from __future__ import annotations

from collections import OrderedDict
import hashlib
import logging
from typing import Sequence

from .layout import calculate_event_layout
from .models import CalendarEvent, LayoutedEvent

logger = logging.getLogger(__name__)


def layout_cache_key(events: Sequence[CalendarEvent]) -> str:
    """Content key over ids, timestamps and the all-day flag, in input order."""
    digest = hashlib.sha256()
    for event in events:
        chunk = "|".join(
            [
                event.id,
                event.start_time.isoformat(),
                event.end_time.isoformat(),
                "1" if event.all_day else "0",
            ]
        )
        digest.update(chunk.encode("utf-8"))
        digest.update(b"\n")
    return digest.hexdigest()


class LayoutCache:
    """Memoizes layouts under a caller-chosen key.

    The cache never inspects ``events`` on a hit, so a key must change whenever
    the event set does. :func:`layout_cache_key` derives such a key from content.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, tuple[LayoutedEvent, ...]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def max_entries(self) -> int | None:
        return self._max_entries

    def get_or_compute(self, key: str, events: Sequence[CalendarEvent]) -> list[LayoutedEvent]:
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug("Layout cache hit for %s", key)
            return list(cached)

        logger.debug("Layout cache miss for %s (%d events)", key, len(events))
        layout = tuple(calculate_event_layout(events))
        self._entries[key] = layout

        if self._max_entries is not None:
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted layout cache entry %s", evicted)

        return list(layout)

    def clear(self) -> None:
        self._entries.clear()
