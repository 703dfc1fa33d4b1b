from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

from .models import CalendarEvent
from .overlap import events_overlap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlapGroup:
    cluster_id: int
    events: tuple[CalendarEvent, ...]


class DisjointSet:
    """Union-find over integer slots with path compression and union by size."""

    def __init__(self) -> None:
        self._parent: list[int] = []
        self._size: list[int] = []

    def __len__(self) -> int:
        return len(self._parent)

    def make_set(self) -> int:
        slot = len(self._parent)
        self._parent.append(slot)
        self._size.append(1)
        return slot

    def find(self, slot: int) -> int:
        root = slot
        while self._parent[root] != root:
            root = self._parent[root]

        while self._parent[slot] != root:
            self._parent[slot], slot = root, self._parent[slot]

        return root

    def union(self, slot_a: int, slot_b: int) -> int:
        root_a = self.find(slot_a)
        root_b = self.find(slot_b)
        if root_a == root_b:
            return root_a

        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a

        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]
        return root_a

    def size_of(self, slot: int) -> int:
        return self._size[self.find(slot)]


def build_clusters(events: Sequence[CalendarEvent]) -> list[OverlapGroup]:
    """Partition events into connected components of the overlap graph.

    Events are processed in start order. Each one either opens a new set, joins
    the single set it overlaps, or bridges several sets, which are then merged.
    Groups are numbered from 0 in order of their earliest event and list their
    members in start order.
    """
    if not events:
        return []

    ordered = sorted(events, key=lambda item: item.start_time)
    sets = DisjointSet()

    for idx, event in enumerate(ordered):
        slot = sets.make_set()
        touched_roots = {sets.find(prev) for prev in range(idx) if events_overlap(ordered[prev], event)}

        if len(touched_roots) > 1:
            logger.debug("Event %s bridges %d clusters", event.id, len(touched_roots))

        for root in sorted(touched_roots):
            sets.union(root, slot)

    members: dict[int, list[CalendarEvent]] = {}
    for idx, event in enumerate(ordered):
        members.setdefault(sets.find(idx), []).append(event)

    # dict preserves first-seen order, which is the earliest member of each root
    return [
        OverlapGroup(cluster_id=cluster_id, events=tuple(group_events))
        for cluster_id, group_events in enumerate(members.values())
    ]
