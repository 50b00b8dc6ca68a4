"""Merging of parsed slots into display blocks.

Two passes run over the slots of every displayed entry:

1. Consecutive periods of the same course section on the same day are
   joined into one interval (a "double period" like 화2 + 화3).
2. Intervals on the same day whose time ranges overlap are grouped into
   a single block, regardless of course. A block with more than one
   distinct course section is a scheduling conflict.
"""

from dataclasses import dataclass, field

from .models import CourseEntry, DisplayBlock, SlotInput
from .parser import parse_lecture_time


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Return True if two half-open ranges share at least one minute.

    Ranges that only touch at an endpoint do not overlap.
    """
    return a_start < b_end and b_start < a_end


def collect_slots(entries: list[CourseEntry]) -> list[SlotInput]:
    """Parse the lecture time of every entry into a flat slot list."""
    slots: list[SlotInput] = []

    for entry in entries:
        for slot in parse_lecture_time(entry.schedule):
            slots.append(SlotInput(
                entry=entry,
                day=slot.day,
                start=slot.start_minutes,
                end=slot.end_minutes,
            ))

    return slots


def merge_consecutive_slots(slots: list[SlotInput]) -> list[SlotInput]:
    """Join back-to-back slots of the same course section and day.

    Only exact adjacency (end == next start) is merged; any gap keeps
    the slots apart.
    """
    by_entry_day: dict[tuple[str, str, int], list[SlotInput]] = {}
    for slot in slots:
        key = (slot.entry.course_code, slot.entry.section, slot.day)
        by_entry_day.setdefault(key, []).append(slot)

    merged: list[SlotInput] = []
    for group in by_entry_day.values():
        group = sorted(group, key=lambda s: s.start)
        first = group[0]
        run_start, run_end = first.start, first.end

        for slot in group[1:]:
            if slot.start == run_end:
                run_end = slot.end
            else:
                merged.append(SlotInput(first.entry, first.day, run_start, run_end))
                run_start, run_end = slot.start, slot.end

        merged.append(SlotInput(first.entry, first.day, run_start, run_end))

    return merged


@dataclass
class _Group:
    start: int
    end: int
    members: list[SlotInput] = field(default_factory=list)


class _GroupArena:
    """Overlap groups of one day, addressed by integer handle.

    A group absorbed into another keeps its slot in the arena but points
    at its new owner through ``parent``; only root handles are live.
    """

    def __init__(self) -> None:
        self._groups: list[_Group] = []
        self._parent: list[int] = []

    def create(self, slot: SlotInput) -> int:
        handle = len(self._groups)
        self._groups.append(_Group(slot.start, slot.end, [slot]))
        self._parent.append(handle)
        return handle

    def find(self, handle: int) -> int:
        while self._parent[handle] != handle:
            self._parent[handle] = self._parent[self._parent[handle]]
            handle = self._parent[handle]
        return handle

    def roots(self) -> list[int]:
        """Live handles in creation order."""
        return [h for h in range(len(self._groups)) if self._parent[h] == h]

    def group(self, handle: int) -> _Group:
        return self._groups[self.find(handle)]

    def add(self, handle: int, slot: SlotInput) -> None:
        group = self.group(handle)
        group.members.append(slot)
        group.start = min(group.start, slot.start)
        group.end = max(group.end, slot.end)

    def absorb(self, into: int, other: int) -> None:
        """Move every member of ``other`` into ``into``."""
        into, other = self.find(into), self.find(other)
        if into == other:
            return

        target, source = self._groups[into], self._groups[other]
        target.members.extend(source.members)
        target.start = min(target.start, source.start)
        target.end = max(target.end, source.end)
        source.members = []
        self._parent[other] = into


def _distinct_entries(members: list[SlotInput]) -> tuple[CourseEntry, ...]:
    seen: set[tuple[str, str]] = set()
    entries: list[CourseEntry] = []

    for member in members:
        if member.entry.key not in seen:
            seen.add(member.entry.key)
            entries.append(member.entry)

    return tuple(entries)


def merge_overlapping_slots(slots: list[SlotInput]) -> list[DisplayBlock]:
    """Group overlapping intervals of each day into display blocks.

    Overlap is resolved transitively: if A overlaps B and B overlaps C,
    all three end up in one block even when A and C are disjoint.

    Returns:
        Blocks ordered by day, then by start time.
    """
    by_day: dict[int, list[SlotInput]] = {}
    for slot in slots:
        by_day.setdefault(slot.day, []).append(slot)

    blocks: list[DisplayBlock] = []
    for day in sorted(by_day):
        arena = _GroupArena()

        for slot in sorted(by_day[day], key=lambda s: s.start):
            matching = [
                handle for handle in arena.roots()
                if overlaps(slot.start, slot.end, arena.group(handle).start, arena.group(handle).end)
            ]
            if not matching:
                arena.create(slot)
                continue

            first = matching[0]
            arena.add(first, slot)
            for other in matching[1:]:
                arena.absorb(first, other)

        for handle in arena.roots():
            group = arena.group(handle)
            blocks.append(DisplayBlock(
                day=day,
                start=group.start,
                end=group.end,
                entries=_distinct_entries(group.members),
            ))

    blocks.sort(key=lambda b: (b.day, b.start))
    return blocks


def consolidate(slots: list[SlotInput]) -> list[DisplayBlock]:
    """Run both merge passes over a flat slot list."""
    return merge_overlapping_slots(merge_consecutive_slots(slots))
