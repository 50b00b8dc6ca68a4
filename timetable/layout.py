"""Grid layout for consolidated timetable blocks."""

from typing import Optional

from .consolidator import collect_slots, consolidate
from .models import (
    CourseEntry,
    DisplayBlock,
    GridLayout,
    PeriodLabel,
    PositionedBlock,
    ViewState,
    parse_clock,
)


DEFAULT_START_MINUTES = 9 * 60
DEFAULT_END_MINUTES = 18 * 60
DEFAULT_DAYS = (0, 1, 2, 3, 4)  # Monday-Friday

LABEL_STEP_MINUTES = 30

# Display period 1 = 09:00-10:30, one-based
DISPLAY_PERIOD_START_MINUTES = 9 * 60
DISPLAY_PERIOD_DURATION = 90
DISPLAY_PERIOD_COUNT = 6


def _clock_or_default(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    minutes = parse_clock(value)
    return DEFAULT_START_MINUTES if minutes is None else minutes


def resolve_window(blocks: list[DisplayBlock], view_state: ViewState) -> tuple[int, int]:
    """Determine the visible (start, end) minutes.

    Overrides win. Without them the window spans every block, widened to
    cover 09:00-18:00; with no blocks it is exactly 09:00-18:00.
    """
    min_start = DEFAULT_START_MINUTES
    max_end = DEFAULT_END_MINUTES
    for block in blocks:
        min_start = min(min_start, block.start)
        max_end = max(max_end, block.end)

    user_start = _clock_or_default(view_state.custom_start)
    user_end = _clock_or_default(view_state.custom_end)

    start = user_start if user_start is not None else min_start
    end = user_end if user_end is not None else max_end
    return start, end


def resolve_days(blocks: list[DisplayBlock], view_state: ViewState) -> tuple[int, ...]:
    """Determine the visible day columns in ascending order."""
    if view_state.included_days is not None:
        return tuple(sorted(view_state.included_days))

    days = set(DEFAULT_DAYS)
    days.update(block.day for block in blocks)
    return tuple(sorted(days))


def position_block(
    block: DisplayBlock,
    window_start: int,
    window_end: int
) -> PositionedBlock:
    """Map a block onto the window as top/height percentages.

    The block is clipped to the window first; both percentages stay
    within [0, 100].
    """
    total = max(1, window_end - window_start)

    clipped_start = max(block.start, window_start)
    clipped_end = min(block.end, window_end)

    top = min(100.0, max(0.0, (clipped_start - window_start) / total * 100))
    bottom = min(100.0, max(0.0, (clipped_end - window_start) / total * 100))

    return PositionedBlock(
        block=block,
        top_percent=top,
        height_percent=max(0.0, bottom - top),
    )


def time_labels(window_start: int, window_end: int) -> list[int]:
    """Clock ticks every 30 minutes, always ending on the window end."""
    labels = list(range(window_start, window_end + 1, LABEL_STEP_MINUTES))
    if labels and labels[-1] < window_end:
        labels.append(window_end)
    return labels


def period_labels(window_start: int, window_end: int) -> list[PeriodLabel]:
    """Display periods that intersect the window, clipped to it."""
    labels: list[PeriodLabel] = []

    for period in range(1, DISPLAY_PERIOD_COUNT + 1):
        start = DISPLAY_PERIOD_START_MINUTES + (period - 1) * DISPLAY_PERIOD_DURATION
        end = start + DISPLAY_PERIOD_DURATION
        if end > window_start and start < window_end:
            labels.append(PeriodLabel(
                period=period,
                start=max(start, window_start),
                end=min(end, window_end),
            ))

    return labels


def build_layout(
    blocks: list[DisplayBlock],
    view_state: Optional[ViewState] = None
) -> GridLayout:
    """Compute the grid geometry for a set of display blocks.

    Args:
        blocks: Output of consolidate().
        view_state: Optional window and day overrides.

    Returns:
        Window bounds, day columns, positioned blocks, time ticks and
        period labels. Blocks outside the window or on hidden days are
        left out.
    """
    view_state = view_state or ViewState()

    window_start, window_end = resolve_window(blocks, view_state)
    days = resolve_days(blocks, view_state)

    positioned: list[PositionedBlock] = []
    for block in blocks:
        if block.day not in days:
            continue
        candidate = position_block(block, window_start, window_end)
        if candidate.height_percent > 0:
            positioned.append(candidate)

    return GridLayout(
        window_start=window_start,
        window_end=window_end,
        days=days,
        blocks=tuple(positioned),
        time_labels=tuple(time_labels(window_start, window_end)),
        period_labels=tuple(period_labels(window_start, window_end)),
    )


def build_timetable(
    entries: list[CourseEntry],
    view_state: Optional[ViewState] = None
) -> GridLayout:
    """Run the whole pipeline: parse, consolidate and lay out."""
    return build_layout(consolidate(collect_slots(entries)), view_state)
