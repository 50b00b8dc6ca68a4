"""Data models for course entries and timetable geometry."""

import re
import uuid
from dataclasses import dataclass, field
from typing import Optional


DAY_LABELS = ("월", "화", "수", "목", "금", "토", "일")

# Catalog record label -> CourseEntry attribute
RECORD_FIELDS = {
    "구분": "category",
    "학정번호": "course_code",
    "과목명": "title",
    "분반": "section",
    "이수": "completion",
    "학점": "credits",
    "시수": "hours",
    "담당교수": "instructor",
    "강의시간": "schedule",
    "강의유형": "lecture_type",
}

CUSTOM_CODE_PREFIX = "custom-"

_CLOCK_PATTERN = re.compile(r"^\s*(\d{1,2})\s*(?::\s*(\d{0,2})\s*)?$", re.ASCII)


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as HH:MM."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_clock(value: str) -> Optional[int]:
    """Parse an HH:MM clock string into minutes since midnight.

    Returns:
        Minutes since midnight, or None if the string is not a clock time.
        A missing minute part counts as zero ("9" -> 540).
    """
    match = _CLOCK_PATTERN.match(value or "")
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    return hours * 60 + minutes


@dataclass(frozen=True)
class CourseEntry:
    """A single course offering from the catalog."""

    course_code: str
    section: str = ""
    title: str = ""
    instructor: str = ""
    credits: str = ""
    category: str = ""
    completion: str = ""  # 전필, 전선, 교양 ...
    hours: str = ""
    lecture_type: str = ""
    schedule: str = ""  # raw lecture time, e.g. "월4 수3"

    @property
    def key(self) -> tuple[str, str]:
        """Identity used when grouping slots: (course code, section)."""
        return (self.course_code, self.section)

    @property
    def credit_value(self) -> float:
        try:
            return float(self.credits)
        except ValueError:
            return 0.0

    @property
    def is_custom(self) -> bool:
        return self.course_code.startswith(CUSTOM_CODE_PREFIX)

    @classmethod
    def from_record(cls, record: dict) -> "CourseEntry":
        """Build an entry from a catalog record keyed by Korean labels.

        Unknown labels are ignored and missing ones default to "".
        """
        values = {
            attr: str(record.get(label) or "").strip()
            for label, attr in RECORD_FIELDS.items()
        }
        return cls(**values)

    @classmethod
    def custom(cls, title: str, schedule: str = "", credits: str = "") -> "CourseEntry":
        """Create a user-defined entry that is not part of the catalog."""
        return cls(
            course_code=f"{CUSTOM_CODE_PREFIX}{uuid.uuid4().hex[:12]}",
            title=title.strip(),
            credits=credits.strip(),
            schedule=schedule.strip(),
        )


def total_credits(entries: list[CourseEntry]) -> float:
    """Sum credit values, counting non-numeric credits as zero."""
    return sum(entry.credit_value for entry in entries)


@dataclass(frozen=True)
class LectureSlot:
    """One weekly class meeting: a half-open [start, end) minute range."""

    day: int  # 0-6: Monday-Sunday
    start_minutes: int
    end_minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.day <= 6:
            raise ValueError(f"Day must be 0-6 (Mon-Sun), got {self.day}")
        if self.start_minutes >= self.end_minutes:
            raise ValueError("Start time must be before end time")


@dataclass(frozen=True)
class TokenResult:
    """Outcome of parsing one schedule token.

    slot is None when the token was ignored as malformed.
    """

    token: str
    slot: Optional[LectureSlot] = None

    @property
    def ignored(self) -> bool:
        return self.slot is None


@dataclass(frozen=True)
class SlotInput:
    """A time range on one day owned by a course entry.

    Used both for raw parsed slots and for consolidated intervals.
    """

    entry: CourseEntry
    day: int
    start: int
    end: int


@dataclass(frozen=True)
class DisplayBlock:
    """Union of overlapping intervals on one day, possibly from several courses."""

    day: int
    start: int
    end: int
    entries: tuple[CourseEntry, ...]

    @property
    def is_conflict(self) -> bool:
        return len(self.entries) > 1

    @property
    def title(self) -> str:
        return " / ".join(entry.title for entry in self.entries)

    @property
    def time_range(self) -> str:
        return f"{format_minutes(self.start)}–{format_minutes(self.end)}"


@dataclass(frozen=True)
class ViewState:
    """User overrides for the visible window and day set.

    Any field left as None falls back to a data-derived default:
    - custom_start / custom_end: HH:MM strings; unparseable values count
      as the default start (09:00).
    - included_days: day indices to show; defaults to Monday-Friday plus
      every day that has a slot.
    """

    custom_start: Optional[str] = None
    custom_end: Optional[str] = None
    included_days: Optional[frozenset[int]] = None


@dataclass(frozen=True)
class PositionedBlock:
    """A display block with its vertical position inside the grid."""

    block: DisplayBlock
    top_percent: float
    height_percent: float

    @property
    def day(self) -> int:
        return self.block.day

    @property
    def is_conflict(self) -> bool:
        return self.block.is_conflict


@dataclass(frozen=True)
class PeriodLabel:
    """A display period clipped to the visible window."""

    period: int
    start: int
    end: int

    @property
    def label(self) -> str:
        return f"{self.period}교시"


@dataclass(frozen=True)
class GridLayout:
    """Render-ready timetable geometry."""

    window_start: int
    window_end: int
    days: tuple[int, ...]
    blocks: tuple[PositionedBlock, ...] = field(default_factory=tuple)
    time_labels: tuple[int, ...] = field(default_factory=tuple)
    period_labels: tuple[PeriodLabel, ...] = field(default_factory=tuple)

    @property
    def total_minutes(self) -> int:
        return max(1, self.window_end - self.window_start)

    def offset_percent(self, minutes: int) -> float:
        """Vertical offset of a clock time relative to the window start."""
        return (minutes - self.window_start) / self.total_minutes * 100

    def blocks_for_day(self, day: int) -> list[PositionedBlock]:
        return [positioned for positioned in self.blocks if positioned.day == day]
