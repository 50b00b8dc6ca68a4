"""Timetable layout engine: parsing, consolidation and grid geometry."""

from .consolidator import consolidate, collect_slots
from .layout import build_layout, build_timetable
from .models import CourseEntry, DisplayBlock, GridLayout, LectureSlot, ViewState
from .parser import parse_lecture_time

__all__ = [
    "CourseEntry",
    "DisplayBlock",
    "GridLayout",
    "LectureSlot",
    "ViewState",
    "build_layout",
    "build_timetable",
    "collect_slots",
    "consolidate",
    "parse_lecture_time",
]
