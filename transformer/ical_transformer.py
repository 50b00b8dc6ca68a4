"""iCalendar transformer for timetable entries."""

import hashlib
from datetime import date, datetime, time, timedelta
from typing import Optional

from icalendar import Calendar, Event, vRecur

from timetable.consolidator import collect_slots, merge_consecutive_slots
from timetable.models import CourseEntry, SlotInput
from .base import BaseTransformer


class ICalTransformer(BaseTransformer):
    """Transformer that converts timetable entries to iCalendar format.

    Every consolidated interval (a double period counts once) becomes a
    weekly recurring event. Times are floating local times.
    """

    def __init__(self, start_date: date, end_date: date) -> None:
        """Initialize the iCalendar transformer.

        Args:
            start_date: First day of the semester.
            end_date: Last day of the semester.
        """
        self._calendar: Optional[Calendar] = None
        self._start_date = start_date
        self._end_date = end_date

    def _generate_uid(self, interval: SlotInput) -> str:
        """Generate a unique identifier for an interval.

        Args:
            interval: The consolidated interval.

        Returns:
            Unique identifier string.
        """
        unique_string = (
            f"{interval.entry.course_code}-{interval.entry.section}-"
            f"{interval.day}-{interval.start}-{self._start_date}"
        )
        return hashlib.md5(unique_string.encode()).hexdigest() + "@kw-timetable"

    def _find_first_occurrence(self, weekday: int) -> date:
        """Find the first date on or after the semester start with the given weekday."""
        days_ahead = weekday - self._start_date.weekday()
        if days_ahead < 0:
            days_ahead += 7

        return self._start_date + timedelta(days=days_ahead)

    @staticmethod
    def _to_datetime(day: date, minutes: int) -> datetime:
        """Combine a date with minutes since midnight; 24:00 is next day's midnight."""
        if minutes == 24 * 60:
            return datetime.combine(day + timedelta(days=1), time(0))
        return datetime.combine(day, time(minutes // 60, minutes % 60))

    def transform(self, entries: list[CourseEntry]) -> Calendar:
        """Transform timetable entries into iCalendar format.

        Args:
            entries: Course entries placed on the timetable.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//KW Timetable//kw-timetable//KO")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", "Timetable")

        intervals = merge_consecutive_slots(collect_slots(entries))

        for interval in sorted(intervals, key=lambda i: (i.day, i.start)):
            if interval.end > 24 * 60:
                print(f"Warning: Skipping interval past midnight: {interval.entry.title}")
                continue

            first_date = self._find_first_occurrence(interval.day)

            ical_event = Event()
            ical_event.add("uid", self._generate_uid(interval))
            ical_event.add("dtstart", self._to_datetime(first_date, interval.start))
            ical_event.add("dtend", self._to_datetime(first_date, interval.end))
            ical_event.add("dtstamp", datetime.now())

            # Summary format: [CODE-SECTION] Title
            entry = interval.entry
            if entry.is_custom:
                summary = entry.title
            elif entry.section:
                summary = f"[{entry.course_code}-{entry.section}] {entry.title}"
            else:
                summary = f"[{entry.course_code}] {entry.title}"
            ical_event.add("summary", summary)

            if entry.instructor:
                ical_event.add("description", entry.instructor)

            until_datetime = self._to_datetime(self._end_date, interval.end)
            rrule = vRecur({
                "freq": "weekly",
                "until": until_datetime
            })
            ical_event.add("rrule", rrule)

            self._calendar.add_component(ical_event)

        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
