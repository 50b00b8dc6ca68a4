"""JSON transformer exposing the computed grid layout."""

import json
from typing import Any, Optional

from timetable.layout import build_timetable
from timetable.models import CourseEntry, GridLayout, PositionedBlock, ViewState, format_minutes
from .base import BaseTransformer


class JsonTransformer(BaseTransformer):
    """Transformer that serializes the timetable grid for a presentation layer."""

    def __init__(self, view_state: Optional[ViewState] = None) -> None:
        """Initialize the JSON transformer.

        Args:
            view_state: Window and day overrides applied to the layout.
        """
        self._view_state = view_state or ViewState()
        self._document: Optional[dict[str, Any]] = None

    @staticmethod
    def _block_to_dict(positioned: PositionedBlock) -> dict[str, Any]:
        block = positioned.block
        return {
            "day": block.day,
            "start": format_minutes(block.start),
            "end": format_minutes(block.end),
            "topPercent": positioned.top_percent,
            "heightPercent": positioned.height_percent,
            "isConflict": block.is_conflict,
            "title": block.title,
            "entries": [
                {
                    "courseCode": entry.course_code,
                    "section": entry.section,
                    "title": entry.title,
                    "instructor": entry.instructor,
                }
                for entry in block.entries
            ],
        }

    def _layout_to_dict(self, layout: GridLayout) -> dict[str, Any]:
        return {
            "windowStart": format_minutes(layout.window_start),
            "windowEnd": format_minutes(layout.window_end),
            "days": list(layout.days),
            "blocks": [self._block_to_dict(positioned) for positioned in layout.blocks],
            "timeLabels": [
                {"time": format_minutes(m), "topPercent": layout.offset_percent(m)}
                for m in layout.time_labels
            ],
            "periodLabels": [
                {
                    "label": period.label,
                    "topPercent": layout.offset_percent(period.start),
                    "heightPercent": (period.end - period.start) / layout.total_minutes * 100,
                }
                for period in layout.period_labels
            ],
        }

    def transform(self, entries: list[CourseEntry]) -> dict[str, Any]:
        """Lay out the entries and convert the grid into a JSON-ready dict.

        Args:
            entries: Course entries placed on the timetable.

        Returns:
            Dictionary describing the grid.
        """
        self._document = self._layout_to_dict(build_timetable(entries, self._view_state))
        return self._document

    def save(self, output_path: str) -> None:
        """Save the grid document to a .json file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._document is None:
            raise RuntimeError("No layout data. Call transform() first.")

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self._document, f, ensure_ascii=False, indent=2)
