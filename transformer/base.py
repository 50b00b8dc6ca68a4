"""Abstract base class for timetable transformers."""

from abc import ABC, abstractmethod
from typing import Any

from timetable.models import CourseEntry


class BaseTransformer(ABC):
    """Abstract base class defining the interface for timetable transformers.

    Extend this class to implement exporters for different output formats
    (e.g., iCalendar, JSON layout for a front end, etc.).
    """

    @abstractmethod
    def transform(self, entries: list[CourseEntry]) -> Any:
        """Transform the displayed course entries into the target format.

        Args:
            entries: Course entries placed on the timetable.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass
