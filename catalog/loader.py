"""Loading and selecting catalog entries from local files."""

import json
from pathlib import Path

from timetable.models import CourseEntry
from .scraper import CatalogScraper


def load_catalog(path: str) -> list[CourseEntry]:
    """Load course entries from a JSON export or a saved HTML catalog page.

    Args:
        path: Path to a .json file holding a list of records, or to an
            .html/.htm page containing the catalog table.

    Returns:
        List of CourseEntry objects in file order.

    Raises:
        ValueError: If the file type is unsupported or the content is malformed.
    """
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    text = file_path.read_text(encoding="utf-8")

    if suffix in (".html", ".htm"):
        scraper = CatalogScraper()
        scraper.load_html(text)
        return scraper.parse_entries()

    if suffix != ".json":
        raise ValueError(f"Unsupported catalog format: '{suffix}'. Expected .json or .html")

    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid catalog JSON: {e}")

    if not isinstance(records, list):
        raise ValueError("Catalog JSON must contain a list of course records")

    return [CourseEntry.from_record(record) for record in records if isinstance(record, dict)]


def select_entries(catalog: list[CourseEntry], selectors: list[str]) -> list[CourseEntry]:
    """Pick catalog entries by "CODE" or "CODE:SECTION".

    A bare code selects every section of the course. Each entry is
    returned once, in selector order.

    Raises:
        ValueError: If a selector matches nothing.
    """
    selected: list[CourseEntry] = []

    for selector in selectors:
        code, _, section = selector.strip().partition(":")
        matches = [
            entry for entry in catalog
            if entry.course_code == code and (not section or entry.section == section)
        ]
        if not matches:
            raise ValueError(f"No catalog entry matches '{selector}'")

        for entry in matches:
            if entry not in selected:
                selected.append(entry)

    return selected
