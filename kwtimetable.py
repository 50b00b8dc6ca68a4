#!/usr/bin/env python3
"""Course catalog to weekly timetable.

Loads a course catalog, picks the courses to display and lays them out
as a conflict-aware weekly grid. The grid can be exported as JSON for a
front end or as an iCalendar (.ics) file.
"""

import argparse
import sys
from datetime import date, datetime

from catalog import CatalogScraper, load_catalog, select_entries
from timetable import CourseEntry, ViewState, build_timetable
from timetable.models import DAY_LABELS, format_minutes, total_credits
from transformer import ICalTransformer, JsonTransformer


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def parse_days(days_str: str) -> frozenset[int]:
    """Parse a comma-separated list of day labels, e.g. "월,수,금"."""
    days = set()
    for label in days_str.split(","):
        label = label.strip()
        if label not in DAY_LABELS:
            raise argparse.ArgumentTypeError(
                f"Invalid day: '{label}'. Expected one of {' '.join(DAY_LABELS)}."
            )
        days.add(DAY_LABELS.index(label))
    return frozenset(days)


def parse_custom(value: str) -> CourseEntry:
    """Parse a custom entry in TITLE=SCHEDULE[=CREDITS] form."""
    title, _, rest = value.partition("=")
    schedule, _, credits = rest.partition("=")
    if not title.strip():
        raise argparse.ArgumentTypeError("Custom entry needs a title.")
    return CourseEntry.custom(title, schedule, credits)


def get_default_end_date() -> date:
    """Calculate default end date based on current month.

    Returns June 30 if current month is January-June,
    January 31 of next year if current month is July-December.
    """
    today = date.today()

    if today.month < 7:
        return date(today.year, 6, 30)
    else:
        return date(today.year + 1, 1, 31)


def print_layout(entries: list[CourseEntry], view_state: ViewState) -> None:
    """Print a per-day summary of the laid-out timetable."""
    layout = build_timetable(entries, view_state)

    print(
        f"Window: {format_minutes(layout.window_start)}-{format_minutes(layout.window_end)}, "
        f"days: {' '.join(DAY_LABELS[day] for day in layout.days)}"
    )

    for day in layout.days:
        for positioned in layout.blocks_for_day(day):
            block = positioned.block
            marker = "!" if block.is_conflict else " "
            print(f" {marker} {DAY_LABELS[day]} {block.time_range}  {block.title}")

    conflicts = sum(1 for positioned in layout.blocks if positioned.is_conflict)
    if conflicts:
        print(f"Warning: {conflicts} time conflict(s) found.")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Lay out selected catalog courses as a weekly timetable.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 kwtimetable.py --catalog timetable.json --select 0000-1-3092-01:01 --select 0000-2-4512-02
  python3 kwtimetable.py --catalog timetable.json --select H030-4-0846-01 --custom "Club=금5 금6" --days 월,화,수,목,금,토
  python3 kwtimetable.py --catalog catalog.html --select H030-4-0846-01 --ics my_timetable.ics --start-date 2026-03-02
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--catalog",
        help="Path to a catalog file (.json records or saved .html page)"
    )
    source.add_argument(
        "--url",
        help="URL of the catalog page to scrape"
    )

    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="CODE[:SECTION]",
        help="Course to place on the timetable (repeatable)"
    )

    parser.add_argument(
        "--custom",
        action="append",
        type=parse_custom,
        default=[],
        metavar="TITLE=SCHEDULE[=CREDITS]",
        help='Add an entry that is not in the catalog, e.g. "Club=금5 금6" (repeatable)'
    )

    parser.add_argument("--start", help="Start of the visible window (HH:MM)")
    parser.add_argument("--end", help="End of the visible window (HH:MM)")

    parser.add_argument(
        "--days",
        type=parse_days,
        default=None,
        help="Comma-separated days to show, e.g. 월,화,수,목,금,토. "
             "Default: Monday-Friday plus any day with a class"
    )

    parser.add_argument(
        "--json",
        dest="json_output",
        help="Write the grid layout to this JSON file"
    )

    parser.add_argument(
        "--ics",
        help="Write the timetable to this iCalendar file"
    )

    parser.add_argument(
        "--start-date",
        type=parse_date,
        default=None,
        help="First day of the semester for --ics (format: YYYY-MM-DD). Default: today"
    )

    parser.add_argument(
        "--end-date",
        type=parse_date,
        default=None,
        help="Last day of the semester for --ics (format: YYYY-MM-DD). "
             "Default: June 30 (spring semester) or January 31 (fall semester)"
    )

    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Show the browser window while scraping --url"
    )

    args = parser.parse_args()

    start_date = args.start_date if args.start_date else date.today()
    end_date = args.end_date if args.end_date else get_default_end_date()

    if args.ics and start_date >= end_date:
        print("Error: Start date must be before end date.", file=sys.stderr)
        sys.exit(1)

    view_state = ViewState(
        custom_start=args.start,
        custom_end=args.end,
        included_days=args.days,
    )

    try:
        if args.url:
            print(f"Fetching catalog from: {args.url}")
            scraper = CatalogScraper(headless=not args.no_headless)
            scraper.fetch_catalog(args.url)
            catalog = scraper.parse_entries()
        else:
            catalog = load_catalog(args.catalog)

        print(f"Found {len(catalog)} catalog entries.")

        entries = select_entries(catalog, args.select) + args.custom

        if not entries:
            print("Warning: No courses selected. The timetable will be empty.")

        print(f"Selected {len(entries)} courses, {total_credits(entries):g} credits.")
        print_layout(entries, view_state)

        if args.json_output:
            transformer = JsonTransformer(view_state)
            transformer.transform(entries)
            transformer.save(args.json_output)
            print(f"Layout saved to: {args.json_output}")

        if args.ics:
            output_path = args.ics
            if not output_path.lower().endswith(".ics"):
                output_path = f"{output_path}.ics"

            transformer = ICalTransformer(start_date, end_date)
            transformer.transform(entries)
            transformer.save(output_path)
            print(f"Calendar saved to: {output_path}")
            print(f"Period: {start_date} to {end_date}")

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
