"""Parser for lecture time strings such as "월4 수3"."""

import re

from .models import DAY_LABELS, LectureSlot, TokenResult


# Period 0 starts at 07:30, each period lasts 90 minutes
PERIOD_START_MINUTES = 7 * 60 + 30
PERIOD_DURATION_MINUTES = 90

_DAY_INDEX = {label: index for index, label in enumerate(DAY_LABELS)}
_TOKEN_PATTERN = re.compile(r"^(" + "|".join(DAY_LABELS) + r")(\d+)$", re.ASCII)


def period_to_minutes(period: int) -> tuple[int, int]:
    """Return the (start, end) minutes of a zero-based data-entry period."""
    start = PERIOD_START_MINUTES + period * PERIOD_DURATION_MINUTES
    return start, start + PERIOD_DURATION_MINUTES


def parse_tokens(raw: str) -> list[TokenResult]:
    """Parse every whitespace-separated token of a lecture time string.

    Args:
        raw: Lecture time string, e.g. "화7 화8 화9".

    Returns:
        One result per token in input order. Tokens that are not a day
        label followed by digits are kept with slot=None.
    """
    results: list[TokenResult] = []

    for token in (raw or "").split():
        match = _TOKEN_PATTERN.match(token)
        if not match:
            results.append(TokenResult(token))
            continue

        try:
            period = int(match.group(2))
        except ValueError:
            # Digit run longer than the int conversion limit
            results.append(TokenResult(token))
            continue

        start, end = period_to_minutes(period)
        slot = LectureSlot(
            day=_DAY_INDEX[match.group(1)],
            start_minutes=start,
            end_minutes=end,
        )
        results.append(TokenResult(token, slot))

    return results


def parse_lecture_time(raw: str) -> list[LectureSlot]:
    """Parse a lecture time string into slots, skipping malformed tokens.

    >>> parse_lecture_time("월4 수3")[0]
    LectureSlot(day=0, start_minutes=810, end_minutes=900)
    """
    return [result.slot for result in parse_tokens(raw) if result.slot is not None]
