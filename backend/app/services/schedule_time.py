from __future__ import annotations

import re

from app.core.exceptions import InvalidTimeFormatError

MINUTES_PER_DAY = 24 * 60
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def time_to_minutes(value: str) -> int:
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise InvalidTimeFormatError(value)
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < MINUTES_PER_DAY:
        raise InvalidTimeFormatError(value)
    hours, minutes = divmod(value, 60)
    return f"{hours:02d}:{minutes:02d}"


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Return True when two same-day minute ranges share any instant.

    Ranges that only touch (``end_a == start_b``) do not overlap; contiguous
    blocks are merged later rather than reported.
    """
    return not (end_a <= start_b or end_b <= start_a)


def blocks_overlap(first, second) -> bool:
    if first.day != second.day:
        return False
    return intervals_overlap(
        first.start_minutes,
        first.end_minutes,
        second.start_minutes,
        second.end_minutes,
    )
