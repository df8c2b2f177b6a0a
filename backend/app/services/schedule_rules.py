from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
import logging

from app.core.exceptions import InvalidTimeRangeError
from app.schemas.schedule import (
    DAY_ORDER,
    BlockValidation,
    ConflictScan,
    ConsolidatedRange,
    DayOfWeek,
    ScheduleBlock,
    ScheduleConflict,
    ScheduleOverview,
)
from app.services.schedule_time import blocks_overlap

logger = logging.getLogger(__name__)

MIN_CLASS_MINUTES = 30
MAX_CLASS_MINUTES = 240
NO_SCHEDULE_SUMMARY = "No schedule configured"


def _format_duration(minutes: int) -> str:
    if minutes >= 60 and minutes % 60 == 0:
        hours = minutes // 60
        return f"{hours} hour" if hours == 1 else f"{hours} hours"
    return f"{minutes} minutes"


def _ordered_blocks(blocks: Iterable[ScheduleBlock]) -> list[ScheduleBlock]:
    """Return the blocks as a list, refusing any that does not start before it ends."""
    checked = list(blocks)
    for block in checked:
        if block.start_minutes >= block.end_minutes:
            raise InvalidTimeRangeError(block.day.value, block.start_time, block.end_time)
    return checked


def blocks_by_day(blocks: Iterable[ScheduleBlock]) -> dict[DayOfWeek, list[ScheduleBlock]]:
    """Bucket blocks per day, keyed in Monday-to-Sunday order.

    Days without blocks are omitted. Within a day the caller's order is kept.
    """
    buckets: dict[DayOfWeek, list[ScheduleBlock]] = defaultdict(list)
    for block in blocks:
        buckets[block.day].append(block)
    return {day: buckets[day] for day in DAY_ORDER if day in buckets}


def find_conflicts(blocks: Sequence[ScheduleBlock]) -> ConflictScan:
    blocks = _ordered_blocks(blocks)
    conflicts: list[ScheduleConflict] = []

    # O(N^2) is fine: a course section has a handful of weekly blocks.
    n = len(blocks)
    for i in range(n):
        first = blocks[i]
        for j in range(i + 1, n):
            second = blocks[j]
            if blocks_overlap(first, second):
                conflicts.append(
                    ScheduleConflict(
                        block_a=first,
                        block_b=second,
                        message=(
                            f"Conflict on {first.day.value}: {first.label} overlaps {second.label}"
                        ),
                    )
                )

    if conflicts:
        logger.debug("Found %d schedule conflict(s) across %d block(s)", len(conflicts), n)
    return ConflictScan(has_conflicts=bool(conflicts), conflicts=conflicts)


def validate_new_block(
    candidate: ScheduleBlock,
    existing: Iterable[ScheduleBlock],
    *,
    min_minutes: int = MIN_CLASS_MINUTES,
    max_minutes: int = MAX_CLASS_MINUTES,
) -> BlockValidation:
    """Check a candidate block before it is added to a schedule.

    Checks run in order and stop at the first failure: time ordering, minimum
    duration, maximum duration, then overlap with each same-day block of
    ``existing`` in the order given. Failures are returned, never raised.
    """
    start = candidate.start_minutes
    end = candidate.end_minutes
    if start >= end:
        return _reject(candidate, "Start time must be before end time")

    duration = end - start
    if duration < min_minutes:
        return _reject(candidate, f"Minimum class duration is {_format_duration(min_minutes)}")
    if duration > max_minutes:
        return _reject(candidate, f"Maximum class duration is {_format_duration(max_minutes)}")

    for block in existing:
        if blocks_overlap(candidate, block):
            return _reject(candidate, f"This block overlaps {block.label} on {block.day.value}")

    return BlockValidation(valid=True)


def _reject(candidate: ScheduleBlock, error: str) -> BlockValidation:
    logger.debug("Rejected block %s %s: %s", candidate.day.value, candidate.label, error)
    return BlockValidation(valid=False, error=error)


def group_consecutive(blocks: Iterable[ScheduleBlock]) -> list[ConsolidatedRange]:
    """Merge blocks whose end and start times touch into display ranges.

    Overlapping blocks are not detected here; they simply open a new range.
    """
    ranges: list[ConsolidatedRange] = []

    for day, day_blocks in blocks_by_day(_ordered_blocks(blocks)).items():
        ordered = sorted(day_blocks, key=lambda block: block.start_minutes)
        current = ordered[0]
        start_time, end_time, end_minutes = current.start_time, current.end_time, current.end_minutes
        rooms = [current.room]

        for block in ordered[1:]:
            if block.start_minutes == end_minutes:
                end_time, end_minutes = block.end_time, block.end_minutes
                rooms.append(block.room)
                continue
            ranges.append(ConsolidatedRange(day=day, start_time=start_time, end_time=end_time, rooms=rooms))
            start_time, end_time, end_minutes = block.start_time, block.end_time, block.end_minutes
            rooms = [block.room]

        ranges.append(ConsolidatedRange(day=day, start_time=start_time, end_time=end_time, rooms=rooms))

    return ranges


def weekly_hours(blocks: Iterable[ScheduleBlock]) -> float:
    total_minutes = sum(block.duration_minutes for block in _ordered_blocks(blocks))
    # Tenths of an hour, rounded half-up: floor(minutes / 6 + 0.5).
    tenths = (total_minutes + 3) // 6
    return tenths / 10


def class_days(blocks: Iterable[ScheduleBlock]) -> list[DayOfWeek]:
    present = {block.day for block in _ordered_blocks(blocks)}
    return [day for day in DAY_ORDER if day in present]


def summarize_schedule(blocks: Iterable[ScheduleBlock]) -> str:
    segments: list[str] = []
    for day, day_blocks in blocks_by_day(_ordered_blocks(blocks)).items():
        ordered = sorted(day_blocks, key=lambda block: block.start_minutes)
        segments.append(f"{day.value}: {', '.join(block.label for block in ordered)}")
    if not segments:
        return NO_SCHEDULE_SUMMARY
    return " | ".join(segments)


def build_overview(blocks: Sequence[ScheduleBlock]) -> ScheduleOverview:
    scan = find_conflicts(blocks)
    return ScheduleOverview(
        summary=summarize_schedule(blocks),
        weekly_hours=weekly_hours(blocks),
        class_days=class_days(blocks),
        ranges=group_consecutive(blocks),
        has_conflicts=scan.has_conflicts,
        conflicts=scan.conflicts,
    )
