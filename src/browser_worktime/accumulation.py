"""Sum up the time spent in consecutive runs of presence records."""

from __future__ import annotations

from datetime import timedelta
from typing import Sequence

from .models import ClassifiedRecord, DayWindow, Label


def accumulate(window: DayWindow) -> timedelta:
    """Return the inferred working time for a single day.

    Each maximal run of presence records counts from its earliest to its
    latest timestamp. The absence run after it counts nothing. Days without
    records or without resolved work bounds yield zero.
    """
    start = window.start_of_work
    end = window.end_of_work
    if start is None or end is None or not window.records:
        return timedelta(0)

    # Only matches when start > end, which the resolver never produces.
    records = [
        record
        for record in window.records
        if not (record.timestamp < start and record.timestamp > end)
    ]

    total_seconds = 0.0
    cursor = 0
    while cursor < len(records):
        run_end = _run_end(records, cursor, Label.PRESENCE)
        absence_end = _run_end(records, run_end, Label.ABSENCE)
        if run_end > cursor:
            run = records[cursor:run_end]
            first = min(record.timestamp for record in run)
            last = max(record.timestamp for record in run)
            total_seconds += (last - first).total_seconds()
        cursor = absence_end
    return timedelta(seconds=total_seconds)


def _run_end(records: Sequence[ClassifiedRecord], cursor: int, label: Label) -> int:
    while cursor < len(records) and records[cursor].label is label:
        cursor += 1
    return cursor
