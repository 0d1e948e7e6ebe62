"""Group classified records by calendar day and resolve work bounds."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Sequence

from .config import InferenceSettings
from .models import ClassifiedRecord, DayWindow

logger = logging.getLogger(__name__)


class NoHistoryDataError(ValueError):
    """Raised when there are no records to derive a day range from."""


def day_range(records: Sequence[ClassifiedRecord]) -> tuple[date, date]:
    """Return the first and last calendar day covered by ``records``."""
    if not records:
        raise NoHistoryDataError("No history records to evaluate.")
    days = [record.day for record in records]
    return min(days), max(days)


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def resolve_start_of_work(
    records: Sequence[ClassifiedRecord], settings: Optional[InferenceSettings] = None
) -> Optional[datetime]:
    """First presence record at or after the configured start of the work day."""
    work_day_start = (settings or InferenceSettings()).work_day_start
    for record in records:
        if record.is_presence and record.timestamp.time() >= work_day_start:
            return record.timestamp
    return None


def resolve_end_of_work(records: Sequence[ClassifiedRecord]) -> Optional[datetime]:
    """Last presence record of the day, without any time-of-day floor."""
    for record in reversed(records):
        if record.is_presence:
            return record.timestamp
    return None


def partition(
    records: Sequence[ClassifiedRecord],
    start: Optional[date] = None,
    end: Optional[date] = None,
    settings: Optional[InferenceSettings] = None,
) -> list[DayWindow]:
    """Build one :class:`DayWindow` for every day in ``[start, end]``.

    Omitted bounds default to the range covered by ``records``. Days without
    records are still returned, with empty records and no work bounds.
    """
    first_day, last_day = day_range(records)
    start = start or first_day
    end = end or last_day
    if end < start:
        raise ValueError("end date must be on or after start date")

    by_day: defaultdict[date, list[ClassifiedRecord]] = defaultdict(list)
    for record in records:
        if start <= record.day <= end:
            by_day[record.day].append(record)

    windows: list[DayWindow] = []
    for day in iter_days(start, end):
        day_records = tuple(by_day.get(day, ()))
        window = DayWindow(
            day=day,
            records=day_records,
            start_of_work=resolve_start_of_work(day_records, settings),
            end_of_work=resolve_end_of_work(day_records),
        )
        logger.debug(
            "Day %s: %d records, start=%s end=%s",
            day.isoformat(),
            len(day_records),
            window.start_of_work,
            window.end_of_work,
        )
        windows.append(window)
    return windows
