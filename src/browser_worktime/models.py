"""Domain models for browsing history and inferred work windows."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional


class Label(enum.Enum):
    """Whether the gap after a record counts as being at the desk."""

    PRESENCE = "presence"
    ABSENCE = "absence"


@dataclass(frozen=True, slots=True)
class Event:
    """A single visit taken from the browser history export."""

    timestamp: datetime
    title: str
    url: str


@dataclass(frozen=True, slots=True)
class ClassifiedRecord:
    """An event together with the gap to the next event in the history."""

    timestamp: datetime
    title: str
    url: str
    duration: timedelta
    label: Label

    @property
    def day(self) -> date:
        return self.timestamp.date()

    @property
    def is_presence(self) -> bool:
        return self.label is Label.PRESENCE


@dataclass(frozen=True, slots=True)
class DayWindow:
    """Snapshot of one calendar day and the work bounds resolved for it."""

    day: date
    records: tuple[ClassifiedRecord, ...] = ()
    start_of_work: Optional[datetime] = None
    end_of_work: Optional[datetime] = None

    @property
    def is_reportable(self) -> bool:
        return bool(self.records) and self.start_of_work is not None and self.end_of_work is not None

    @property
    def work_duration(self) -> timedelta:
        from .accumulation import accumulate

        return accumulate(self)

    @property
    def presence_count(self) -> int:
        return sum(1 for record in self.records if record.is_presence)

    @property
    def absence_count(self) -> int:
        return len(self.records) - self.presence_count
