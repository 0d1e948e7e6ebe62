"""Configuration models and helpers for work-window inference."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from pathlib import Path


DEFAULT_ABSENCE_THRESHOLD = timedelta(minutes=20)
DEFAULT_WORK_DAY_START = time(7, 0)


@dataclass(slots=True)
class InferenceSettings:
    """Thresholds used to turn browsing gaps into presence and work bounds."""

    absence_threshold: timedelta = DEFAULT_ABSENCE_THRESHOLD
    work_day_start: time = DEFAULT_WORK_DAY_START

    @classmethod
    def from_values(
        cls,
        absence_minutes: float | None = None,
        work_day_start: str | time | None = None,
    ) -> "InferenceSettings":
        threshold = (
            timedelta(minutes=absence_minutes)
            if absence_minutes is not None
            else DEFAULT_ABSENCE_THRESHOLD
        )
        if isinstance(work_day_start, str):
            start = parse_clock_time(work_day_start)
        elif work_day_start is not None:
            start = work_day_start
        else:
            start = DEFAULT_WORK_DAY_START
        return cls(absence_threshold=threshold, work_day_start=start)


@dataclass(slots=True)
class ReportSettings:
    """Where and under which name the text report is written."""

    output_dir: Path = field(default_factory=Path.cwd)
    filename_template: str = "Report {timestamp:%Y%m%d %H-%M-%S}.txt"

    def report_path(self, timestamp: datetime) -> Path:
        return Path(self.output_dir) / self.filename_template.format(timestamp=timestamp)


def parse_clock_time(value: str) -> time:
    """Parse ``HH:MM`` (or ``HH:MM:SS``) into a :class:`datetime.time`."""
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid clock time: {value!r} (expected HH:MM)")
