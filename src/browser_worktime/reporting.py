"""Report rendering for inferred work days."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional

from .config import ReportSettings
from .models import DayWindow

logger = logging.getLogger(__name__)


class SummaryPrinter:
    """Render human-readable summaries in the console."""

    def __init__(self, windows: Iterable[DayWindow]) -> None:
        self.windows = [window for window in windows if window.is_reportable]

    def print_summary(self) -> None:
        if not self.windows:
            print("No inferred work in the selected range.")
            return

        for line in render_report(self.windows):
            print(line)

        total = sum(
            (window.work_duration for window in self.windows), start=timedelta(0)
        )
        print("-" * 40)
        print(f"Days with work: {len(self.windows)}")
        print(f"Total time:     {format_duration(total.total_seconds())}")
        print(
            f"Daily average:  {format_duration(total.total_seconds() / len(self.windows))}"
        )


def render_report(windows: Iterable[DayWindow]) -> list[str]:
    """One line per day that has both a start and an end of work."""
    return [format_day_line(window) for window in windows if window.is_reportable]


def format_day_line(window: DayWindow) -> str:
    start = window.start_of_work
    end = window.end_of_work
    if start is None or end is None:
        raise ValueError(f"Day {window.day.isoformat()} has no inferred work window")
    return (
        f"Day: {start:%d.%m.%Y} "
        f"Browser time: {start:%H:%M} - {end:%H:%M}; "
        f"Duration: {format_timespan(window.work_duration)}"
    )


def write_report(
    lines: Iterable[str],
    settings: Optional[ReportSettings] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Write ``lines`` to a timestamped report file, replacing an older copy."""
    settings = settings or ReportSettings()
    path = settings.report_path(now or datetime.now())
    path.parent.mkdir(parents=True, exist_ok=True)
    content = "".join(f"{line}\n" for line in lines)
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote report to %s", path)
    return path


def format_timespan(value: timedelta) -> str:
    """Format as ``[d:]h:mm:ss[.ffffff]``, e.g. ``0:25:00`` or ``1:2:03:04``."""
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)
    hours, remainder = divmod(value.seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    text = f"{hours}:{minutes:02d}:{secs:02d}"
    if value.days:
        text = f"{value.days}:{text}"
    if value.microseconds:
        text += f".{value.microseconds:06d}".rstrip("0")
    return sign + text


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
