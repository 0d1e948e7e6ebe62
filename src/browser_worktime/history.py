"""Read browser history exports (CSV) into :class:`Event` objects."""

from __future__ import annotations

import csv
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .classification import sort_events
from .models import Event

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "time", "title", "url")

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d.%m.%Y")
_TIME_FORMATS = ("%H:%M:%S", "%H:%M:%S.%f", "%H:%M")


class HistoryFormatError(ValueError):
    """A history file that cannot be turned into events."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class HistoryFileNotFoundError(FileNotFoundError):
    """No history export could be found or the given one does not exist."""


def load_events(path: Path) -> list[Event]:
    """Load all visits from ``path`` in chronological order."""
    path = Path(path)
    if not path.is_file():
        raise HistoryFileNotFoundError(f"History file does not exist: {path}")

    try:
        with path.open(newline="", encoding="utf-8-sig") as handle:
            reader = csv.DictReader(handle)
            missing = [name for name in REQUIRED_COLUMNS if name not in (reader.fieldnames or ())]
            if missing:
                raise HistoryFormatError(f"missing columns: {', '.join(missing)}", line=1)
            events = parse_rows(reader)
    except UnicodeDecodeError as exc:
        raise HistoryFormatError(f"not valid UTF-8: {exc.reason}") from exc

    logger.info("Loaded %d history events from %s", len(events), path)
    return sort_events(events)


def parse_rows(rows: Iterable[Mapping[str, Optional[str]]]) -> list[Event]:
    events: list[Event] = []
    # Line 1 is the header.
    for line, row in enumerate(rows, start=2):
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        try:
            timestamp = datetime.combine(
                parse_date(row.get("date") or ""), parse_time(row.get("time") or "")
            )
        except ValueError as exc:
            raise HistoryFormatError(str(exc), line=line) from exc
        events.append(
            Event(
                timestamp=timestamp,
                title=row.get("title") or "",
                url=row.get("url") or "",
            )
        )
    return events


def parse_date(value: str) -> date:
    return _parse(value, _DATE_FORMATS, "date").date()


def parse_time(value: str) -> time:
    return _parse(value, _TIME_FORMATS, "time").time()


def _parse(value: str, formats: tuple[str, ...], kind: str) -> datetime:
    cleaned = value.strip()
    for fmt in formats:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
    raise ValueError(f"Invalid {kind}: {value!r}")
