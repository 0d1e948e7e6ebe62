"""Turn consecutive history events into presence/absence records."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from .config import InferenceSettings
from .models import ClassifiedRecord, Event, Label

logger = logging.getLogger(__name__)


def sort_events(events: Iterable[Event]) -> list[Event]:
    """Return events in chronological order, keeping file order on ties."""
    return sorted(events, key=lambda event: event.timestamp)


def classify(
    events: Sequence[Event], settings: Optional[InferenceSettings] = None
) -> list[ClassifiedRecord]:
    """Label the gap after each event; the last event has no gap and is dropped.

    ``events`` must already be sorted by timestamp.
    """
    threshold = (settings or InferenceSettings()).absence_threshold
    records: list[ClassifiedRecord] = []
    for current, following in zip(events, events[1:]):
        duration = following.timestamp - current.timestamp
        if duration.total_seconds() < 0:
            raise ValueError(
                f"Events are not in chronological order at {current.timestamp.isoformat()}"
            )
        label = Label.ABSENCE if duration > threshold else Label.PRESENCE
        records.append(
            ClassifiedRecord(
                timestamp=current.timestamp,
                title=current.title,
                url=current.url,
                duration=duration,
                label=label,
            )
        )
    logger.debug("Classified %d events into %d records.", len(events), len(records))
    return records
