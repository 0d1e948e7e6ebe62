"""End-to-end evaluation of a browser history into day windows."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .classification import classify
from .config import InferenceSettings
from .history import load_events
from .models import DayWindow, Event
from .partition import partition

logger = logging.getLogger(__name__)


def evaluate(
    events: Sequence[Event],
    start: Optional[date] = None,
    end: Optional[date] = None,
    settings: Optional[InferenceSettings] = None,
) -> list[DayWindow]:
    """Classify sorted ``events`` and split them into day windows."""
    settings = settings or InferenceSettings()
    records = classify(events, settings)
    windows = partition(records, start=start, end=end, settings=settings)
    logger.info(
        "Evaluated %d days (%d with inferred work).",
        len(windows),
        sum(1 for window in windows if window.is_reportable),
    )
    return windows


def evaluate_file(
    path: Path,
    start: Optional[date] = None,
    end: Optional[date] = None,
    settings: Optional[InferenceSettings] = None,
) -> list[DayWindow]:
    return evaluate(load_events(path), start=start, end=end, settings=settings)
