"""FastAPI application that exposes inferred work days as a local JSON API."""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from .config import InferenceSettings, parse_clock_time
from .evaluation import evaluate
from .history import HistoryFormatError, load_events
from .models import ClassifiedRecord, DayWindow, Event
from .partition import NoHistoryDataError
from .reporting import format_timespan

logger = logging.getLogger(__name__)


class HistoryStore:
    """Hold the loaded history so requests do not re-read the CSV."""

    def __init__(self, history_path: Path, settings: InferenceSettings) -> None:
        self._history_path = Path(history_path)
        self._settings = settings
        self._lock = threading.Lock()
        self._events: Optional[list[Event]] = None

    @property
    def history_path(self) -> Path:
        return self._history_path

    @property
    def settings(self) -> InferenceSettings:
        with self._lock:
            return self._settings

    def events(self) -> list[Event]:
        with self._lock:
            return self._events_locked()

    def reload(self, settings: Optional[InferenceSettings] = None) -> int:
        events = load_events(self._history_path)
        with self._lock:
            self._events = events
            if settings is not None:
                self._settings = settings
        logger.info("History reloaded: %d events.", len(events))
        return len(events)

    def windows(self, start: Optional[date], end: Optional[date]) -> list[DayWindow]:
        with self._lock:
            events, settings = self._events_locked(), self._settings
        return evaluate(events, start=start, end=end, settings=settings)

    def _events_locked(self) -> list[Event]:
        if self._events is None:
            self._events = load_events(self._history_path)
        return self._events


class ReloadPayload(BaseModel):
    absence_minutes: Optional[float] = None
    work_day_start: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


def create_app(
    *,
    history_path: Path,
    settings: Optional[InferenceSettings] = None,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    store = HistoryStore(Path(history_path), settings or InferenceSettings())

    app = FastAPI(title="Browser Worktime", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.history_store = store

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        store: HistoryStore = request.app.state.history_store
        current = store.settings
        return {
            "history_path": str(store.history_path),
            "event_count": len(_load(store)),
            "absence_minutes": current.absence_threshold.total_seconds() / 60.0,
            "work_day_start": current.work_day_start.strftime("%H:%M"),
        }

    @app.get("/api/days")
    def days(
        request: Request,
        start: Optional[str] = Query(
            default=None,
            description="Start date in YYYY-MM-DD format (inclusive).",
        ),
        end: Optional[str] = Query(
            default=None,
            description="End date in YYYY-MM-DD format (inclusive).",
        ),
    ) -> Dict[str, Any]:
        store: HistoryStore = request.app.state.history_store
        windows = _evaluate(store, _parse_date(start), _parse_date(end))
        reportable = [window for window in windows if window.is_reportable]
        total = sum((window.work_duration for window in reportable), start=timedelta(0))
        return {
            "start": windows[0].day.isoformat(),
            "end": windows[-1].day.isoformat(),
            "totals": {
                "days_evaluated": len(windows),
                "days_with_work": len(reportable),
                "work_seconds": total.total_seconds(),
            },
            "days": [_window_to_payload(window) for window in reportable],
        }

    @app.get("/api/days/{day}")
    def day_detail(day: str, request: Request) -> Dict[str, Any]:
        store: HistoryStore = request.app.state.history_store
        target = _parse_date(day)
        window = _evaluate(store, target, target)[0]
        payload = _window_to_payload(window)
        payload["records"] = [_record_to_payload(record) for record in window.records]
        return payload

    @app.post("/api/reload")
    def reload(request: Request, payload: Optional[ReloadPayload] = None) -> Dict[str, Any]:
        store: HistoryStore = request.app.state.history_store
        new_settings: Optional[InferenceSettings] = None
        if payload is not None and (
            payload.absence_minutes is not None or payload.work_day_start is not None
        ):
            current = store.settings
            try:
                new_settings = InferenceSettings(
                    absence_threshold=(
                        timedelta(minutes=payload.absence_minutes)
                        if payload.absence_minutes is not None
                        else current.absence_threshold
                    ),
                    work_day_start=(
                        parse_clock_time(payload.work_day_start)
                        if payload.work_day_start is not None
                        else current.work_day_start
                    ),
                )
            except ValueError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
        try:
            count = store.reload(new_settings)
        except HistoryFormatError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except FileNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"event_count": count}

    return app


def _load(store: HistoryStore) -> list[Event]:
    try:
        return store.events()
    except HistoryFormatError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _evaluate(
    store: HistoryStore, start: Optional[date], end: Optional[date]
) -> list[DayWindow]:
    _load(store)
    try:
        return store.windows(start, end)
    except NoHistoryDataError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid date format") from exc


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _window_to_payload(window: DayWindow) -> Dict[str, Any]:
    duration = window.work_duration
    return {
        "date": window.day.isoformat(),
        "start_of_work": _isoformat(window.start_of_work),
        "end_of_work": _isoformat(window.end_of_work),
        "work_seconds": duration.total_seconds(),
        "work_duration": format_timespan(duration),
        "record_count": len(window.records),
        "presence_count": window.presence_count,
        "absence_count": window.absence_count,
    }


def _record_to_payload(record: ClassifiedRecord) -> Dict[str, Any]:
    return {
        "timestamp": record.timestamp.isoformat(),
        "title": record.title,
        "url": record.url,
        "duration_seconds": record.duration.total_seconds(),
        "label": record.label.value,
    }
