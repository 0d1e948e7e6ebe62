"""Serve the inferred work days with uvicorn."""

from __future__ import annotations

import logging
import threading
import webbrowser
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .config import InferenceSettings
from .paths import resolve_history_path
from .webapp import create_app

logger = logging.getLogger(__name__)

OVERVIEW_PATH = "/api/days"


def build_dashboard(
    history_path: Optional[Path] = None,
    settings: Optional[InferenceSettings] = None,
) -> FastAPI:
    """Create the API for ``history_path`` or the default history export."""
    resolved = resolve_history_path(history_path)
    logger.info("Serving work days inferred from %s", resolved)
    return create_app(history_path=resolved, settings=settings)


def run_dashboard(
    *,
    history_path: Optional[Path] = None,
    host: str = "127.0.0.1",
    port: int = 8766,
    settings: Optional[InferenceSettings] = None,
    open_browser: bool = True,
    log_level: str = "info",
) -> None:
    """Block serving the API; optionally open the day overview once it is up."""
    app = build_dashboard(history_path, settings)
    if open_browser:
        overview_url = f"http://{host}:{port}{OVERVIEW_PATH}"
        timer = threading.Timer(1.0, _open_overview, args=(overview_url,))
        timer.daemon = True
        timer.start()
    uvicorn.run(app, host=host, port=port, log_level=log_level)


def _open_overview(url: str) -> None:
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error:
        logger.exception("Failed to launch browser for %s", url)
        return
    if not opened:
        logger.warning("No browser available; open %s manually.", url)
