from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "OOS_BROWSER_LOG_FORMAT"
LOG_LEVEL_ENV = "OOS_BROWSER_LOG_LEVEL"

_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Per-request access logs from the Dash dev server drown out selection events.
_QUIET_LOGGERS = ("werkzeug",)


def _build_formatter(mode: str) -> logging.Formatter:
    if mode == "plain":
        return logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    return jsonlogger.JsonFormatter(_FIELDS)


def configure_logging(
        level: Union[int, str, None] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Route every oos_browser logger through one root handler.

    Format: `force_format` ("json" or "plain"), else $OOS_BROWSER_LOG_FORMAT, else json.
    Level: `level`, else $OOS_BROWSER_LOG_LEVEL, else INFO.

    Structured fields passed with `extra={...}` (dataset, view_id, start/end)
    become JSON keys in json mode.
    """
    mode = (force_format or os.getenv(LOG_FORMAT_ENV, "json")).lower()
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(mode))

    # configure_logging may run more than once (tests, reloader); keep a single handler
    root.handlers.clear()
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
