from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import pandas as pd

from oos_browser.config.model import DatasetConfig
from oos_browser.core.dataset import Dataset
from oos_browser.core.exceptions import DataLoadError

logger = logging.getLogger(__name__)


def _resolve_path(cfg: DatasetConfig, data_root: Optional[Path]) -> Path:
    path = cfg.path
    if path.is_absolute():
        return path

    # OOS_BROWSER_DATA_ROOT wins over the configured data_root
    env_root = os.environ.get("OOS_BROWSER_DATA_ROOT")
    if env_root:
        return Path(env_root) / path
    if data_root is not None:
        return data_root / path
    return cfg.source_path.parent / path


def _coerce_numeric(frame: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    for col in columns:
        frame[col] = pd.to_numeric(frame[col], errors="raise")
    return frame


def _auto_numeric_columns(frame: pd.DataFrame, skip: Optional[str]) -> List[str]:
    """
    Columns whose every non-empty value parses as a number.
    """
    columns: List[str] = []
    for col in frame.columns:
        if col == skip:
            continue
        present = frame[col].dropna()
        if present.empty:
            continue
        converted = pd.to_numeric(present, errors="coerce")
        if converted.notna().all():
            columns.append(col)
    return columns


def _check_required(frame: pd.DataFrame, cfg: DatasetConfig, path: Path) -> None:
    required = list(cfg.required_columns)
    if cfg.date_column:
        required.append(cfg.date_column)
    missing = [col for col in required if col not in frame.columns]
    if missing:
        msg = f"Dataset '{cfg.key}': required columns {missing} not found in {path}"
        logger.error(msg, extra={"dataset": cfg.key, "path": str(path)})
        raise DataLoadError(msg)


def from_config(cfg: DatasetConfig, data_root: Optional[Path] = None) -> Dataset:
    """
    Read and parse one CSV-backed Dataset from a DatasetConfig.

    Raises:
        DataLoadError: on a missing/unreadable file, missing columns, or
            dates/numbers that do not parse
    """
    path = _resolve_path(cfg, data_root)

    if not path.is_file():
        logger.error("Dataset file not found", extra={"dataset": cfg.key, "path": str(path)})
        raise DataLoadError(f"Dataset '{cfg.key}': file not found at {path}")

    try:
        frame = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        logger.error("Dataset file unreadable", extra={"dataset": cfg.key, "path": str(path)})
        raise DataLoadError(f"Dataset '{cfg.key}': could not read {path}: {exc}") from exc

    _check_required(frame, cfg, path)

    date_column = cfg.date_column
    try:
        if date_column:
            dates = frame[date_column]
            if cfg.date_format:
                # years like 2015 arrive as ints; the format applies to their text
                dates = dates.astype("string")
            frame[date_column] = pd.to_datetime(dates, format=cfg.date_format)

        numeric = cfg.numeric_columns
        if numeric == "auto":
            numeric = _auto_numeric_columns(frame, skip=date_column)
        _coerce_numeric(frame, list(numeric))
    except (ValueError, TypeError, KeyError) as exc:
        logger.error("Dataset values failed to parse", extra={"dataset": cfg.key, "path": str(path)})
        raise DataLoadError(f"Dataset '{cfg.key}': could not parse {path}: {exc}") from exc

    logger.info(
        "Dataset loaded",
        extra={"dataset": cfg.key, "path": str(path), "n_rows": len(frame)},
    )

    return Dataset(
        key=cfg.key,
        name=cfg.name,
        frame=frame,
        date_column=date_column,
        file_path=path,
    )
