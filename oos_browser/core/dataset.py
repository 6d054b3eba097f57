from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Optional

import pandas as pd

from oos_browser.core.time_range import TimeRange


def filter_by_range(frame: pd.DataFrame, date_column: str, time_range: TimeRange) -> pd.DataFrame:
    """
    Rows of `frame` whose `date_column` lies in [start, end], inclusive on both ends.

    Always returns a new frame; the input is never modified. A degenerate range keeps
    only rows dated exactly at that instant (possibly none).
    """
    dates = frame[date_column]
    mask = (dates >= time_range.start) & (dates <= time_range.end)
    return frame.loc[mask].copy()


class Dataset:
    """
    One loaded, parsed table of records.

    Includes:
    - the canonical DataFrame (read-only after load; views filter copies)
    - the name of its parsed date column, if it has one
    - cached date extent for building time scales
    """

    def __init__(
        self,
        key: str,
        name: str,
        frame: pd.DataFrame,
        date_column: Optional[str] = None,
        file_path: Optional[Path] = None,
    ) -> None:
        if date_column is not None and date_column not in frame.columns:
            raise KeyError(f"Dataset '{key}' has no date column '{date_column}'")

        self.key = key
        self.name = name
        self.date_column = date_column
        self.file_path = file_path
        self._frame = frame
        self._extent: Optional[TimeRange] = None

    @property
    def frame(self) -> pd.DataFrame:
        return self._frame

    def __len__(self) -> int:
        return len(self._frame)

    def __repr__(self) -> str:
        return f"Dataset(key={self.key!r}, rows={len(self)}, date_column={self.date_column!r})"

    def date_extent(self) -> Optional[TimeRange]:
        """Full [min, max] of the date column, or None when there is none to compute."""
        if self.date_column is None:
            return None
        if self._extent is None:
            dates = self._frame[self.date_column].dropna()
            if dates.empty:
                return None
            self._extent = TimeRange(dates.min(), dates.max())
        return self._extent

    def filtered(self, time_range: Optional[TimeRange]) -> pd.DataFrame:
        """FilteredView for `time_range`; None means the whole dataset."""
        if self.date_column is None:
            raise ValueError(f"Dataset '{self.key}' has no date column to filter on")
        if time_range is None:
            return self._frame.copy()
        return filter_by_range(self._frame, self.date_column, time_range)


class DatasetStore:
    """
    Read-only collection of datasets keyed by dataset key.

    Populated once by the loader; afterwards views only read from it.
    """

    def __init__(self, datasets: Optional[List[Dataset]] = None) -> None:
        self._datasets: Dict[str, Dataset] = {}
        for ds in datasets or []:
            self.add(ds)

    def add(self, dataset: Dataset) -> None:
        if dataset.key in self._datasets:
            raise ValueError(f"Dataset '{dataset.key}' already loaded")
        self._datasets[dataset.key] = dataset

    def __getitem__(self, key: str) -> Dataset:
        try:
            return self._datasets[key]
        except KeyError:
            raise KeyError(f"Dataset '{key}' not loaded")

    def get(self, key: str) -> Optional[Dataset]:
        return self._datasets.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._datasets

    def __iter__(self) -> Iterator[Dataset]:
        return iter(self._datasets.values())

    def __len__(self) -> int:
        return len(self._datasets)

    def keys(self) -> List[str]:
        return list(self._datasets.keys())
