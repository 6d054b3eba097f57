from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import pandas as pd

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class TimeRange:
    """
    Inclusive [start, end] date interval selected by the user.

    Produced by the brush controller and consumed by every subscribed view.
    Construction enforces start <= end; use `normalized` for ends of unknown order.
    """

    start: pd.Timestamp
    end: pd.Timestamp

    def __post_init__(self) -> None:
        start = pd.Timestamp(self.start)
        end = pd.Timestamp(self.end)
        if pd.isna(start) or pd.isna(end):
            raise ValueError("TimeRange bounds must be valid timestamps")
        if start > end:
            raise ValueError(f"TimeRange start {start} is after end {end}")
        # frozen dataclass: bypass __setattr__ to store the coerced values
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def normalized(cls, a: Any, b: Any) -> TimeRange:
        a, b = pd.Timestamp(a), pd.Timestamp(b)
        return cls(a, b) if a <= b else cls(b, a)

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    def contains(self, value: Any) -> bool:
        return self.start <= pd.Timestamp(value) <= self.end

    def formatted(self) -> Tuple[str, str]:
        return self.start.strftime(DATE_FORMAT), self.end.strftime(DATE_FORMAT)

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TimeRange:
        return cls.normalized(data["start"], data["end"])
