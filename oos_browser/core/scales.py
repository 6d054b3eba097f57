from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

ZOOM_SCALE_EXTENT: Tuple[float, float] = (1.0, 20.0)


def _to_ms(value: Any) -> float:
    return pd.Timestamp(value).value / 1e6


def _from_ms(ms: float) -> pd.Timestamp:
    # Round to whole milliseconds so forward/inverse mapping is stable.
    return pd.Timestamp(int(round(ms)), unit="ms")


def _normalize(value: float, d0: float, d1: float) -> float:
    span = d1 - d0
    if span == 0:
        return 0.5
    return (value - d0) / span


@dataclass(frozen=True)
class LinearScale:
    """Continuous numeric domain -> pixel range."""

    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        r0, r1 = self.range
        return r0 + _normalize(float(value), *self.domain) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        return d0 + _normalize(float(pixel), *self.range) * (d1 - d0)

    @classmethod
    def from_max(cls, values: Iterable[float], range: Tuple[float, float]) -> LinearScale:
        """Domain [0, max(values)]; an empty input yields the degenerate domain [0, 0]."""
        arr = np.asarray(list(values), dtype=float)
        arr = arr[~np.isnan(arr)]
        top = float(arr.max()) if arr.size else 0.0
        return cls(domain=(0.0, top), range=range)


@dataclass(frozen=True)
class TimeScale:
    """
    Date domain -> pixel range, mirroring a d3 time scale.

    Dates are mapped through epoch milliseconds; `invert` rounds to the
    millisecond, so `invert(scale(t)) == t` for millisecond-precision dates.
    """

    domain: Tuple[pd.Timestamp, pd.Timestamp]
    range: Tuple[float, float]

    def __post_init__(self) -> None:
        d0, d1 = (pd.Timestamp(d) for d in self.domain)
        object.__setattr__(self, "domain", (d0, d1))
        object.__setattr__(self, "range", (float(self.range[0]), float(self.range[1])))

    @property
    def width(self) -> float:
        return self.range[1] - self.range[0]

    def __call__(self, value: Any) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        return r0 + _normalize(_to_ms(value), _to_ms(d0), _to_ms(d1)) * (r1 - r0)

    def invert(self, pixel: float) -> pd.Timestamp:
        d0, d1 = (_to_ms(d) for d in self.domain)
        return _from_ms(d0 + _normalize(float(pixel), *self.range) * (d1 - d0))

    def clamp_pixel(self, pixel: float) -> float:
        lo, hi = min(self.range), max(self.range)
        return min(max(float(pixel), lo), hi)

    def with_domain(self, start: Any, end: Any) -> TimeScale:
        return TimeScale(domain=(start, end), range=self.range)

    @classmethod
    def from_dates(cls, dates: Sequence[Any], range: Tuple[float, float]) -> Optional[TimeScale]:
        """Domain = extent of `dates`; None when there are no valid dates."""
        series = pd.to_datetime(pd.Series(list(dates)), errors="coerce").dropna()
        if series.empty:
            return None
        return cls(domain=(series.min(), series.max()), range=range)


@dataclass(frozen=True)
class BandScale:
    """Ordinal domain -> evenly spaced bands, with d3's band padding semantics."""

    domain: Tuple[str, ...]
    range: Tuple[float, float]
    padding: float = 0.1

    @property
    def step(self) -> float:
        n = len(self.domain)
        r0, r1 = self.range
        return (r1 - r0) / max(1.0, n + self.padding)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding)

    def __call__(self, value: str) -> Optional[float]:
        try:
            index = self.domain.index(value)
        except ValueError:
            return None
        n = len(self.domain)
        r0, r1 = self.range
        start = r0 + (r1 - r0 - self.step * (n - self.padding)) * 0.5
        return start + self.step * index


@dataclass(frozen=True)
class ZoomTransform:
    """
    Horizontal zoom transform: pixel p on the original axis is drawn at p * k + x.
    """

    k: float = 1.0
    x: float = 0.0

    @classmethod
    def identity(cls) -> ZoomTransform:
        return cls()

    def apply(self, pixel: float) -> float:
        return pixel * self.k + self.x

    def invert(self, pixel: float) -> float:
        return (pixel - self.x) / self.k

    def constrain(self, range: Tuple[float, float]) -> ZoomTransform:
        """
        Clamp k to the zoom scale extent and the translation so the visible
        window never leaves the original axis range.
        """
        lo, hi = ZOOM_SCALE_EXTENT
        r0, r1 = range
        k = min(max(self.k, lo), hi)
        x = min(max(self.x, r1 * (1 - k)), r0 * (1 - k))
        return ZoomTransform(k=k, x=x)

    def rescale(self, scale: TimeScale) -> TimeScale:
        r0, r1 = scale.range
        return scale.with_domain(
            scale.invert(self.invert(r0)),
            scale.invert(self.invert(r1)),
        )

    @classmethod
    def for_window(cls, scale: TimeScale, start: Any, end: Any) -> ZoomTransform:
        """
        Transform that makes [start, end] of `scale`'s domain fill its range.

        k is clamped to the zoom scale extent; a clamped window stays centred
        on the requested one. The translation is not constrained.
        """
        p0, p1 = sorted((scale(start), scale(end)))
        r0, r1 = scale.range
        span = p1 - p0
        if span <= 0 or not math.isfinite(span):
            return cls.identity()
        lo, hi = ZOOM_SCALE_EXTENT
        k = min(max(scale.width / span, lo), hi)
        return cls(k=k, x=(r0 + r1) / 2 - (p0 + p1) / 2 * k)
