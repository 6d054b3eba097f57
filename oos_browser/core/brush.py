from __future__ import annotations

import logging
import math
from typing import Any, Optional, Tuple

from oos_browser.core.broadcaster import SELECTION_CHANGED, SelectionBroadcaster
from oos_browser.core.scales import TimeScale, ZoomTransform
from oos_browser.core.time_range import TimeRange

logger = logging.getLogger(__name__)


class BrushController:
    """
    Turns interval gestures on a time axis into published TimeRanges.

    - `brush(x0, x1)` takes a pixel extent, clamps it to the axis range and
      publishes the inverse-mapped TimeRange on every call (live updates while dragging)
    - `zoom(transform)` rescales the axis from the original scale; an active
      brush keeps its highlighted dates as an anchor and only the part inside the
      visible window is re-published (nothing when the window misses it)
    - `select_domain` / `zoom_to_domain` accept data coordinates for hosts
      (e.g. Plotly) that report selections and zoom windows as dates
    """

    def __init__(
        self,
        scale: TimeScale,
        broadcaster: SelectionBroadcaster,
        event_name: str = SELECTION_CHANGED,
    ) -> None:
        self._original = scale
        self._scale = scale
        self._transform = ZoomTransform.identity()
        self._broadcaster = broadcaster
        self._event_name = event_name

        self._extent: Optional[Tuple[float, float]] = None
        self._selection: Optional[TimeRange] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def scale(self) -> TimeScale:
        """The active (possibly zoomed) scale."""
        return self._scale

    @property
    def original_scale(self) -> TimeScale:
        return self._original

    @property
    def transform(self) -> ZoomTransform:
        return self._transform

    @property
    def extent(self) -> Optional[Tuple[float, float]]:
        """Pixel extent of the active brush, or None when nothing is brushed."""
        return self._extent

    @property
    def selection(self) -> Optional[TimeRange]:
        """Highlighted dates of the active brush, unchanged by zooming."""
        return self._selection

    @property
    def full_range(self) -> TimeRange:
        return TimeRange(*self._original.domain)

    # ------------------------------------------------------------------
    # Brush
    # ------------------------------------------------------------------
    def brush(self, x0: float, x1: float) -> TimeRange:
        """
        Publish the TimeRange under pixel extent [x0, x1].

        Ends may arrive in either order and outside the axis; both are normalised
        before publish. x0 == x1 publishes a zero-width range.

        Raises:
            ValueError: if either end is NaN
        """
        lo, hi = self._clamp_extent(x0, x1)
        self._extent = (lo, hi)
        self._selection = TimeRange(self._scale.invert(lo), self._scale.invert(hi))
        self._publish(self._selection)
        return self._selection

    def select_domain(self, start: Any, end: Any) -> TimeRange:
        """Brush the pixels that [start, end] occupies on the active scale."""
        requested = TimeRange.normalized(start, end)
        return self.brush(self._scale(requested.start), self._scale(requested.end))

    def clear(self) -> TimeRange:
        """Drop the active brush and publish the full data domain."""
        self._extent = None
        self._selection = None
        full = self.full_range
        self._publish(full)
        return full

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------
    def zoom(self, transform: ZoomTransform) -> Optional[TimeRange]:
        """
        Apply `transform` to the original scale.

        :return: the visible part of the active selection as re-published, or None
            when nothing is brushed or the selection lies outside the window
        """
        self._transform = transform.constrain(self._original.range)
        self._scale = self._transform.rescale(self._original)

        logger.debug(
            "Time axis zoomed",
            extra={
                "k": self._transform.k,
                "x": self._transform.x,
                "domain_start": self._scale.domain[0].isoformat(),
                "domain_end": self._scale.domain[1].isoformat(),
            },
        )

        if self._selection is None:
            return None

        # The highlighted dates survive the zoom; only the visible part is published.
        visible = self._visible_part(self._selection)
        if visible is None:
            self._extent = None
            logger.debug(
                "Brush outside zoom window",
                extra={"start": self._selection.start.isoformat(), "end": self._selection.end.isoformat()},
            )
            return None

        self._extent = (self._scale(visible.start), self._scale(visible.end))
        self._publish(visible)
        return visible

    def zoom_to_domain(self, start: Any, end: Any) -> Optional[TimeRange]:
        window = TimeRange.normalized(start, end)
        return self.zoom(ZoomTransform.for_window(self._original, window.start, window.end))

    def reset_zoom(self) -> Optional[TimeRange]:
        return self.zoom(ZoomTransform.identity())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _visible_part(self, time_range: TimeRange) -> Optional[TimeRange]:
        """Intersection of `time_range` with the active scale's domain; None when disjoint."""
        d0, d1 = self._scale.domain
        start = max(time_range.start, d0)
        end = min(time_range.end, d1)
        if start > end:
            return None
        return TimeRange(start, end)

    def _clamp_extent(self, x0: float, x1: float) -> Tuple[float, float]:
        x0, x1 = float(x0), float(x1)
        if math.isnan(x0) or math.isnan(x1):
            raise ValueError(f"Brush extent must be numeric, got [{x0}, {x1}]")
        lo, hi = sorted((x0, x1))
        return self._scale.clamp_pixel(lo), self._scale.clamp_pixel(hi)

    def _publish(self, time_range: TimeRange) -> None:
        start, end = time_range.formatted()
        logger.debug("Publishing selection", extra={"start": start, "end": end})
        self._broadcaster.publish(self._event_name, time_range)
