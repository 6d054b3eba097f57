from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import pandas as pd
import plotly.graph_objects as go

from oos_browser.core.base_view import LinkedView, ViewState
from oos_browser.core.broadcaster import SelectionBroadcaster
from oos_browser.core.brush import BrushController
from oos_browser.core.dataset import Dataset
from oos_browser.core.scales import LinearScale, TimeScale
from oos_browser.core.time_range import TimeRange
from oos_browser.core.viewport import Viewport
from oos_browser.views.palette import TABLEAU10


@dataclass(frozen=True)
class LineSpec:
    id: str
    label: str
    key: str
    color: str


LINES: List[LineSpec] = [
    LineSpec("openline", "Fully Open", "Fully_Open", TABLEAU10[4]),
    LineSpec("academic-break", "Academic Break", "Academic_Break", TABLEAU10[9]),
    LineSpec("partially-open", "Partially Open", "Partially_Open", TABLEAU10[1]),
    LineSpec("closed", "Closed", "Closed", TABLEAU10[2]),
]


@dataclass(frozen=True)
class TimeSeriesScales:
    x: TimeScale
    y: LinearScale


class TimeSeriesView(LinkedView):
    """
    School status over time: one line per status, drawn on demand.

    Hosts the brush controller. The x-domain follows zoom only (the brushed
    range is highlighted, not zoomed to); the y-domain is fixed to
    [0, max(Fully_Open)] over the full dataset. Selection ticks do not
    re-render: the figure is only rebuilt, highlight included, when it is
    shipped to the browser again.
    """

    id = "time_series"
    label = "School Status Over Time"
    dataset_key = "covid_closures"

    def __init__(
        self,
        dataset: Dataset,
        viewport: Viewport,
        broadcaster: Optional[SelectionBroadcaster] = None,
    ):
        super().__init__(dataset, viewport, broadcaster)
        if broadcaster is None:
            raise ValueError(f"View '{self.id}' needs a broadcaster for its brush")

        extent = dataset.date_extent()
        if extent is None:
            raise ValueError(f"Dataset '{dataset.key}' has no dates to build a time axis from")

        x = TimeScale(domain=(extent.start, extent.end), range=(0, viewport.inner_width))
        self.brush = BrushController(x, broadcaster)
        self.y_scale = LinearScale.from_max(dataset.frame["Fully_Open"], (viewport.inner_height, 0))
        self.lines_drawn = False

    @property
    def scales(self) -> TimeSeriesScales:
        return TimeSeriesScales(x=self.brush.scale, y=self.y_scale)

    def draw_lines(self) -> go.Figure:
        self.lines_drawn = True
        return self.redraw()

    def on_selection_changed(self, time_range: TimeRange) -> go.Figure:
        """
        Record the selection without rebuilding the figure.

        Plotly draws the live selection box in the browser, so the grey
        highlight only enters the figure on the next `redraw()` or `draw_lines()`.
        """
        self._require_initialized()
        self.time_range = time_range
        self.filtered_view = self.compute_data(time_range)
        self.state = ViewState.UPDATED
        return self.figure

    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        frame = self.dataset.frame
        date_col = self.dataset.date_column

        # Invisible markers along the axis so box selection works before lines are drawn.
        fig = go.Figure(
            go.Scatter(
                x=frame[date_col],
                y=[0] * len(frame),
                mode="markers",
                marker=dict(opacity=0),
                hoverinfo="skip",
                showlegend=False,
                name="brush-surface",
            )
        )
        if self.lines_drawn:
            for line in LINES:
                if line.key not in frame.columns:
                    continue
                fig.add_trace(
                    go.Scatter(
                        x=frame[date_col],
                        y=frame[line.key],
                        mode="lines",
                        name=line.label,
                        line=dict(color=line.color, width=2),
                    )
                )

        x0, x1 = self.brush.scale.domain
        fig.update_xaxes(range=[x0, x1], tickformat="%b %Y")
        fig.update_yaxes(
            range=list(self.y_scale.domain), fixedrange=True, nticks=6, title_text="Number of Countries"
        )

        selection = self.brush.selection
        if selection is not None:
            fig.add_vrect(
                x0=selection.start,
                x1=selection.end,
                fillcolor="grey",
                opacity=0.2,
                line_width=0,
            )

        fig.update_layout(
            dragmode="select",
            selectdirection="h",
            hovermode="x unified",
            uirevision=self.id,
            legend=dict(orientation="h", y=1.1),
        )
        return self.apply_viewport(fig)
