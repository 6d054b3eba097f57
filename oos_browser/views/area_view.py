from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from oos_browser.core.base_view import LinkedView
from oos_browser.core.broadcaster import SelectionBroadcaster
from oos_browser.core.dataset import Dataset
from oos_browser.core.scales import LinearScale, TimeScale
from oos_browser.core.viewport import Viewport
from oos_browser.views.palette import TABLEAU10


@dataclass(frozen=True)
class AreaScales:
    x: TimeScale
    y: LinearScale


class AreaView(LinkedView):
    """
    Area chart of one covid status column over the selected period.

    The x-domain is the extent of the filtered records; the y-domain stays
    [0, max(column)] over the full dataset so areas are comparable across selections.
    """

    dataset_key = "covid_closures"
    column: str = None
    title: str = None
    color: str = None

    def __init__(
        self,
        dataset: Dataset,
        viewport: Viewport,
        broadcaster: Optional[SelectionBroadcaster] = None,
    ):
        super().__init__(dataset, viewport, broadcaster)
        if self.column not in dataset.frame.columns:
            raise KeyError(f"View '{self.id}': column '{self.column}' not in dataset '{dataset.key}'")

        self.y_scale = LinearScale.from_max(dataset.frame[self.column], (viewport.inner_height, 0))
        self.scales = self.compute_scales(self.filtered_view)

    def compute_scales(self, data: pd.DataFrame) -> AreaScales:
        x_range = (0, self.viewport.inner_width)
        x = TimeScale.from_dates(data[self.dataset.date_column], x_range)
        if x is None:
            # Empty selection: keep the axis on the selected period itself.
            fallback = self.time_range or self.dataset.date_extent()
            x = TimeScale(domain=(fallback.start, fallback.end), range=x_range)
        return AreaScales(x=x, y=self.y_scale)

    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        self.scales = self.compute_scales(data)

        fig = go.Figure(
            go.Scatter(
                x=data[self.dataset.date_column],
                y=data[self.column],
                mode="lines",
                line=dict(color=self.color, shape="spline"),
                fill="tozeroy",
                fillcolor=self.color,
                name=self.label,
            )
        )

        title = self.title if not data.empty else f"{self.title} (no records in the selected period)"
        x0, x1 = self.scales.x.domain
        fig.update_xaxes(range=[x0, x1], tickformat="%b %Y", nticks=3)
        fig.update_yaxes(range=list(self.scales.y.domain))
        fig.update_layout(title=title, showlegend=False, uirevision=self.id)
        return self.apply_viewport(fig)


class FullyOpenAreaView(AreaView):
    id = "area_fully_open"
    label = "Fully Open"
    column = "Fully_Open"
    title = "Number of Countries with Schools Fully Open"
    color = TABLEAU10[4]


class ClosedAreaView(AreaView):
    id = "area_closed"
    label = "Closed"
    column = "Closed"
    title = "Number of Countries with Schools Closed"
    color = TABLEAU10[2]
