from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go

from oos_browser.core.base_view import BaseView
from oos_browser.core.broadcaster import SelectionBroadcaster
from oos_browser.core.dataset import Dataset
from oos_browser.core.scales import BandScale, LinearScale
from oos_browser.core.time_range import TimeRange
from oos_browser.core.viewport import Viewport
from oos_browser.views.palette import TABLEAU10

CATEGORIES: Dict[str, Tuple[str, str]] = {
    "Gender": ("Female", "Male"),
    "Residency": ("Urban", "Rural"),
}

REGION_NAMES: Dict[str, str] = {
    "SA": "South Asia",
    "ECA": "Europe",
    "MENA": "Middle East",
    "SSA": "Sub-Saharan Africa",
    "LAC": "Latin America",
    "EAP": "East Asia",
    "NA": "North America",
}


@dataclass(frozen=True)
class BarScales:
    x: BandScale
    y: LinearScale


class BarView(BaseView):
    """
    Primary out-of-school rates per region, split by gender or residency.
    """

    id = "bar"
    label = "Primary Out of School Rate by Region"
    dataset_key = "primary_demographics"

    def __init__(
        self,
        dataset: Dataset,
        viewport: Viewport,
        broadcaster: Optional[SelectionBroadcaster] = None,
    ):
        super().__init__(dataset, viewport, broadcaster)
        self.category = "Gender"
        self.scales: Optional[BarScales] = None

    def set_category(self, category: str) -> go.Figure:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category '{category}', expected one of {list(CATEGORIES)}")
        self.category = category
        return self.redraw()

    def compute_data(self, time_range: Optional[TimeRange]) -> pd.DataFrame:
        first, second = CATEGORIES[self.category]
        frame = self.dataset.frame
        missing = [col for col in ("Region", first, second) if col not in frame.columns]
        if missing:
            raise KeyError(f"View '{self.id}': columns {missing} not in dataset '{self.dataset.key}'")

        data = frame[["Region", first, second]].copy()
        data["region_name"] = data["Region"].map(REGION_NAMES).fillna(data["Region"])
        return data

    def compute_scales(self, data: pd.DataFrame) -> BarScales:
        first, second = CATEGORIES[self.category]
        x = BandScale(
            domain=tuple(data["Region"].astype(str)),
            range=(0, self.viewport.inner_width / 2),
            padding=0.1,
        )
        y = LinearScale.from_max(
            pd.concat([data[first], data[second]], ignore_index=True),
            (self.viewport.inner_height, 0),
        )
        return BarScales(x=x, y=y)

    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        if data.empty:
            return self.apply_viewport(self.empty_figure("No regional data available"))

        self.scales = self.compute_scales(data)
        first, second = CATEGORIES[self.category]
        band = self.scales.x
        half = band.bandwidth / 2
        starts = [band(region) for region in data["Region"].astype(str)]

        fig = go.Figure()
        for offset, attribute, color in ((0.0, first, TABLEAU10[2]), (half, second, TABLEAU10[3])):
            fig.add_trace(
                go.Bar(
                    x=[start + offset + half / 2 for start in starts],
                    y=data[attribute],
                    width=half,
                    name=attribute,
                    marker=dict(color=color, opacity=0.7),
                    hovertext=data["region_name"],
                    hovertemplate="%{hovertext}<br>" + attribute + ": %{y}<extra></extra>",
                )
            )

        fig.update_xaxes(
            tickmode="array",
            tickvals=[start + half for start in starts],
            ticktext=list(data["region_name"]),
            range=list(band.range),
        )
        fig.update_yaxes(range=list(self.scales.y.domain))
        fig.update_layout(barmode="overlay", legend=dict(orientation="h", y=1.1))
        return self.apply_viewport(fig)
