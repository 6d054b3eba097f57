from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from oos_browser.core.base_view import BaseView
from oos_browser.core.broadcaster import SelectionBroadcaster
from oos_browser.core.dataset import Dataset
from oos_browser.core.time_range import TimeRange
from oos_browser.core.viewport import Viewport
from oos_browser.views.palette import BORDER, MAP_HIGH, MAP_LOW, MAP_NO_DATA, OCEAN

GLOBAL_AVERAGE = "Global Average"


@dataclass(frozen=True)
class MapData:
    country_rates: pd.DataFrame
    trend: pd.DataFrame
    country: str


class MapView(BaseView):
    """
    Choropleth of out-of-school rates with a trend chart for one country.

    - countries are coloured by their first recorded rate
    - the trend shows value with its upper/lower band per year
    - by default the trend is the mean across countries per year
    """

    id = "map"
    label = "Out of School Rates Around the World"
    dataset_key = "oos_rates"

    def __init__(
        self,
        dataset: Dataset,
        viewport: Viewport,
        broadcaster: Optional[SelectionBroadcaster] = None,
    ):
        super().__init__(dataset, viewport, broadcaster)
        self.country = GLOBAL_AVERAGE

    def select_country(self, country: Optional[str]) -> go.Figure:
        self.country = country or GLOBAL_AVERAGE
        return self.redraw()

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------
    def country_rates(self) -> pd.DataFrame:
        frame = self.dataset.frame
        rates = frame.drop_duplicates(subset="name", keep="first")[["name", "value"]]
        return rates.dropna(subset=["value"]).reset_index(drop=True)

    def trend_data(self, country: str) -> pd.DataFrame:
        frame = self.dataset.frame
        year = self.dataset.date_column
        columns = [year, "value", "upper", "lower"]

        if country == GLOBAL_AVERAGE:
            trend = frame.groupby(year, as_index=False)[["value", "upper", "lower"]].mean()
        else:
            trend = frame.loc[frame["name"] == country, columns]
        return trend.sort_values(year).reset_index(drop=True)

    def compute_data(self, time_range: Optional[TimeRange]) -> MapData:
        return MapData(
            country_rates=self.country_rates(),
            trend=self.trend_data(self.country),
            country=self.country,
        )

    # ------------------------------------------------------------------
    # Figure
    # ------------------------------------------------------------------
    def render_figure(self, data: MapData) -> go.Figure:
        fig = make_subplots(
            rows=1,
            cols=2,
            column_widths=[0.6, 0.4],
            specs=[[{"type": "geo"}, {"type": "xy"}]],
            subplot_titles=("", data.country),
        )

        rates = data.country_rates
        fig.add_trace(
            go.Choropleth(
                locations=rates["name"],
                locationmode="country names",
                z=rates["value"],
                colorscale=[[0.0, MAP_LOW], [1.0, MAP_HIGH]],
                marker_line_color=BORDER,
                colorbar=dict(title="Average Out of School Rate", x=0.55, len=0.6),
                hovertemplate="<b>%{location}</b><br>Out-of-School Rate (AVG): %{z}<extra></extra>",
            ),
            row=1,
            col=1,
        )
        fig.update_geos(
            projection_type="natural earth",
            showocean=True,
            oceancolor=OCEAN,
            showcountries=True,
            countrycolor=BORDER,
            landcolor=MAP_NO_DATA,
        )

        self._add_trend(fig, data.trend, data.country)
        fig.update_layout(showlegend=False, clickmode="event")
        return self.apply_viewport(fig)

    def _add_trend(self, fig: go.Figure, trend: pd.DataFrame, country: str) -> None:
        if trend.empty:
            fig.add_annotation(
                text=f"No data available for {country}",
                showarrow=False,
                xref="x domain",
                yref="y domain",
                x=0.5,
                y=0.5,
            )
            return

        year = self.dataset.date_column
        # Band: upper edge first, lower edge filled up to it.
        fig.add_trace(
            go.Scatter(x=trend[year], y=trend["upper"], mode="lines", line=dict(width=0), hoverinfo="skip"),
            row=1,
            col=2,
        )
        fig.add_trace(
            go.Scatter(
                x=trend[year],
                y=trend["lower"],
                mode="lines",
                line=dict(width=0),
                fill="tonexty",
                fillcolor="rgba(211,211,211,0.5)",
                hoverinfo="skip",
            ),
            row=1,
            col=2,
        )
        fig.add_trace(
            go.Scatter(
                x=trend[year],
                y=trend["value"],
                mode="lines",
                line=dict(color="black", width=2),
                name=country,
            ),
            row=1,
            col=2,
        )
        fig.update_xaxes(tickformat="%Y", row=1, col=2)
        fig.update_yaxes(
            range=[0, float(trend["upper"].max())],
            title_text="Out of School Rates",
            row=1,
            col=2,
        )
