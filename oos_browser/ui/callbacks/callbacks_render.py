from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

import dash
from dash import Input, Output, exceptions, html

from oos_browser.ui.callbacks.callbacks_utils import error_figure
from oos_browser.ui.ids import IDs, BUBBLE_MODE_BY_BUTTON
from oos_browser.views import BarView, BubbleView, MapView

if TYPE_CHECKING:
    from oos_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def country_from_click(click_data: Any) -> Optional[str]:
    """Country name from a choropleth clickData payload; None for clicks elsewhere."""
    if not isinstance(click_data, dict):
        return None
    points = click_data.get("points") or []
    if not points:
        return None
    return points[0].get("location")


def facts_children(facts: List[str]) -> List[html.P]:
    return [html.P(fact, className="generated-content") for fact in facts]


def register_render_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Line chart: draw lines on demand
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Graph.TIME_SERIES, "figure"),
        Input(IDs.Control.DRAW_LINES_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def draw_lines(_n_clicks):
        try:
            return ctx.time_series.draw_lines()
        except Exception:
            logger.exception("Error drawing time-series lines")
            return error_figure("Could not draw the school status lines.")

    # ---------------------------------------------------------
    # Bubble chart layout buttons
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Graph.BUBBLE, "figure"),
        *[Input(button_id, "n_clicks") for button_id in BUBBLE_MODE_BY_BUTTON],
        prevent_initial_call=True,
    )
    def update_bubble_layout(*_clicks):
        mode = BUBBLE_MODE_BY_BUTTON.get(dash.ctx.triggered_id)
        if mode is None:
            raise exceptions.PreventUpdate
        try:
            return ctx.view(BubbleView.id).set_mode(mode)
        except Exception:
            logger.exception("Error in update_bubble_layout", extra={"mode": mode})
            return error_figure("Could not rearrange the bubbles.")

    # ---------------------------------------------------------
    # Bar chart category
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Graph.BAR, "figure"),
        Input(IDs.Control.BAR_CATEGORY_SELECT, "value"),
        prevent_initial_call=True,
    )
    def update_bar_category(category):
        if not category:
            raise exceptions.PreventUpdate
        try:
            return ctx.view(BarView.id).set_category(category)
        except Exception:
            logger.exception("Error in update_bar_category", extra={"category": category})
            return error_figure(f"Could not show the '{category}' breakdown.")

    # ---------------------------------------------------------
    # Map: click a country to show its trend
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Graph.MAP, "figure"),
        Input(IDs.Graph.MAP, "clickData"),
        prevent_initial_call=True,
    )
    def select_map_country(click_data):
        country = country_from_click(click_data)
        if country is None:
            raise exceptions.PreventUpdate
        try:
            return ctx.view(MapView.id).select_country(country)
        except Exception:
            logger.exception("Error in select_map_country", extra={"country": country})
            return error_figure(f"Could not show the trend for {country}.")

    # ---------------------------------------------------------
    # Facts
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FACTS_LIST, "children"),
        Input(IDs.Control.NEXT_FACT_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def next_fact(_n_clicks):
        return facts_children(ctx.facts.next_fact())
