from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import dash
from dash import Input, Output, exceptions

from oos_browser.core.time_range import TimeRange
from oos_browser.ui.callbacks.callbacks_utils import triggered_prop
from oos_browser.ui.ids import IDs
from oos_browser.views import ClosedAreaView, FullyOpenAreaView

if TYPE_CHECKING:
    from oos_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def parse_selected_range(selected_data: Any) -> Optional[Tuple[Any, Any]]:
    """
    x-range of a Plotly box selection, e.g. {"range": {"x": ["2020-03-01", "2020-06-01"]}}.
    Returns None when there is no (horizontal) selection.
    """
    if not isinstance(selected_data, dict):
        return None
    x = (selected_data.get("range") or {}).get("x")
    if not x or len(x) != 2:
        return None
    return x[0], x[1]


def parse_relayout(relayout_data: Any) -> Tuple[str, Optional[Tuple[Any, Any]]]:
    """
    Classify a Plotly relayout event on the time axis.

    :return: ("zoom", (start, end)), ("reset", None) or ("ignore", None)
    """
    if not isinstance(relayout_data, dict):
        return "ignore", None

    if relayout_data.get("xaxis.autorange"):
        return "reset", None

    if "xaxis.range[0]" in relayout_data and "xaxis.range[1]" in relayout_data:
        return "zoom", (relayout_data["xaxis.range[0]"], relayout_data["xaxis.range[1]"])

    window = relayout_data.get("xaxis.range")
    if isinstance(window, (list, tuple)) and len(window) == 2:
        return "zoom", (window[0], window[1])

    return "ignore", None


def apply_time_series_event(
    ctx: AppContext,
    prop: Optional[str],
    selected_data: Any,
    relayout_data: Any,
) -> Optional[TimeRange]:
    """
    Route one line-chart event through the brush controller.

    Selections publish on every update; clearing the selection publishes the full
    range; zooming re-publishes an active selection. Returns the published range,
    or None when nothing was published.
    """
    brush = ctx.time_series.brush

    if prop == "selectedData":
        bounds = parse_selected_range(selected_data)
        if bounds is None:
            return brush.clear()
        return brush.select_domain(*bounds)

    if prop == "relayoutData":
        kind, window = parse_relayout(relayout_data)
        if kind == "zoom":
            return brush.zoom_to_domain(*window)
        if kind == "reset":
            return brush.reset_zoom()

    return None


def selection_outputs(ctx: AppContext, time_range: TimeRange) -> Tuple[Any, Any, str, str, Dict[str, str]]:
    return (
        ctx.view(FullyOpenAreaView.id).figure,
        ctx.view(ClosedAreaView.id).figure,
        ctx.labels.minimum,
        ctx.labels.maximum,
        time_range.to_dict(),
    )


def handle_time_series_event(ctx: AppContext, prop: Optional[str], selected_data: Any, relayout_data: Any):
    """
    Apply one line-chart event and return the callback outputs.

    Raises PreventUpdate when the event is unreadable or published nothing.
    """
    try:
        time_range = apply_time_series_event(ctx, prop, selected_data, relayout_data)
    except (ValueError, TypeError):
        logger.exception(
            "Could not interpret time-series event",
            extra={"prop": prop, "selected_data": selected_data, "relayout_data": relayout_data},
        )
        raise exceptions.PreventUpdate

    if time_range is None:
        raise exceptions.PreventUpdate

    # Fires on every drag tick.
    start, end = time_range.formatted()
    logger.debug("selection_changed", extra={"start": start, "end": end, "trigger": prop})
    return selection_outputs(ctx, time_range)


def register_selection_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Line chart brush/zoom -> broadcaster -> linked views + labels
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Graph.AREA_FULLY_OPEN, "figure"),
        Output(IDs.Graph.AREA_CLOSED, "figure"),
        Output(IDs.Label.TIME_PERIOD_MIN, "children"),
        Output(IDs.Label.TIME_PERIOD_MAX, "children"),
        Output(IDs.Store.SELECTION, "data"),
        Input(IDs.Graph.TIME_SERIES, "selectedData"),
        Input(IDs.Graph.TIME_SERIES, "relayoutData"),
        prevent_initial_call=True,
    )
    def on_time_series_event(selected_data, relayout_data):
        prop = triggered_prop(dash.ctx.triggered)
        return handle_time_series_event(ctx, prop, selected_data, relayout_data)
