from __future__ import annotations

import logging
from typing import Any, Optional

import plotly.graph_objs as go

logger = logging.getLogger(__name__)


def message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def error_figure(details: str) -> go.Figure:
    return message_figure("Something went wrong while rendering this view.", details)


def triggered_prop(triggered: Any) -> Optional[str]:
    """
    Property name of the first trigger in a Dash `ctx.triggered` list,
    e.g. [{"prop_id": "line-chart-covid.selectedData", ...}] -> "selectedData".
    """
    if not triggered:
        return None
    prop_id = triggered[0].get("prop_id", "")
    if "." not in prop_id:
        return None
    return prop_id.rsplit(".", 1)[1]
