from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import dcc, html

from oos_browser.ui.ids import IDs


def build_map_panel(figure: go.Figure) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(html.Strong("Out of school rates around the world"), className="p-2"),
            dbc.CardBody(
                [
                    dcc.Graph(id=IDs.Graph.MAP, figure=figure, config={"responsive": True}),
                    html.Small(
                        "Click a country to see its out-of-school trend; the chart starts on the global average.",
                        className="text-muted",
                    ),
                ]
            ),
        ],
        className="oob-card",
    )
