from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import dcc, html

from oos_browser.ui.ids import IDs
from oos_browser.views.bar_view import CATEGORIES


def build_bar_panel(figure: go.Figure, category: str) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Primary out of school rate by region", className="me-auto"),
                        dbc.Select(
                            id=IDs.Control.BAR_CATEGORY_SELECT,
                            options=[{"label": name, "value": name} for name in CATEGORIES],
                            value=category,
                            size="sm",
                            style={"width": "12rem"},
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(dcc.Graph(id=IDs.Graph.BAR, figure=figure, config={"responsive": True})),
        ],
        className="oob-card",
    )
