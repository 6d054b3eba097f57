from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import dcc, html

from oos_browser.ui.ids import IDs

_BUTTONS = [
    (IDs.Control.BUBBLE_ALL, "All countries"),
    (IDs.Control.BUBBLE_REGION, "By region"),
    (IDs.Control.BUBBLE_DEV_STATUS, "By development status"),
    (IDs.Control.BUBBLE_GENDER, "By gender"),
    (IDs.Control.BUBBLE_URBAN, "By residence"),
]


def build_bubble_panel(figure: go.Figure) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Lower secondary out of school rate", className="me-auto"),
                        dbc.ButtonGroup(
                            [
                                dbc.Button(label, id=button_id, color="secondary", outline=True, size="sm")
                                for button_id, label in _BUTTONS
                            ]
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(dcc.Graph(id=IDs.Graph.BUBBLE, figure=figure, config={"responsive": True})),
        ],
        className="oob-card",
    )
