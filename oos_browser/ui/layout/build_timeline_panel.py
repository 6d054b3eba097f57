from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import dcc, html

from oos_browser.core.period_labels import PeriodLabels
from oos_browser.ui.ids import IDs


def build_timeline_panel(
    line_figure: go.Figure,
    fully_open_figure: go.Figure,
    closed_figure: go.Figure,
    labels: PeriodLabels,
) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("School status during COVID-19", className="me-auto"),
                        dbc.Button(
                            "Draw lines",
                            id=IDs.Control.DRAW_LINES_BTN,
                            color="primary",
                            size="sm",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dcc.Graph(
                        id=IDs.Graph.TIME_SERIES,
                        figure=line_figure,
                        config={"responsive": True, "scrollZoom": True},
                    ),
                    html.Div(
                        [
                            html.Strong("Selected period: "),
                            html.Span(labels.minimum, id=IDs.Label.TIME_PERIOD_MIN),
                            " to ",
                            html.Span(labels.maximum, id=IDs.Label.TIME_PERIOD_MAX),
                        ],
                        className="my-2",
                    ),
                    html.Small(
                        "Drag across the chart to select a period; scroll or drag the axis to zoom.",
                        className="text-muted",
                    ),
                    dbc.Row(
                        [
                            dbc.Col(
                                dcc.Graph(id=IDs.Graph.AREA_FULLY_OPEN, figure=fully_open_figure),
                                md=6,
                            ),
                            dbc.Col(
                                dcc.Graph(id=IDs.Graph.AREA_CLOSED, figure=closed_figure),
                                md=6,
                            ),
                        ],
                        className="gx-3 mt-2",
                    ),
                ]
            ),
        ],
        className="oob-card",
    )
