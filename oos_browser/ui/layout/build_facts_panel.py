from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from oos_browser.ui.ids import IDs


def build_facts_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(html.Strong("Did you know?"), className="p-2"),
            dbc.CardBody(
                [
                    html.Div(id=IDs.Control.FACTS_LIST),
                    dbc.Button("Next fact", id=IDs.Control.NEXT_FACT_BTN, color="secondary", size="sm"),
                ]
            ),
        ],
        className="oob-card h-100",
    )
