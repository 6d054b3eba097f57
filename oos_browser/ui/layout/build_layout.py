from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from oos_browser.ui.ids import IDs
from oos_browser.ui.layout.build_bar_panel import build_bar_panel
from oos_browser.ui.layout.build_bubble_panel import build_bubble_panel
from oos_browser.ui.layout.build_facts_panel import build_facts_panel
from oos_browser.ui.layout.build_map_panel import build_map_panel
from oos_browser.ui.layout.build_navbar import build_navbar
from oos_browser.ui.layout.build_timeline_panel import build_timeline_panel
from oos_browser.views import BarView, BubbleView, ClosedAreaView, FullyOpenAreaView, MapView, TimeSeriesView

if TYPE_CHECKING:
    from oos_browser.ui.context import AppContext


def build_layout(ctx: AppContext) -> dbc.Container:
    bar_view = ctx.view(BarView.id)

    return dbc.Container(
        fluid=True,
        className="oob-root",
        children=[
            build_navbar(ctx.global_config),

            # Active time selection, mirrored for the session
            dcc.Store(id=IDs.Store.SELECTION, storage_type="session"),

            dbc.Row(dbc.Col(build_map_panel(ctx.view(MapView.id).figure), md=12), className="mt-3"),
            dbc.Row(
                [
                    dbc.Col(build_bubble_panel(ctx.view(BubbleView.id).figure), md=8),
                    dbc.Col(build_facts_panel(), md=4),
                ],
                className="gx-3 mt-3",
            ),
            dbc.Row(
                dbc.Col(build_bar_panel(bar_view.figure, bar_view.category), md=12),
                className="mt-3",
            ),
            dbc.Row(
                dbc.Col(
                    build_timeline_panel(
                        ctx.view(TimeSeriesView.id).figure,
                        ctx.view(FullyOpenAreaView.id).figure,
                        ctx.view(ClosedAreaView.id).figure,
                        ctx.labels,
                    ),
                    md=12,
                ),
                className="mt-3 mb-4",
            ),
        ],
    )
