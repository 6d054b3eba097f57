from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from oos_browser.config.loader import load_datasets
from oos_browser.core.exceptions import ConfigError, DataLoadError
from oos_browser.ui.callbacks.callbacks_render import register_render_callbacks
from oos_browser.ui.callbacks.callbacks_selection import register_selection_callbacks
from oos_browser.ui.context import build_app_context, build_view_registry
from oos_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load config + data. Any failure is fatal: nothing is rendered.
    try:
        global_config, store = load_datasets(config_root)
    except (ConfigError, DataLoadError, FileNotFoundError):
        logger.exception("Failed to load datasets", extra={"config_root": str(config_root)})
        raise

    # 2) Views, broadcaster, labels
    ctx = build_app_context(
        config_root=config_root,
        global_config=global_config,
        store=store,
        registry=build_view_registry(),
    )

    # Resolve assets relative to this package so styles load from any cwd.
    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks
    register_selection_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    return app
