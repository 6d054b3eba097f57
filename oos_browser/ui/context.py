from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from oos_browser.config.model import GlobalConfig
from oos_browser.core.base_view import BaseView, LinkedView
from oos_browser.core.broadcaster import SELECTION_CHANGED, SelectionBroadcaster
from oos_browser.core.dataset import DatasetStore
from oos_browser.core.facts import FactCycler
from oos_browser.core.period_labels import PeriodLabels
from oos_browser.core.view_registry import ViewRegistry
from oos_browser.views import (
    BarView,
    BubbleView,
    ClosedAreaView,
    FullyOpenAreaView,
    MapView,
    TimeSeriesView,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """
    Holds shared state for the Dash app: config, loaded datasets, the
    broadcaster and the live view instances. This is passed into layout +
    callback registration functions instead of using module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    store: DatasetStore
    broadcaster: SelectionBroadcaster
    registry: ViewRegistry
    views: Dict[str, BaseView]
    labels: PeriodLabels
    facts: FactCycler

    def view(self, view_id: str) -> BaseView:
        try:
            return self.views[view_id]
        except KeyError:
            raise KeyError(f"View '{view_id}' not built")

    @property
    def time_series(self) -> TimeSeriesView:
        return self.view(TimeSeriesView.id)

    def linked_views(self) -> List[LinkedView]:
        return [view for view in self.views.values() if isinstance(view, LinkedView)]


def build_view_registry() -> ViewRegistry:
    registry = ViewRegistry()
    registry.register(MapView)
    registry.register(BubbleView)
    registry.register(BarView)
    # Linked views subscribe in registration order.
    registry.register(TimeSeriesView)
    registry.register(FullyOpenAreaView)
    registry.register(ClosedAreaView)
    return registry


def build_app_context(
    config_root: Path,
    global_config: GlobalConfig,
    store: DatasetStore,
    registry: Optional[ViewRegistry] = None,
) -> AppContext:
    """
    Build every registered view, render it once and wire the linked ones
    (plus the period labels) to a fresh broadcaster.
    """
    registry = registry or build_view_registry()
    broadcaster = SelectionBroadcaster()

    views: Dict[str, BaseView] = {}
    for cls in registry.all_classes():
        view = registry.create(cls.id, store, global_config.viewport_for(cls.id), broadcaster)
        view.initialize()
        if view.subscribes:
            broadcaster.subscribe(SELECTION_CHANGED, view.on_selection_changed)
        views[cls.id] = view

    if TimeSeriesView.id not in views:
        raise KeyError(f"View '{TimeSeriesView.id}' is required to host the time brush")

    labels = PeriodLabels(views[TimeSeriesView.id].brush.full_range)
    broadcaster.subscribe(SELECTION_CHANGED, labels.on_selection_changed)

    logger.info(
        "App context built",
        extra={
            "views": list(views),
            "n_subscribers": broadcaster.subscriber_count(SELECTION_CHANGED),
        },
    )

    return AppContext(
        config_root=config_root,
        global_config=global_config,
        store=store,
        broadcaster=broadcaster,
        registry=registry,
        views=views,
        labels=labels,
        facts=FactCycler(),
    )
