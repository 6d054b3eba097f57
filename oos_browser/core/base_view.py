from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

import pandas as pd
import plotly.graph_objs as go

from .broadcaster import SelectionBroadcaster
from .dataset import Dataset
from .exceptions import ViewStateError
from .time_range import TimeRange
from .viewport import Viewport

logger = logging.getLogger(__name__)


class ViewState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    UPDATED = "updated"


class BaseView(ABC):
    """
    Abstract base class for all chart views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally
    - expose a 'label' - used for UI/human-readable applications
    - expose a 'dataset_key' - which dataset in the store the view draws
    - implement 'compute_data' - derive the data to draw from the dataset
    - implement 'render_figure' - build the Plotly figure from that data
    """

    id: str = None
    label: str = None
    dataset_key: str = None
    subscribes: bool = False

    def __init__(
        self,
        dataset: Dataset,
        viewport: Viewport,
        broadcaster: Optional[SelectionBroadcaster] = None,
    ):
        self.dataset = dataset
        self.viewport = viewport
        self.broadcaster = broadcaster
        self.state = ViewState.UNINITIALIZED
        self.figure: Optional[go.Figure] = None

    @abstractmethod
    def compute_data(self, time_range: Optional[TimeRange]) -> Any:
        """
        Compute the data to draw
        :param time_range: the active selection, or None for the view's full extent
        :return: data: usually a dataframe, consumed by {@link render_figure()}
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :return: the Plotly figure
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self) -> go.Figure:
        """First full render: Uninitialized -> Initialized."""
        self.figure = self.render_figure(self.compute_data(None))
        self.state = ViewState.INITIALIZED
        logger.info("View initialized", extra={"view_id": self.id, "dataset": self.dataset.key})
        return self.figure

    def redraw(self) -> go.Figure:
        """Re-render after a view-local interaction (mode switch, click) without changing lifecycle state."""
        self._require_initialized()
        self.figure = self.render_figure(self.compute_data(None))
        return self.figure

    def _require_initialized(self) -> None:
        if self.state is ViewState.UNINITIALIZED:
            raise ViewStateError(f"View '{self.id}' used before initialize()")

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def apply_viewport(self, fig: go.Figure) -> go.Figure:
        fig.update_layout(
            width=self.viewport.width,
            height=self.viewport.height,
            margin=self.viewport.margin.to_plotly(),
        )
        return fig

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig


class LinkedView(BaseView):
    """
    A view that follows the shared time selection.

    On every selection it filters its records to the range (inclusive both ends),
    recomputes its scales from the filtered records and re-renders:
    Initialized -> Updated -> Updated ...
    """

    subscribes = True

    def __init__(
        self,
        dataset: Dataset,
        viewport: Viewport,
        broadcaster: Optional[SelectionBroadcaster] = None,
    ):
        super().__init__(dataset, viewport, broadcaster)
        self.time_range: Optional[TimeRange] = None
        self.filtered_view: pd.DataFrame = dataset.filtered(None)

    def compute_data(self, time_range: Optional[TimeRange]) -> pd.DataFrame:
        return self.dataset.filtered(time_range)

    def on_selection_changed(self, time_range: TimeRange) -> go.Figure:
        self._require_initialized()

        self.time_range = time_range
        self.filtered_view = self.compute_data(time_range)
        self.figure = self.render_figure(self.filtered_view)
        self.state = ViewState.UPDATED

        logger.debug(
            "View updated from selection",
            extra={"view_id": self.id, "n_records": len(self.filtered_view)},
        )
        return self.figure

    def redraw(self) -> go.Figure:
        self._require_initialized()
        self.figure = self.render_figure(self.filtered_view)
        return self.figure
