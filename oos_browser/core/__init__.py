"""
Core domain layer: dataset store, time ranges and scales, the selection
broadcaster and brush controller, the view base classes and the view registry
"""

from .dataset import Dataset, DatasetStore
from .time_range import TimeRange
from .broadcaster import SelectionBroadcaster, SELECTION_CHANGED
from .brush import BrushController
from .base_view import BaseView, LinkedView, ViewState
from .view_registry import ViewRegistry
from .viewport import Viewport

__all__ = [
    "Dataset",
    "DatasetStore",
    "TimeRange",
    "SelectionBroadcaster",
    "SELECTION_CHANGED",
    "BrushController",
    "BaseView",
    "LinkedView",
    "ViewState",
    "ViewRegistry",
    "Viewport",
]
