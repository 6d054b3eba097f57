from .time_series_view import TimeSeriesView
from .area_view import AreaView, FullyOpenAreaView, ClosedAreaView
from .bubble_view import BubbleView
from .bar_view import BarView
from .map_view import MapView

__all__ = [
    "TimeSeriesView",
    "AreaView",
    "FullyOpenAreaView",
    "ClosedAreaView",
    "BubbleView",
    "BarView",
    "MapView",
]
