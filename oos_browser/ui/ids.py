from __future__ import annotations

from typing import Dict

__all__ = ["IDs", "BUBBLE_MODE_BY_BUTTON"]


class IDs:
    class Store:
        SELECTION = "selection-state"

    class Graph:
        MAP = "map-graph"
        BUBBLE = "bubble-graph"
        BAR = "bar-graph"
        TIME_SERIES = "line-chart-covid"
        AREA_FULLY_OPEN = "area-chart-fully-open"
        AREA_CLOSED = "area-chart-closed"

    class Control:
        DRAW_LINES_BTN = "draw-lines-btn"
        BAR_CATEGORY_SELECT = "bar-category-select"

        # Bubble layout buttons
        BUBBLE_ALL = "bubble-all-countries"
        BUBBLE_REGION = "bubble-by-region"
        BUBBLE_DEV_STATUS = "bubble-by-dev-status"
        BUBBLE_GENDER = "bubble-by-gender"
        BUBBLE_URBAN = "bubble-by-urban"

        # Facts panel
        NEXT_FACT_BTN = "next-fact-btn"
        FACTS_LIST = "fact-generator"

    class Label:
        TIME_PERIOD_MIN = "time-period-min"
        TIME_PERIOD_MAX = "time-period-max"


BUBBLE_MODE_BY_BUTTON: Dict[str, str] = {
    IDs.Control.BUBBLE_ALL: "all",
    IDs.Control.BUBBLE_REGION: "region",
    IDs.Control.BUBBLE_DEV_STATUS: "dev_status",
    IDs.Control.BUBBLE_GENDER: "gender",
    IDs.Control.BUBBLE_URBAN: "urban",
}
