from __future__ import annotations

from oos_browser.core.time_range import TimeRange


class PeriodLabels:
    """
    Text of the `time-period-min` / `time-period-max` labels.

    Subscribed to the broadcaster like a view; always shows the active range as YYYY-MM-DD.
    """

    def __init__(self, initial: TimeRange) -> None:
        self.minimum, self.maximum = initial.formatted()

    def on_selection_changed(self, time_range: TimeRange) -> None:
        self.minimum, self.maximum = time_range.formatted()
