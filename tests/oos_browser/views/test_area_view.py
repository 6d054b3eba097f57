import numpy as np
import pandas as pd
import pytest

from oos_browser.core.broadcaster import SELECTION_CHANGED, SelectionBroadcaster
from oos_browser.core.base_view import ViewState
from oos_browser.core.dataset import Dataset
from oos_browser.core.exceptions import ViewStateError
from oos_browser.core.time_range import TimeRange
from oos_browser.core.viewport import Viewport
from oos_browser.views.area_view import ClosedAreaView, FullyOpenAreaView


def _make_covid_dataset() -> Dataset:
    """
    Daily school status counts for 2020 (366 rows).
    Fully_Open peaks at 200 on 2020-01-01; Closed sits at 150 from March through May.
    """
    dates = pd.date_range("2020-01-01", "2020-12-31", freq="D")
    day = np.arange(len(dates))
    closed = np.where((day >= 60) & (day < 150), 150, 10)
    frame = pd.DataFrame(
        {
            "Date": dates,
            "Fully_Open": 200 - closed + 10 - (day % 7),
            "Partially_Open": 5,
            "Closed": closed,
            "Academic_Break": day % 3,
        }
    )
    return Dataset(key="covid_closures", name="Closures", frame=frame, date_column="Date")


def _make_view(cls=FullyOpenAreaView):
    view = cls(_make_covid_dataset(), Viewport(800, 400), SelectionBroadcaster())
    view.initialize()
    return view


def test_initial_render_covers_full_extent():
    view = _make_view()

    assert view.state is ViewState.INITIALIZED
    assert view.scales.x.domain == (pd.Timestamp("2020-01-01"), pd.Timestamp("2020-12-31"))
    assert view.scales.y.domain == (0.0, 200.0)
    assert len(view.figure.data[0].x) == 366


def test_selection_filters_inclusively_and_recomputes_x_domain():
    view = _make_view()

    view.on_selection_changed(TimeRange("2020-03-01", "2020-06-01"))

    dates = view.filtered_view["Date"]
    assert dates.min() == pd.Timestamp("2020-03-01")
    assert dates.max() == pd.Timestamp("2020-06-01")
    assert len(view.filtered_view) == 93
    assert view.scales.x.domain == (pd.Timestamp("2020-03-01"), pd.Timestamp("2020-06-01"))
    assert view.state is ViewState.UPDATED


def test_y_domain_is_fixed_across_selections():
    view = _make_view(ClosedAreaView)
    full_y = view.scales.y.domain

    view.on_selection_changed(TimeRange("2020-09-01", "2020-09-30"))

    # Closed is 10 throughout September but the axis keeps the full-data max.
    assert view.filtered_view["Closed"].max() == 10
    assert view.scales.y.domain == full_y == (0.0, 150.0)


def test_empty_selection_renders_without_error():
    view = _make_view()
    window = TimeRange("2021-01-01", "2021-02-01")

    fig = view.on_selection_changed(window)

    assert view.filtered_view.empty
    assert view.scales.x.domain == (window.start, window.end)
    assert "no records" in fig.layout.title.text


def test_same_selection_twice_is_idempotent():
    view = _make_view()
    window = TimeRange("2020-03-01", "2020-06-01")

    first = view.on_selection_changed(window).to_json()
    first_rows = view.filtered_view.copy()
    second = view.on_selection_changed(window).to_json()

    assert first == second
    pd.testing.assert_frame_equal(first_rows, view.filtered_view)


def test_selection_before_initialize_is_rejected():
    view = FullyOpenAreaView(_make_covid_dataset(), Viewport(800, 400))

    with pytest.raises(ViewStateError):
        view.on_selection_changed(TimeRange("2020-03-01", "2020-06-01"))


def test_subscribed_view_updates_on_publish():
    broadcaster = SelectionBroadcaster()
    view = FullyOpenAreaView(_make_covid_dataset(), Viewport(800, 400), broadcaster)
    view.initialize()
    broadcaster.subscribe(SELECTION_CHANGED, view.on_selection_changed)

    broadcaster.publish(SELECTION_CHANGED, TimeRange("2020-04-01", "2020-04-30"))

    assert len(view.filtered_view) == 30
    assert view.time_range == TimeRange("2020-04-01", "2020-04-30")


def test_missing_column_is_rejected():
    frame = pd.DataFrame({"Date": pd.to_datetime(["2020-01-01"]), "Fully_Open": [1]})
    ds = Dataset(key="covid_closures", name="Closures", frame=frame, date_column="Date")

    with pytest.raises(KeyError):
        ClosedAreaView(ds, Viewport(800, 400))


def test_degenerate_selection_keeps_only_that_day():
    view = _make_view()

    view.on_selection_changed(TimeRange("2020-04-15", "2020-04-15"))

    assert list(view.filtered_view["Date"]) == [pd.Timestamp("2020-04-15")]
    assert view.state is ViewState.UPDATED
