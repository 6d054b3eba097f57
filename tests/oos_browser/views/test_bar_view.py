import pandas as pd
import pytest

from oos_browser.core.dataset import Dataset
from oos_browser.core.viewport import Viewport
from oos_browser.views.bar_view import BarView


def _make_primary_dataset(frame: pd.DataFrame = None) -> Dataset:
    if frame is None:
        frame = pd.DataFrame(
            {
                "Region": ["SA", "SSA", "NA"],
                "Female": [9, 21, 2],
                "Male": [7, 17, 2],
                "Urban": [5, 10, 2],
                "Rural": [10, 25, 3],
            }
        )
    return Dataset(key="primary_demographics", name="Primary", frame=frame)


def _make_view() -> BarView:
    view = BarView(_make_primary_dataset(), Viewport(800, 400))
    view.initialize()
    return view


def test_default_category_is_gender():
    view = _make_view()

    assert [trace.name for trace in view.figure.data] == ["Female", "Male"]
    assert list(view.figure.data[0].y) == [9, 21, 2]
    assert list(view.figure.layout.xaxis.ticktext) == ["South Asia", "Sub-Saharan Africa", "North America"]


def test_switching_category_redraws_with_new_attributes():
    view = _make_view()

    fig = view.set_category("Residency")

    assert [trace.name for trace in fig.data] == ["Urban", "Rural"]
    assert view.scales.y.domain == (0.0, 25.0)


def test_y_domain_covers_both_attributes():
    view = _make_view()
    assert view.scales.y.domain == (0.0, 21.0)


def test_band_scale_spans_half_the_width():
    view = _make_view()

    assert view.scales.x.domain == ("SA", "SSA", "NA")
    assert view.scales.x.range == (0, 720 / 2)
    assert view.scales.x("SSA") - view.scales.x("SA") == pytest.approx(view.scales.x.step)


def test_unknown_category_is_rejected():
    view = _make_view()

    with pytest.raises(ValueError):
        view.set_category("Income")
    assert view.category == "Gender"


def test_missing_columns_raise():
    frame = pd.DataFrame({"Region": ["SA"], "Female": [1]})
    view = BarView(_make_primary_dataset(frame), Viewport(800, 400))

    with pytest.raises(KeyError):
        view.initialize()


def test_empty_table_renders_placeholder():
    frame = pd.DataFrame(columns=["Region", "Female", "Male", "Urban", "Rural"])
    view = BarView(_make_primary_dataset(frame), Viewport(800, 400))

    fig = view.initialize()

    assert fig.layout.title.text == "No regional data available"
