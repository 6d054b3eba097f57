import pandas as pd
import pytest

from oos_browser.core.dataset import Dataset, DatasetStore, filter_by_range
from oos_browser.core.time_range import TimeRange


def _make_dataset(key: str = "covid_closures") -> Dataset:
    frame = pd.DataFrame(
        {
            "Date": pd.to_datetime(
                ["2020-01-01", "2020-03-01", "2020-04-15", "2020-06-01", "2020-06-02", "2020-12-31"]
            ),
            "Closed": [0, 10, 150, 90, 88, 20],
        }
    )
    return Dataset(key=key, name="Closures", frame=frame, date_column="Date")


def test_filter_is_inclusive_on_both_ends():
    ds = _make_dataset()

    filtered = ds.filtered(TimeRange("2020-03-01", "2020-06-01"))

    assert list(filtered["Date"].dt.strftime("%Y-%m-%d")) == ["2020-03-01", "2020-04-15", "2020-06-01"]


def test_degenerate_range_keeps_rows_on_that_instant():
    ds = _make_dataset()

    assert len(ds.filtered(TimeRange("2020-04-15", "2020-04-15"))) == 1
    assert ds.filtered(TimeRange("2020-04-16", "2020-04-16")).empty


def test_filter_never_mutates_the_source():
    ds = _make_dataset()
    before = ds.frame.copy()

    filtered = ds.filtered(TimeRange("2020-03-01", "2020-06-01"))
    filtered["Closed"] = -1

    pd.testing.assert_frame_equal(ds.frame, before)


def test_filtered_none_returns_full_copy():
    ds = _make_dataset()

    everything = ds.filtered(None)

    assert len(everything) == len(ds)
    assert everything is not ds.frame


def test_filter_by_range_outside_data_is_empty():
    ds = _make_dataset()
    result = filter_by_range(ds.frame, "Date", TimeRange("2021-01-01", "2021-02-01"))
    assert result.empty


def test_date_extent():
    ds = _make_dataset()
    assert ds.date_extent() == TimeRange("2020-01-01", "2020-12-31")


def test_dataset_without_date_column_cannot_filter():
    ds = Dataset(key="bar", name="Bar", frame=pd.DataFrame({"Region": ["SA"]}))

    assert ds.date_extent() is None
    with pytest.raises(ValueError):
        ds.filtered(None)


def test_missing_date_column_is_rejected():
    with pytest.raises(KeyError):
        Dataset(key="x", name="X", frame=pd.DataFrame({"a": [1]}), date_column="Date")


def test_store_lookup_and_duplicates():
    store = DatasetStore([_make_dataset("a"), _make_dataset("b")])

    assert store.keys() == ["a", "b"]
    assert "a" in store
    assert store["b"].key == "b"
    assert store.get("missing") is None

    with pytest.raises(KeyError, match="not loaded"):
        store["missing"]
    with pytest.raises(ValueError):
        store.add(_make_dataset("a"))
