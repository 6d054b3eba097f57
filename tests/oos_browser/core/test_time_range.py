import pandas as pd
import pytest

from oos_browser.core.time_range import TimeRange


def test_time_range_coerces_bounds_to_timestamps():
    tr = TimeRange("2020-03-01", "2020-06-01")

    assert tr.start == pd.Timestamp("2020-03-01")
    assert tr.end == pd.Timestamp("2020-06-01")
    assert not tr.is_degenerate


def test_time_range_rejects_reversed_bounds():
    with pytest.raises(ValueError):
        TimeRange("2020-06-01", "2020-03-01")


def test_time_range_rejects_missing_bounds():
    with pytest.raises(ValueError):
        TimeRange(pd.NaT, "2020-03-01")


def test_normalized_orders_bounds():
    tr = TimeRange.normalized("2020-06-01", "2020-03-01")
    assert tr == TimeRange("2020-03-01", "2020-06-01")


def test_degenerate_range_contains_only_its_instant():
    tr = TimeRange("2020-04-01", "2020-04-01")

    assert tr.is_degenerate
    assert tr.contains("2020-04-01")
    assert not tr.contains("2020-04-02")


def test_contains_is_inclusive_on_both_ends():
    tr = TimeRange("2020-03-01", "2020-06-01")

    assert tr.contains("2020-03-01")
    assert tr.contains("2020-06-01")
    assert not tr.contains("2020-02-29")


def test_formatted_uses_iso_dates():
    tr = TimeRange(pd.Timestamp("2020-03-01 13:45"), pd.Timestamp("2020-06-01"))
    assert tr.formatted() == ("2020-03-01", "2020-06-01")


def test_dict_round_trip():
    tr = TimeRange("2020-03-01", "2020-06-01")
    data = tr.to_dict()

    assert data == {"start": "2020-03-01T00:00:00", "end": "2020-06-01T00:00:00"}
    assert TimeRange.from_dict(data) == tr
