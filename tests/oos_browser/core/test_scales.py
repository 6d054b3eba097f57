import pandas as pd
import pytest

from oos_browser.core.scales import BandScale, LinearScale, TimeScale, ZoomTransform


def _make_year_scale() -> TimeScale:
    return TimeScale(domain=("2020-01-01", "2020-12-31"), range=(0, 720))


def test_linear_scale_maps_and_inverts():
    scale = LinearScale(domain=(0, 200), range=(400, 0))

    assert scale(0) == 400
    assert scale(200) == 0
    assert scale(100) == 200
    assert scale.invert(100) == pytest.approx(150)


def test_linear_scale_from_max_ignores_nan_and_handles_empty():
    assert LinearScale.from_max([3, float("nan"), 7], (100, 0)).domain == (0.0, 7.0)
    assert LinearScale.from_max([], (100, 0)).domain == (0.0, 0.0)


def test_degenerate_linear_domain_maps_to_middle():
    scale = LinearScale(domain=(0, 0), range=(100, 0))
    assert scale(0) == 50


def test_time_scale_endpoints_map_to_range_ends():
    scale = _make_year_scale()

    assert scale("2020-01-01") == 0
    assert scale("2020-12-31") == 720
    assert scale.invert(0) == pd.Timestamp("2020-01-01")
    assert scale.invert(720) == pd.Timestamp("2020-12-31")


def test_time_scale_inverse_round_trips_dates():
    scale = _make_year_scale()

    for day in ("2020-03-01", "2020-06-01", "2020-09-17"):
        assert scale.invert(scale(day)) == pd.Timestamp(day)


def test_time_scale_clamp_pixel():
    scale = _make_year_scale()

    assert scale.clamp_pixel(-10) == 0
    assert scale.clamp_pixel(800) == 720
    assert scale.clamp_pixel(12.5) == 12.5


def test_time_scale_from_dates():
    scale = TimeScale.from_dates(["2020-05-01", "2020-02-01", None], (0, 100))
    assert scale.domain == (pd.Timestamp("2020-02-01"), pd.Timestamp("2020-05-01"))

    assert TimeScale.from_dates([], (0, 100)) is None


def test_band_scale_positions_follow_padding():
    scale = BandScale(domain=("a", "b", "c"), range=(0, 100), padding=0.1)

    step = 100 / 3.1
    assert scale.step == pytest.approx(step)
    assert scale.bandwidth == pytest.approx(step * 0.9)
    assert scale("a") == pytest.approx((100 - step * 2.9) / 2)
    assert scale("c") - scale("b") == pytest.approx(step)
    assert scale("missing") is None


def test_zoom_constrain_clamps_scale_and_translation():
    assert ZoomTransform(k=0.5, x=10).constrain((0, 100)) == ZoomTransform(k=1.0, x=0.0)
    assert ZoomTransform(k=50, x=0).constrain((0, 100)).k == 20
    assert ZoomTransform(k=2, x=-500).constrain((0, 100)) == ZoomTransform(k=2, x=-100)
    assert ZoomTransform(k=2, x=30).constrain((0, 100)) == ZoomTransform(k=2, x=0)


def test_identity_rescale_keeps_domain():
    scale = _make_year_scale()
    assert ZoomTransform.identity().rescale(scale).domain == scale.domain


def test_for_window_makes_window_fill_range():
    scale = _make_year_scale()
    transform = ZoomTransform.for_window(scale, "2020-03-01", "2020-06-01")

    zoomed = transform.rescale(scale)

    start, end = zoomed.domain
    assert abs(start - pd.Timestamp("2020-03-01")) < pd.Timedelta(seconds=1)
    assert abs(end - pd.Timestamp("2020-06-01")) < pd.Timedelta(seconds=1)


def test_for_window_of_zero_width_is_identity():
    scale = _make_year_scale()
    assert ZoomTransform.for_window(scale, "2020-03-01", "2020-03-01") == ZoomTransform.identity()
