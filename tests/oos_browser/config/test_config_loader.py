import json
from pathlib import Path

import pandas as pd
import pytest

from oos_browser.config.loader import load_datasets, load_global_config
from oos_browser.core.exceptions import ConfigError, DataLoadError


def _write_config(tmp_path: Path, datasets: dict, global_json: dict = None) -> Path:
    """
    Build a config dir:
        root/
            global.json
            datasets/<key>.json
    """
    config_root = tmp_path / "config"
    datasets_dir = config_root / "datasets"
    datasets_dir.mkdir(parents=True)

    (config_root / "global.json").write_text(json.dumps(global_json or {"data_root": "../data"}))
    for name, entry in datasets.items():
        (datasets_dir / f"{name}.json").write_text(json.dumps(entry))
    return config_root


def _write_covid_csv(tmp_path: Path, name: str = "covid.csv") -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir(exist_ok=True)
    frame = pd.DataFrame(
        {
            "Date": ["2020-02-17", "2020-02-24", "2020-03-02"],
            "Fully_Open": [200, 180, 120],
            "Closed": [5, 25, 80],
            "Note": ["a", "b", "c"],
        }
    )
    path = data_dir / name
    frame.to_csv(path, index=False)
    return path


COVID_ENTRY = {
    "key": "covid_closures",
    "name": "Closures",
    "file": "covid.csv",
    "date_column": "Date",
    "date_format": "%Y-%m-%d",
    "numeric_columns": "auto",
    "required_columns": ["Fully_Open", "Closed"],
}


def test_load_datasets_from_config_dir(tmp_path):
    _write_covid_csv(tmp_path)
    config_root = _write_config(
        tmp_path,
        {"covid_closures": COVID_ENTRY},
        {
            "ui_title": "Test Browser",
            "data_root": "../data",
            "viewport": {"width": 900, "height": 400},
            "viewports": {"bar": {"height": 500}},
        },
    )

    global_config, store = load_datasets(config_root)

    assert global_config.ui_title == "Test Browser"
    assert global_config.data_root == (tmp_path / "data").resolve()
    assert global_config.viewport_for("bar").height == 500
    assert global_config.viewport_for("bar").width == 900
    assert global_config.viewport_for("map").height == 400

    ds = store["covid_closures"]
    assert ds.name == "Closures"
    assert ds.date_column == "Date"
    assert pd.api.types.is_datetime64_any_dtype(ds.frame["Date"])
    assert pd.api.types.is_numeric_dtype(ds.frame["Closed"])
    assert ds.frame["Note"].tolist() == ["a", "b", "c"]
    assert ds.date_extent().formatted() == ("2020-02-17", "2020-03-02")


def test_year_dates_parse_with_format(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    pd.DataFrame({"name": ["Niger", "Niger"], "year": [2015, 2016], "value": [50, 48]}).to_csv(
        data_dir / "rates.csv", index=False
    )
    config_root = _write_config(
        tmp_path,
        {"rates": {"key": "oos_rates", "file": "rates.csv", "date_column": "year", "date_format": "%Y",
                   "numeric_columns": ["value"]}},
    )

    _, store = load_datasets(config_root)

    years = store["oos_rates"].frame["year"]
    assert list(years.dt.year) == [2015, 2016]


def test_env_data_root_overrides_config(tmp_path, monkeypatch):
    other = tmp_path / "elsewhere"
    other.mkdir()
    _write_covid_csv(tmp_path)
    (tmp_path / "data" / "covid.csv").rename(other / "covid.csv")
    config_root = _write_config(tmp_path, {"covid_closures": COVID_ENTRY})

    monkeypatch.setenv("OOS_BROWSER_DATA_ROOT", str(other))
    _, store = load_datasets(config_root)

    assert store["covid_closures"].file_path == other / "covid.csv"


def test_missing_file_raises_data_load_error(tmp_path):
    config_root = _write_config(tmp_path, {"covid_closures": COVID_ENTRY})

    with pytest.raises(DataLoadError, match="file not found"):
        load_datasets(config_root)


def test_missing_required_column_raises(tmp_path):
    _write_covid_csv(tmp_path)
    entry = dict(COVID_ENTRY, required_columns=["Fully_Open", "Partially_Open"])
    config_root = _write_config(tmp_path, {"covid_closures": entry})

    with pytest.raises(DataLoadError, match="Partially_Open"):
        load_datasets(config_root)


def test_unparseable_dates_raise(tmp_path):
    _write_covid_csv(tmp_path)
    entry = dict(COVID_ENTRY, date_format="%d/%m/%Y")
    config_root = _write_config(tmp_path, {"covid_closures": entry})

    with pytest.raises(DataLoadError, match="could not parse"):
        load_datasets(config_root)


def test_non_numeric_explicit_column_raises(tmp_path):
    _write_covid_csv(tmp_path)
    entry = dict(COVID_ENTRY, numeric_columns=["Note"])
    config_root = _write_config(tmp_path, {"covid_closures": entry})

    with pytest.raises(DataLoadError):
        load_datasets(config_root)


def test_empty_csv_raises(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "covid.csv").write_text("")
    config_root = _write_config(tmp_path, {"covid_closures": COVID_ENTRY})

    with pytest.raises(DataLoadError, match="could not read"):
        load_datasets(config_root)


def test_duplicate_dataset_keys_raise_config_error(tmp_path):
    _write_covid_csv(tmp_path)
    config_root = _write_config(tmp_path, {"a": COVID_ENTRY, "b": COVID_ENTRY})

    with pytest.raises(ConfigError, match="already loaded"):
        load_datasets(config_root)


def test_invalid_json_raises_config_error(tmp_path):
    config_root = _write_config(tmp_path, {})
    (config_root / "global.json").write_text("{not json")

    with pytest.raises(ConfigError):
        load_global_config(config_root)


def test_dataset_entry_without_file_raises_config_error(tmp_path):
    config_root = _write_config(tmp_path, {"broken": {"key": "broken"}})

    with pytest.raises(ConfigError, match="no 'file'"):
        load_global_config(config_root)


def test_missing_global_json_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_global_config(tmp_path)


def test_invalid_viewport_raises_config_error(tmp_path):
    config_root = _write_config(tmp_path, {}, {"viewport": {"width": 10, "height": 10}})

    with pytest.raises(ConfigError):
        load_global_config(config_root)


def test_defaults_when_keys_are_absent(tmp_path):
    config_root = _write_config(tmp_path, {}, {"ui_title": "Only title"})

    cfg = load_global_config(config_root)

    assert cfg.ui_title == "Only title"
    assert cfg.data_root is None
    assert cfg.datasets == []
    assert cfg.default_viewport.width == 800
