from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from oos_browser.config.model import DatasetConfig, GlobalConfig
from oos_browser.core.dataset import DatasetStore
from oos_browser.core.dataset_loader import from_config
from oos_browser.core.exceptions import ConfigError
from oos_browser.core.viewport import Viewport

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a JSON object in {path}")
    return raw


def _parse_viewports(raw_global: Dict[str, Any]) -> Tuple[Viewport, Dict[str, Viewport]]:
    try:
        default = Viewport.from_dict(raw_global.get("viewport"))
        viewports = {
            view_id: Viewport.from_dict(spec, default=default)
            for view_id, spec in (raw_global.get("viewports") or {}).items()
        }
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid viewport configuration: {exc}") from exc
    return default, viewports


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json
            datasets/
                covid_closures.json
                oos_rates.json
                ...

    - ui_title / subtitle: text for the navbar
    - data_root: directory holding the CSV files; relative paths resolve against 'root'
    - viewport / viewports: default and per-view drawing sizes

    :param root: Directory containing 'global.json' and 'datasets/'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if a file is not valid JSON or a dataset entry is incomplete.
    """
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    raw_global = _read_json(global_path)

    datasets: List[DatasetConfig] = []
    datasets_dir = root / "datasets"
    if datasets_dir.is_dir():
        for idx, config_file in enumerate(sorted(datasets_dir.glob("*.json"))):
            raw = _read_json(config_file)
            if "file" not in raw:
                raise ConfigError(f"Dataset config {config_file} has no 'file' entry")
            datasets.append(DatasetConfig.from_raw(raw, source_path=config_file, index=idx))

    data_root_raw = raw_global.get("data_root")
    if data_root_raw is None:
        data_root = None
    else:
        data_root_path = Path(data_root_raw)
        data_root = data_root_path if data_root_path.is_absolute() else (root / data_root_path).resolve()

    default_viewport, viewports = _parse_viewports(raw_global)

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", "Out of School"),
        subtitle=raw_global.get("subtitle", "Children out of school and COVID-19 closures"),
        datasets=datasets,
        data_root=data_root,
        default_viewport=default_viewport,
        viewports=viewports,
    )


def load_datasets(path: Path) -> Tuple[GlobalConfig, DatasetStore]:
    """
    Load the global configuration and every dataset it lists.

    Main entrypoint used by the UI. Any failure is fatal: the caller gets the
    exception and nothing is rendered.

    :param path: Path to the config directory.
    :return: A tuple of (GlobalConfig, DatasetStore).
    """
    global_config = load_global_config(path)

    store = DatasetStore()
    for ds_cfg in global_config.datasets:
        try:
            store.add(from_config(ds_cfg, global_config.data_root))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    logger.info(
        "Datasets loaded from config root",
        extra={"config_root": str(path), "n_datasets": len(store), "dataset_keys": store.keys()},
    )

    return global_config, store
