from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from oos_browser.core.viewport import Viewport


@dataclass
class DatasetConfig:
    """
    Parsed config entry for a single dataset.
    """
    raw: Dict[str, Any]
    source_path: Path
    index: int

    @property
    def key(self) -> str:
        return self.raw.get("key") or f"dataset_{self.index}"

    @property
    def name(self) -> str:
        return self.raw.get("name", self.key)

    @property
    def path(self) -> Path:
        return Path(self.raw["file"])

    @property
    def date_column(self) -> Optional[str]:
        return self.raw.get("date_column")

    @property
    def date_format(self) -> Optional[str]:
        return self.raw.get("date_format")

    @property
    def numeric_columns(self) -> Union[str, List[str]]:
        """Either the literal "auto" or an explicit list of column names."""
        return self.raw.get("numeric_columns", [])

    @property
    def required_columns(self) -> List[str]:
        return list(self.raw.get("required_columns", []))

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], source_path: Path, index: int) -> DatasetConfig:
        return cls(raw=raw, source_path=source_path, index=index)


@dataclass
class GlobalConfig:
    ui_title: str
    subtitle: str
    datasets: List[DatasetConfig]
    data_root: Optional[Path] = None
    default_viewport: Viewport = field(default_factory=lambda: Viewport(width=800, height=400))
    viewports: Dict[str, Viewport] = field(default_factory=dict)

    def viewport_for(self, view_id: str) -> Viewport:
        return self.viewports.get(view_id, self.default_viewport)
