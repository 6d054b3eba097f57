from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Margin:
    top: int = 20
    right: int = 20
    bottom: int = 20
    left: int = 60

    def to_plotly(self) -> Dict[str, int]:
        return dict(t=self.top, r=self.right, b=self.bottom, l=self.left)


@dataclass(frozen=True)
class Viewport:
    """
    Explicit drawing area handed to a view by its caller.

    Views never measure their host container; all geometry (brush pixel range,
    bubble layout, band widths) derives from this descriptor.
    """

    width: int
    height: int
    margin: Margin = field(default_factory=Margin)

    def __post_init__(self) -> None:
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Viewport {self.width}x{self.height} leaves no drawing area "
                f"after margins {self.margin}"
            )

    @property
    def inner_width(self) -> int:
        return self.width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> int:
        return self.height - self.margin.top - self.margin.bottom

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], default: Optional[Viewport] = None) -> Viewport:
        base = default or cls(width=800, height=400)
        if not data:
            return base
        margin_raw = data.get("margin")
        margin = Margin(**margin_raw) if margin_raw else base.margin
        return cls(
            width=int(data.get("width", base.width)),
            height=int(data.get("height", base.height)),
            margin=margin,
        )
