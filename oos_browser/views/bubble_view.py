from __future__ import annotations

import logging
import math
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from oos_browser.core.base_view import BaseView
from oos_browser.core.broadcaster import SelectionBroadcaster
from oos_browser.core.dataset import Dataset
from oos_browser.core.time_range import TimeRange
from oos_browser.core.viewport import Viewport
from oos_browser.views.palette import TABLEAU10

logger = logging.getLogger(__name__)

LAYOUT_MODES: Tuple[str, ...] = ("all", "region", "dev_status", "gender", "urban")

REGION_CENTERS: Dict[str, float] = {
    "SA": -450, "ECA": -300, "MENA": -150, "SSA": 150, "LAC": 500, "EAP": 700, "NA": 1000,
}

DEV_CENTERS: Dict[str, float] = {
    "Least Developed": -300, "Less Developed": 100, "More Developed": 400, "Not Classified": 800,
}

REGION_NAMES: Dict[str, str] = {
    "SA": "South Asia",
    "ECA": "Europe and Central Asia",
    "MENA": "Middle East and North Africa",
    "SSA": "Sub-Saharan Africa",
    "LAC": "Latin America and the Caribbean",
    "EAP": "East Asia and the Pacific",
    "NA": "North America",
}

GENDER_FACTOR = 20
URBAN_FACTOR = 14
LABEL_RADIUS = 100
COLLISION_PADDING = 2
GOLDEN_ANGLE = math.pi * (3 - math.sqrt(5))

SOURCE_COLUMNS = {
    "Countries and areas": "id",
    "Total": "value",
    "Region": "region",
    "Female": "female",
    "Male": "male",
    "Rural_Residence": "rural",
    "Urban_Residence": "urban",
    "Development Regions": "dev_status",
}


def _relax(
    start: np.ndarray,
    target_x: np.ndarray,
    target_y: float,
    radii: np.ndarray,
    strength: float,
    iterations: int = 150,
) -> np.ndarray:
    """
    Pull bubbles toward their targets while pushing overlapping ones apart.
    Deterministic for a given start.
    """
    pos = start.astype(float).copy()
    min_dist = radii[:, None] + radii[None, :] + COLLISION_PADDING

    for _ in range(iterations):
        pos[:, 0] += (target_x - pos[:, 0]) * strength
        pos[:, 1] += (target_y - pos[:, 1]) * strength

        diff = pos[:, None, :] - pos[None, :, :]
        dist = np.sqrt((diff ** 2).sum(axis=-1))
        np.fill_diagonal(dist, np.inf)

        overlap = np.clip(min_dist - dist, 0.0, None)
        safe = np.where(dist == 0, 1.0, dist)
        push = diff / safe[..., None] * (overlap / 2)[..., None]
        pos += push.sum(axis=1) * 0.5

    return pos


class BubbleView(BaseView):
    """
    One bubble per country sized by its lower-secondary out-of-school rate.

    Layout modes move the bubbles: all together, grouped by region or by
    development status, or spread by the female-male / rural-urban gap.
    Bubble positions persist between modes so each switch animates from
    where the bubbles were. Not linked to the time selection.
    """

    id = "bubble"
    label = "Out of School Rate by Country"
    dataset_key = "lower_secondary"

    def __init__(
        self,
        dataset: Dataset,
        viewport: Viewport,
        broadcaster: Optional[SelectionBroadcaster] = None,
    ):
        super().__init__(dataset, viewport, broadcaster)
        self.mode = "all"
        self._positions: Optional[np.ndarray] = None

    def set_mode(self, mode: str) -> go.Figure:
        if mode not in LAYOUT_MODES:
            raise ValueError(f"Unknown bubble layout '{mode}', expected one of {LAYOUT_MODES}")
        self.mode = mode
        return self.redraw()

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------
    def _display_frame(self) -> pd.DataFrame:
        frame = self.dataset.frame
        present = [col for col in SOURCE_COLUMNS if col in frame.columns]
        display = frame[present].rename(columns=SOURCE_COLUMNS).reset_index(drop=True)
        for col in SOURCE_COLUMNS.values():
            if col not in display.columns:
                display[col] = np.nan
        display["value"] = pd.to_numeric(display["value"], errors="coerce").fillna(0.0)
        display["region"] = display["region"].fillna("Unknown")
        return display

    def _radii(self, values: pd.Series) -> np.ndarray:
        # Bubble areas proportional to value, filling about half of the drawing area.
        total = float(values.clip(lower=0).sum())
        if total <= 0:
            return np.zeros(len(values))
        area = self.viewport.inner_width * self.viewport.inner_height * 0.5
        scale = math.sqrt(area / (math.pi * total))
        return np.sqrt(values.clip(lower=0).to_numpy(dtype=float)) * scale

    def _targets(self, display: pd.DataFrame) -> Tuple[np.ndarray, float, float]:
        cx = self.viewport.inner_width / 2
        cy = self.viewport.inner_height / 2

        if self.mode == "region":
            tx = display["region"].map(REGION_CENTERS).fillna(cx)
        elif self.mode == "dev_status":
            tx = display["dev_status"].map(DEV_CENTERS).fillna(cx)
        elif self.mode == "gender":
            gap = pd.to_numeric(display["female"], errors="coerce") - pd.to_numeric(display["male"], errors="coerce")
            tx = cx - gap.fillna(0.0) * GENDER_FACTOR
        elif self.mode == "urban":
            gap = pd.to_numeric(display["rural"], errors="coerce") - pd.to_numeric(display["urban"], errors="coerce")
            tx = cx - gap.fillna(0.0) * URBAN_FACTOR
        else:
            tx = pd.Series(cx, index=display.index)

        strength = 0.03 if self.mode == "all" else 0.08
        return tx.to_numpy(dtype=float), cy, strength

    def _start_positions(self, n: int) -> np.ndarray:
        if self._positions is not None and len(self._positions) == n:
            return self._positions
        i = np.arange(n)
        r = 10 * np.sqrt(i + 0.5)
        theta = i * GOLDEN_ANGLE
        cx = self.viewport.inner_width / 2
        cy = self.viewport.inner_height / 2
        return np.column_stack([cx + r * np.cos(theta), cy + r * np.sin(theta)])

    def compute_data(self, time_range: Optional[TimeRange]) -> pd.DataFrame:
        display = self._display_frame()
        if display.empty:
            return display.assign(radius=[], x=[], y=[])

        radii = self._radii(display["value"])
        tx, ty, strength = self._targets(display)
        pos = _relax(self._start_positions(len(display)), tx, ty, radii, strength)
        self._positions = pos

        logger.debug("Bubble layout computed", extra={"view_id": self.id, "mode": self.mode, "n": len(display)})
        return display.assign(radius=radii, x=pos[:, 0], y=pos[:, 1])

    # ------------------------------------------------------------------
    # Figure
    # ------------------------------------------------------------------
    def render_figure(self, data: pd.DataFrame) -> go.Figure:
        if data.empty:
            return self.apply_viewport(self.empty_figure("No countries to display"))

        fig = go.Figure()
        for i, (region, group) in enumerate(data.groupby("region", sort=False)):
            fig.add_trace(
                go.Scatter(
                    x=group["x"],
                    y=group["y"],
                    mode="markers+text",
                    name=REGION_NAMES.get(region, region),
                    showlegend=region != "NA",
                    text=[name if r > LABEL_RADIUS else "" for name, r in zip(group["id"], group["radius"])],
                    textfont=dict(size=11),
                    marker=dict(
                        size=group["radius"] * 2,
                        sizemode="diameter",
                        color=TABLEAU10[i % len(TABLEAU10)],
                        line=dict(width=0),
                    ),
                    customdata=group[["value", "female", "male", "rural", "urban"]].to_numpy(),
                    hovertext=group["id"],
                    hovertemplate=(
                        "<b>%{hovertext}</b><br>Out of School Rate: %{customdata[0]}%"
                        "<br>Female: %{customdata[1]}%<br>Male: %{customdata[2]}%"
                        "<br>Rural: %{customdata[3]}%<br>Urban: %{customdata[4]}%<extra></extra>"
                    ),
                )
            )

        self._add_mode_annotations(fig)
        fig.update_xaxes(visible=False)
        fig.update_yaxes(visible=False, scaleanchor="x", autorange="reversed")
        fig.update_layout(legend=dict(orientation="h", y=1.05), plot_bgcolor="white")
        return self.apply_viewport(fig)

    def _add_mode_annotations(self, fig: go.Figure) -> None:
        cx = self.viewport.inner_width / 2
        top = 0

        if self.mode == "dev_status":
            for status, x in DEV_CENTERS.items():
                fig.add_annotation(x=x, y=top, text=status, showarrow=False)
        elif self.mode in ("gender", "urban"):
            left, right = (
                ("Higher Female Out of School Rate", "Higher Male Out of School Rate")
                if self.mode == "gender"
                else ("Higher Rural Out of School Rate", "Higher Urban Out of School Rate")
            )
            fig.add_vline(x=cx, line_dash="dash", line_color="grey")
            fig.add_annotation(x=cx, y=top, text=left, xanchor="right", showarrow=False)
            fig.add_annotation(x=cx, y=top, text=right, xanchor="left", showarrow=False)
