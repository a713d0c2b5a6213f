"""
Expose Layouts

All windows shrunk into a square grid so they are visible at once.
"""

from __future__ import annotations
from typing import List, Dict, Tuple, TYPE_CHECKING

from .layout_base import Layout, LayoutTarget
from .cell_grid import CellGrid
from ..geometry import Area, lerp

if TYPE_CHECKING:
    from ..objects import Window


def fit_scale(window: "Window", grid: CellGrid) -> Tuple[float, float, float]:
    """Return (scale, width, height) fitting the window into one cell.

    Windows without a definite, positive size are only repositioned.
    """
    size = window.size
    if not size.is_definite or size.width <= 0 or size.height <= 0:
        return 1.0, 0.0, 0.0
    scale = min(grid.cell_width / size.width, grid.cell_height / size.height)
    return scale, size.width, size.height


class ExposeLayout(Layout):
    """
    Expose layout - each window scaled to fit and centred in its own cell.

    Windows claim cells in list order, each taking the free cell nearest
    to its current position.
    """

    @property
    def name(self) -> str:
        return "expose"

    def calculate(
        self, windows: List["Window"], area: Area
    ) -> Dict["Window", LayoutTarget]:
        if not windows:
            return {}

        result = {}
        grid = CellGrid(len(windows), area)

        for win in windows:
            scale, width, height = fit_scale(win, grid)
            row, col = grid.claim_nearest(win.position)
            result[win] = self._target(win, grid, (row, col), scale, width, height)

        return result

    def _target(
        self,
        window: "Window",
        grid: CellGrid,
        cell: Tuple[int, int],
        scale: float,
        width: float,
        height: float,
    ) -> LayoutTarget:
        center_x, center_y = grid.cell_center(*cell)
        x = center_x - width * 0.5 * scale
        y = center_y - height * 0.5 * scale
        return LayoutTarget(x, y, scale, cell=cell)


class ExposeStepLayout(ExposeLayout):
    """
    Stepped expose - moves windows part of the way toward the expose grid.

    ``step`` is a progress knob where 100 is the full expose arrangement
    and 0 leaves windows where they are. Values above 100 overshoot.
    """

    def __init__(self, step: int = 0):
        self.step = step

    @property
    def name(self) -> str:
        return "expose_step"

    @property
    def fraction(self) -> float:
        return self.step / 100.0

    def _target(
        self,
        window: "Window",
        grid: CellGrid,
        cell: Tuple[int, int],
        scale: float,
        width: float,
        height: float,
    ) -> LayoutTarget:
        fraction = self.fraction
        position = window.position

        scale = lerp(window.scale.x, scale, fraction)
        # Full target computed at the interpolated scale keeps the box centred
        target = super()._target(window, grid, cell, scale, width, height)

        x = lerp(position.x, target.x, fraction)
        y = lerp(position.y, target.y, fraction)
        return LayoutTarget(x, y, scale, cell=cell)
