"""
Normalize Layout

Windows reset to their natural size in a diagonal cascade.
"""

from __future__ import annotations
from typing import List, Dict, TYPE_CHECKING

from .layout_base import Layout, LayoutTarget, require_area
from .cell_grid import grid_size
from ..geometry import Area

if TYPE_CHECKING:
    from ..objects import Window


class NormalizeLayout(Layout):
    """
    Normalize layout - unit scale, each window offset diagonally from the last.

    The row-major grid cell of each window is reported in ``cell`` but the
    cascade decides the position.
    """

    def __init__(self, offset: float = 50.0):
        self.offset = offset

    @property
    def name(self) -> str:
        return "normalize"

    def calculate(
        self, windows: List["Window"], area: Area
    ) -> Dict["Window", LayoutTarget]:
        if not windows:
            return {}
        require_area(area.width, area.height)

        result = {}
        cols = grid_size(len(windows))

        for i, win in enumerate(windows):
            row = i // cols
            col = i % cols
            x = area.x + self.offset * i
            y = area.y + self.offset * i
            result[win] = LayoutTarget(x, y, 1.0, cell=(row, col))

        return result
