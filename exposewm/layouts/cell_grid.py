"""
Cell Grid

Square grid over the layout space with nearest-free-cell assignment,
shared by the expose layouts and the normalizer.
"""

from __future__ import annotations
from typing import List, Tuple, TYPE_CHECKING

from .layout_base import DegenerateInputError, require_area
from ..geometry import Area, Position

if TYPE_CHECKING:
    from ..objects import Window


def grid_size(count: int) -> int:
    """Smallest n with n * n >= count."""
    cols = 0
    while cols * cols < count:
        cols += 1
    return cols


class CellGrid:
    """
    ceil(sqrt(n)) x ceil(sqrt(n)) grid covering an area.

    Cells are claimed one at a time; a claimed cell is never handed out
    again by the same grid.
    """

    def __init__(self, count: int, area: Area):
        if count < 1:
            raise DegenerateInputError("CellGrid: need at least one window")
        require_area(area.width, area.height)

        self.area = area
        self.cols = grid_size(count)
        self.rows = self.cols
        self.cell_width = area.width / self.cols
        self.cell_height = area.height / self.rows
        self._claimed = [False] * (self.rows * self.cols)

    def cell_origin(self, row: int, col: int) -> Tuple[float, float]:
        return (
            self.area.x + col * self.cell_width,
            self.area.y + row * self.cell_height,
        )

    def cell_center(self, row: int, col: int) -> Tuple[float, float]:
        x, y = self.cell_origin(row, col)
        return (x + self.cell_width * 0.5, y + self.cell_height * 0.5)

    def is_claimed(self, row: int, col: int) -> bool:
        return self._claimed[row * self.cols + col]

    def claim_nearest(self, position: Position) -> Tuple[int, int]:
        """Claim the free cell whose centre is closest to ``position``.

        Ties go to the first cell in row-major order.
        """
        min_distance = float("inf")
        closest_cell = None

        for row in range(self.rows):
            for col in range(self.cols):
                if self.is_claimed(row, col):
                    continue

                center_x, center_y = self.cell_center(row, col)
                distance = (position.x - center_x) ** 2 + (position.y - center_y) ** 2

                if distance < min_distance:
                    min_distance = distance
                    closest_cell = (row, col)

        if closest_cell is None:
            raise DegenerateInputError("CellGrid: no free cell left")

        row, col = closest_cell
        self._claimed[row * self.cols + col] = True
        return closest_cell

    def assign(self, windows: List["Window"]) -> List[Tuple[int, int]]:
        """Claim one cell per window, in input order."""
        # Measured from the raw position field, not the window centre
        return [self.claim_nearest(window.position) for window in windows]
