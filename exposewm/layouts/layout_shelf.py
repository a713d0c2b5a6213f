"""
Shelf Bin Packing Layout

Windows distributed over fixed-size bins, then laid out row by row.
"""

from __future__ import annotations
import math
from typing import List, Dict, Optional, TYPE_CHECKING

from .layout_base import (
    Layout,
    LayoutTarget,
    DegenerateInputError,
    require_area,
    window_area,
    window_dimensions,
)
from ..geometry import Area

if TYPE_CHECKING:
    from ..objects import Window


class Bin:
    """Fixed-capacity container for a subset of windows.

    Capacity is checked per window against the declared size only; it is
    not reduced as windows are added.
    """

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.windows: List["Window"] = []

    def can_fit(self, window: "Window") -> bool:
        width, height = window_dimensions(window)
        return self.width >= width and self.height >= height

    def add(self, window: "Window") -> bool:
        """Add a window if it fits. Returns True on success."""
        if not self.can_fit(window):
            return False
        self.windows.append(window)
        return True

    def empty_space_after_insertion(self, window: "Window") -> float:
        width, height = window_dimensions(window)
        return (self.width - width) * (self.height - height)

    def __len__(self) -> int:
        return len(self.windows)


class ShelfPackLayout(Layout):
    """
    Shelf layout - best-fit bin assignment, one global scale, row filling.

    Positions are relative to the bin; each target records its bin index.
    """

    # A row wraps when twice the next width would overflow it
    WRAP_FACTOR = 2.0

    def __init__(
        self, bin_width: Optional[float] = None, bin_height: Optional[float] = None
    ):
        if bin_width is not None or bin_height is not None:
            require_area(bin_width or 0, bin_height or 0, "bin size")
        self.bin_width = bin_width
        self.bin_height = bin_height

    @property
    def name(self) -> str:
        return "shelf"

    def _bin_size(self, area: Area):
        if self.bin_width is None:
            require_area(area.width, area.height)
            return area.width, area.height
        return self.bin_width, self.bin_height

    def assign_bins(
        self, windows: List["Window"], bin_width: float, bin_height: float
    ) -> List[Bin]:
        """Assign windows, largest first, to the bin with the least waste."""
        bins: List[Bin] = []

        # sorted() is stable, equal areas keep input order
        for window in sorted(windows, key=window_area, reverse=True):
            best_fit = None
            min_empty_space = math.inf

            for candidate in bins:
                if candidate.can_fit(window):
                    empty_space = candidate.empty_space_after_insertion(window)
                    if empty_space < min_empty_space:
                        best_fit = candidate
                        min_empty_space = empty_space

            if best_fit is not None:
                best_fit.add(window)
                continue

            # A window no bin can hold still opens one, which stays empty
            new_bin = Bin(bin_width, bin_height)
            if not new_bin.add(window):
                width, height = window_dimensions(window)
                print(
                    f"ShelfPackLayout: window {window.object_id} ({width}x{height}) "
                    f"exceeds bin {bin_width}x{bin_height}"
                )
            bins.append(new_bin)

        return bins

    def calculate(
        self, windows: List["Window"], area: Area
    ) -> Dict["Window", LayoutTarget]:
        if not windows:
            return {}

        bin_width, bin_height = self._bin_size(area)
        bins = self.assign_bins(windows, bin_width, bin_height)

        # Rejected windows still count toward the area
        total_window_area = sum(window_area(window) for window in windows)
        if total_window_area <= 0:
            raise DegenerateInputError("ShelfPackLayout: total window area is zero")

        total_bin_area = bin_width * bin_height * len(bins)
        scale_factor = math.sqrt(total_bin_area / total_window_area)

        result = {}
        # Row height carries over from one bin to the next
        max_height_in_row = 0.0
        for index, packed in enumerate(bins):
            x = 0.0
            y = 0.0

            for win in packed.windows:
                result[win] = LayoutTarget(
                    area.x + x, area.y + y, scale_factor, bin_index=index
                )

                width, height = window_dimensions(win)
                width *= scale_factor
                height *= scale_factor

                max_height_in_row = max(max_height_in_row, height)
                if x + width * self.WRAP_FACTOR > packed.width:
                    x = 0.0
                    y += max_height_in_row
                    max_height_in_row = 0.0
                else:
                    x += width

        return result
