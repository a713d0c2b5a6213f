"""
MaxRects Packing Layout

All windows packed into one bin under a uniform scale, shrinking the
scale until the packer accepts every window or the retry budget runs out.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, TYPE_CHECKING

from .layout_base import (
    Layout,
    LayoutTarget,
    DegenerateInputError,
    require_area,
    total_window_area,
    window_dimensions,
)
from .packing import BinFactory, PackingBin, PackingStrategy, PackItem, PackedRect, RectpackBin
from ..geometry import Area

if TYPE_CHECKING:
    from ..objects import Window


@dataclass
class ScaleSearch:
    """Outcome of the scale search."""

    scale_factor: float
    initial_scale_factor: float
    retries: int
    packer: PackingBin
    accepted: List[PackedRect] = field(default_factory=list)
    rejected: List[PackItem] = field(default_factory=list)
    item_count: int = 0

    @property
    def complete(self) -> bool:
        return not self.rejected and len(self.accepted) == self.item_count


class MaxRectsPackLayout(Layout):
    """
    MaxRects layout - uniformly scaled windows packed into a single bin.

    Windows are never scaled above their original size. Windows the packer
    could not place after the last retry keep their position and scale.
    """

    def __init__(
        self,
        bin_width: Optional[int] = None,
        bin_height: Optional[int] = None,
        padding: int = 20,
        max_retries: int = 40,
        shrink_factor: float = 0.99,
        min_scale: float = 0.1,
        strategy: PackingStrategy = PackingStrategy.MAX_RECTS,
        bin_factory: Optional[BinFactory] = None,
    ):
        if bin_width is not None or bin_height is not None:
            require_area(bin_width or 0, bin_height or 0, "bin size")
        if not 0 < shrink_factor < 1:
            raise ValueError(f"shrink_factor must be in (0, 1), got {shrink_factor}")
        self.bin_width = bin_width
        self.bin_height = bin_height
        self.padding = padding
        self.max_retries = max_retries
        self.shrink_factor = shrink_factor
        self.min_scale = min_scale
        self.strategy = strategy
        self.bin_factory = bin_factory or RectpackBin

    @property
    def name(self) -> str:
        return "maxrects"

    def _bin_size(self, area: Area) -> Tuple[int, int]:
        if self.bin_width is None:
            require_area(area.width, area.height)
            return int(area.width), int(area.height)
        return self.bin_width, self.bin_height

    def _items(self, windows: List["Window"], scale_factor: float) -> List[PackItem]:
        items = []
        for window in windows:
            width, height = window_dimensions(window)
            items.append(
                PackItem(
                    window.object_id,
                    max(1, round(width * scale_factor)),
                    max(1, round(height * scale_factor)),
                    self.padding,
                )
            )
        return items

    def search_scale(self, windows: List["Window"], area: Area) -> ScaleSearch:
        """Shrink a uniform scale until every window packs into the bin.

        Windows without a definite size are packed as minimal items.
        """
        bin_width, bin_height = self._bin_size(area)

        seen = set()
        for window in windows:
            if window.object_id in seen:
                raise ValueError(
                    f"MaxRectsPackLayout: duplicate window id {window.object_id}"
                )
            seen.add(window.object_id)

        total_area = total_window_area(windows)
        if total_area <= 0:
            raise DegenerateInputError("MaxRectsPackLayout: total window area is zero")

        scale_factor = math.sqrt(bin_width * bin_height / total_area)
        initial_scale_factor = scale_factor

        packer = self.bin_factory(self.strategy, bin_width, bin_height)
        items = self._items(windows, scale_factor)
        accepted, rejected = packer.insert_list(items)

        retries = 0
        while (rejected or len(accepted) != len(windows)) and retries < self.max_retries:
            scale_factor = max(scale_factor * self.shrink_factor, self.min_scale)
            items = self._items(windows, scale_factor)
            packer.clear()
            accepted, rejected = packer.insert_list(items)
            retries += 1

        return ScaleSearch(
            scale_factor=scale_factor,
            initial_scale_factor=initial_scale_factor,
            retries=retries,
            packer=packer,
            accepted=accepted,
            rejected=rejected,
            item_count=len(items),
        )

    def calculate(
        self, windows: List["Window"], area: Area
    ) -> Dict["Window", LayoutTarget]:
        if not windows:
            return {}

        search = self.search_scale(windows, area)
        result = {}

        for win in windows:
            rect = search.packer.find_by_id(win.object_id)
            if rect is None:
                print(
                    f"MaxRectsPackLayout: window {win.object_id} not placed "
                    f"after {search.retries} retries"
                )
                continue

            width, height = window_dimensions(win)
            if width <= 0 or height <= 0:
                # Indefinite sizes are only repositioned
                scale = 1.0
            else:
                scale = min(rect.width / width, rect.height / height, 1.0)
            result[win] = LayoutTarget(area.x + rect.x, area.y + rect.y, scale)

        return result
