"""
Rectangle Packing Primitive

Single-bin exact packing used by the MaxRects layout, with an adapter over
the rectpack library. Layouts receive the bin through a factory so tests
can substitute a deterministic fake.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from rectpack import newPacker, guillotine, maxrects, skyline


class PackingStrategy(Enum):
    """Packing heuristic tag."""

    MAX_RECTS = "max_rects"
    GUILLOTINE = "guillotine"
    SKYLINE = "skyline"


@dataclass(frozen=True)
class PackItem:
    """Item to pack. Padding is kept around the item, not added to its size."""

    id: int
    width: int
    height: int
    padding: int = 0


@dataclass(frozen=True)
class PackedRect:
    """Placement of an item inside the bin."""

    id: int
    x: int
    y: int
    width: int
    height: int


class PackingBin(ABC):
    """Single fixed-size bin that packs items in batches."""

    @abstractmethod
    def insert_list(
        self, items: List[PackItem]
    ) -> Tuple[List[PackedRect], List[PackItem]]:
        """Pack a batch. Returns (accepted placements, rejected items)."""
        pass

    @abstractmethod
    def clear(self):
        """Forget all placements."""
        pass

    @abstractmethod
    def find_by_id(self, item_id: int) -> Optional[PackedRect]:
        """Placement of an item, or None if it was not packed."""
        pass


BinFactory = Callable[[PackingStrategy, int, int], PackingBin]


class RectpackBin(PackingBin):
    """PackingBin backed by rectpack's offline packer (rotation disabled)."""

    ALGORITHMS = {
        PackingStrategy.MAX_RECTS: maxrects.MaxRectsBssf,
        PackingStrategy.GUILLOTINE: guillotine.GuillotineBssfSas,
        PackingStrategy.SKYLINE: skyline.SkylineBl,
    }

    def __init__(self, strategy: PackingStrategy, width: int, height: int):
        if strategy not in self.ALGORITHMS:
            raise ValueError(f"Unsupported packing strategy: {strategy}")
        self.strategy = strategy
        self.width = width
        self.height = height
        self._placed: Dict[int, PackedRect] = {}
        self._items: Dict[int, PackItem] = {}

    def insert_list(
        self, items: List[PackItem]
    ) -> Tuple[List[PackedRect], List[PackItem]]:
        # Items already in the bin are packed again together with the batch
        for item in items:
            self._items[item.id] = item

        packer = newPacker(rotation=False, pack_algo=self.ALGORITHMS[self.strategy])
        packer.add_bin(self.width, self.height)
        for item in self._items.values():
            packer.add_rect(
                item.width + 2 * item.padding,
                item.height + 2 * item.padding,
                rid=item.id,
            )
        packer.pack()

        self._placed = {}
        for _, x, y, _, _, rid in packer.rect_list():
            item = self._items[rid]
            self._placed[rid] = PackedRect(
                rid, x + item.padding, y + item.padding, item.width, item.height
            )

        accepted = [self._placed[item.id] for item in items if item.id in self._placed]
        rejected = [item for item in items if item.id not in self._placed]
        return accepted, rejected

    def clear(self):
        self._placed = {}
        self._items = {}

    def find_by_id(self, item_id: int) -> Optional[PackedRect]:
        return self._placed.get(item_id)
