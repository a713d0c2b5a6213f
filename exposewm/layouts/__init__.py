"""
Layout System

Provides window layout algorithms and management.
"""

from .layout_base import (
    Layout,
    LayoutTarget,
    LayoutManager,
    DegenerateInputError,
    DEFAULT_TRANSITION,
)
from .cell_grid import CellGrid, grid_size
from .layout_expose import ExposeLayout, ExposeStepLayout
from .layout_shelf import Bin, ShelfPackLayout
from .layout_maxrects import MaxRectsPackLayout, ScaleSearch
from .layout_normalize import NormalizeLayout
from .packing import (
    PackingBin,
    PackingStrategy,
    PackItem,
    PackedRect,
    RectpackBin,
)

__all__ = [
    # Base classes
    "Layout",
    "LayoutTarget",
    "LayoutManager",
    "DegenerateInputError",
    "DEFAULT_TRANSITION",
    "CellGrid",
    "grid_size",
    # Layout implementations
    "ExposeLayout",
    "ExposeStepLayout",
    "Bin",
    "ShelfPackLayout",
    "MaxRectsPackLayout",
    "ScaleSearch",
    "NormalizeLayout",
    # Packing primitive
    "PackingBin",
    "PackingStrategy",
    "PackItem",
    "PackedRect",
    "RectpackBin",
]
