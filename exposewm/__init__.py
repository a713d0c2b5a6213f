"""
exposewm

A window layout engine: arranges independently sized windows inside a
bounded space by assigning each a target position and scale.

This package provides:
- Geometry primitives and an in-memory window handle
- Layout algorithms (expose, stepped expose, shelf packing,
  MaxRects packing with scale search, normalize)
- A layout manager driven by key bindings over a pub/sub event bus
- A Cairo preview renderer

Example usage:
    from exposewm import Area, Window, ExposeLayout

    windows = [Window(1, 800, 600), Window(2, 400, 900, x=1200)]
    ExposeLayout().apply(windows, Area(0, 0, 2000, 2000))

Or run the demo scene directly:
    python -m exposewm --keys "Return Return a" --output scene.png
"""

__version__ = "0.1.0"
__author__ = "exposewm developers"

from .geometry import (
    AUTO,
    Position,
    Dimensions,
    Scale,
    Area,
    Transition,
    TimingFunction,
)

from .objects import Window

from .layouts import (
    Layout,
    LayoutTarget,
    LayoutManager,
    DegenerateInputError,
    CellGrid,
    ExposeLayout,
    ExposeStepLayout,
    Bin,
    ShelfPackLayout,
    MaxRectsPackLayout,
    ScaleSearch,
    NormalizeLayout,
    PackingBin,
    PackingStrategy,
    PackItem,
    PackedRect,
    RectpackBin,
)

from .binding_manager import BindingManager, KeyBinding
from .preview import PreviewRenderer
from .engine import LayoutEngine, EngineConfig, parse_color

from . import topics

__all__ = [
    # Version
    "__version__",
    # Geometry
    "AUTO",
    "Position",
    "Dimensions",
    "Scale",
    "Area",
    "Transition",
    "TimingFunction",
    # Objects
    "Window",
    # Layouts
    "Layout",
    "LayoutTarget",
    "LayoutManager",
    "DegenerateInputError",
    "CellGrid",
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
    # Engine
    "BindingManager",
    "KeyBinding",
    "PreviewRenderer",
    "LayoutEngine",
    "EngineConfig",
    "parse_color",
    # Event topics
    "topics",
]
