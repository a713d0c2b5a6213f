"""
Layout Engine

Builds a scene of windows, wires layouts to key bindings over the event
bus and renders snapshots.
"""

from __future__ import annotations
import argparse
import os
import random
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from pubsub import pub

from . import topics
from .binding_manager import BindingManager
from .geometry import Area, TimingFunction, Transition
from .layouts import (
    LayoutManager,
    ExposeLayout,
    ExposeStepLayout,
    ShelfPackLayout,
    MaxRectsPackLayout,
    NormalizeLayout,
    PackingStrategy,
)
from .layouts.layout_base import require_area
from .objects import Window
from .preview import PreviewRenderer


def parse_color(color: str | Tuple[int, int, int, int]) -> Tuple[int, int, int, int]:
    """
    Parse a color value into RGBA tuple.

    Accepts:
    - Hex string: "#RRGGBB" or "#RRGGBBAA" (e.g., "#4c4c4c" or "#4c4c4cff")
    - Tuple: (R, G, B, A) where each value is 0-255

    Returns:
    - Tuple of (R, G, B, A) values from 0-255
    """
    if isinstance(color, str):
        color = color.lstrip("#")

        try:
            if len(color) == 6:
                r, g, b = int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)
                return (r, g, b, 0xFF)
            elif len(color) == 8:
                r = int(color[0:2], 16)
                g = int(color[2:4], 16)
                b = int(color[4:6], 16)
                a = int(color[6:8], 16)
                return (r, g, b, a)
        except ValueError:
            pass
        raise ValueError(f"Invalid color format: {color}. Use #RRGGBB or #RRGGBBAA")
    elif isinstance(color, tuple) and len(color) == 4:
        return color
    else:
        raise ValueError(
            f"Invalid color type: {type(color)}. Use hex string or RGBA tuple"
        )


@dataclass
class EngineConfig:
    """Layout engine configuration."""

    # Layout space
    space_width: float = 2000.0
    space_height: float = 2000.0

    # Demo scene
    num_windows: int = 10
    min_window_width: float = 200.0
    max_window_width: float = 1000.0
    min_window_height: float = 300.0
    max_window_height: float = 1000.0
    seed: Optional[int] = None

    # Shelf packer bin (defaults to the layout space)
    shelf_bin_width: Optional[float] = None
    shelf_bin_height: Optional[float] = None

    # MaxRects packer
    maxrects_bin_width: Optional[int] = None
    maxrects_bin_height: Optional[int] = None
    padding: int = 20
    max_retries: int = 40
    shrink_factor: float = 0.99
    min_scale: float = 0.1
    packing_strategy: str | PackingStrategy = PackingStrategy.MAX_RECTS

    # Normalize cascade offset
    cascade_offset: float = 50.0

    # Stepped expose increment per key press
    step_increment: int = 2

    # Transition attached to every layout update
    transition_duration: float = 0.5
    transition_timing: str | TimingFunction = TimingFunction.EASE_OUT

    # Preview colors (hex format: #RRGGBB or #RRGGBBAA)
    background_color: str | Tuple[int, int, int, int] = "#b4b4b4"
    border_color: str | Tuple[int, int, int, int] = "#000000"
    window_color: str | Tuple[int, int, int, int] = "#5e81ac"
    border_width: float = 1.0
    corner_radius: float = 20.0

    # Layouts (default to all built-in layouts)
    layouts: Optional[List] = None

    # Custom keybindings: list of (key, event_topic, event_data) tuples
    # Example: [("x", topics.CMD_EXPOSE, {})]
    custom_keybindings: Optional[List[Tuple[str, str, dict]]] = None

    def __post_init__(self):
        """Parse colors and enum names, validate ranges."""
        require_area(self.space_width, self.space_height)
        if self.num_windows < 0:
            raise ValueError(f"num_windows must be >= 0, got {self.num_windows}")
        if not 0 < self.min_window_width <= self.max_window_width:
            raise ValueError(
                f"Invalid window width range {self.min_window_width}-{self.max_window_width}"
            )
        if not 0 < self.min_window_height <= self.max_window_height:
            raise ValueError(
                f"Invalid window height range {self.min_window_height}-{self.max_window_height}"
            )

        self.packing_strategy = PackingStrategy(self.packing_strategy)
        self.transition_timing = TimingFunction(self.transition_timing)

        self.background_color = parse_color(self.background_color)
        self.border_color = parse_color(self.border_color)
        self.window_color = parse_color(self.window_color)

    @property
    def area(self) -> Area:
        return Area(0, 0, self.space_width, self.space_height)

    @property
    def transition(self) -> Transition:
        return Transition(
            duration=self.transition_duration, timing=self.transition_timing
        )

    def get_layouts(self):
        """Get configured layouts or default layouts."""
        if self.layouts is not None:
            return self.layouts

        return [
            ExposeLayout(),
            ExposeStepLayout(),
            ShelfPackLayout(self.shelf_bin_width, self.shelf_bin_height),
            MaxRectsPackLayout(
                self.maxrects_bin_width,
                self.maxrects_bin_height,
                padding=self.padding,
                max_retries=self.max_retries,
                shrink_factor=self.shrink_factor,
                min_scale=self.min_scale,
                strategy=self.packing_strategy,
            ),
            NormalizeLayout(offset=self.cascade_offset),
        ]


class LayoutEngine:
    """
    Layout Engine

    Headless driver around the layout manager: owns the scene, turns key
    presses into layout commands and renders previews.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """Initialize the engine.

        Architecture:
        1. Create components - they self-subscribe to events
        2. Bind keys to command events
        3. Feed key presses
        """
        self.config = config or EngineConfig()
        self.running = True
        self.frame = 0
        self._next_window_id = 1

        # Setup debug event logging if enabled
        if os.getenv("EXPOSEWM_DEBUG"):
            pub.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self.layout_manager = LayoutManager(
            bus=pub,
            area=self.config.area,
            layouts=self.config.get_layouts(),
            step_increment=self.config.step_increment,
            transition=self.config.transition,
        )

        self.binding_manager = BindingManager()
        self.binding_manager.setup_default_bindings()
        if self.config.custom_keybindings:
            self.binding_manager.setup_custom_bindings(self.config.custom_keybindings)

        self.renderer = PreviewRenderer(
            int(self.config.space_width),
            int(self.config.space_height),
            background_color=self.config.background_color,
            border_color=self.config.border_color,
            window_color=self.config.window_color,
            border_width=self.config.border_width,
            corner_radius=self.config.corner_radius,
        )

        pub.subscribe(self._on_quit, topics.CMD_QUIT)
        pub.subscribe(self._on_tick, topics.CMD_TICK)

    @property
    def windows(self) -> List[Window]:
        return self.layout_manager.windows

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        timestamp = time.strftime("%H:%M:%S")
        topic_name = topic.getName()
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        print(f"[{timestamp}] EVENT: {topic_name} | {data_str}")

    def spawn_window(
        self,
        width: Optional[float],
        height: Optional[float],
        x: float = 0.0,
        y: float = 0.0,
        color: Optional[Tuple[int, int, int, int]] = None,
    ) -> Window:
        """Create a window and announce it on the bus."""
        window = Window(self._next_window_id, width, height, x, y, color=color)
        self._next_window_id += 1
        pub.sendMessage(topics.WINDOW_CREATED, window=window)
        return window

    def close_window(self, window: Window):
        """Remove a window from the scene."""
        pub.sendMessage(topics.WINDOW_CLOSED, window=window)

    def populate(self, rng: Optional[random.Random] = None) -> List[Window]:
        """Spawn the configured number of randomly sized and placed windows."""
        rng = rng or random.Random(self.config.seed)
        config = self.config
        spawned = []
        for _ in range(config.num_windows):
            width = rng.uniform(config.min_window_width, config.max_window_width)
            height = rng.uniform(config.min_window_height, config.max_window_height)
            x = rng.uniform(0.0, config.space_width)
            y = rng.uniform(0.0, config.space_height)
            color = (rng.randrange(255), rng.randrange(255), rng.randrange(255), 255)
            spawned.append(self.spawn_window(width, height, x, y, color=color))
        return spawned

    def press(self, key: str) -> bool:
        """Feed a key press. Returns False for unbound keys."""
        return self.binding_manager.press(key)

    def run(self, keys: Iterable[str]) -> int:
        """Process key presses in order until they run out or quit is requested."""
        for key in keys:
            if not self.running:
                break
            if not self.press(key):
                print(f"LayoutEngine: no binding for key '{key}'")
        return 0

    def render(self, path: str, show_grid: bool = False) -> str:
        """Write a PNG snapshot of the scene."""
        return self.renderer.render(self.windows, path, show_grid=show_grid)

    def _on_quit(self):
        """Handle CMD_QUIT command."""
        self.running = False

    def _on_tick(self):
        """Handle CMD_TICK command."""
        self.frame += 1


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="exposewm",
        description="Arrange a random scene of windows and render a preview",
    )
    parser.add_argument("--windows", type=int, default=10, help="number of windows")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--width", type=float, default=2000.0, help="space width")
    parser.add_argument("--height", type=float, default=2000.0, help="space height")
    parser.add_argument(
        "--keys",
        default="e",
        help="space separated key presses, e.g. 'Return Return a s'",
    )
    parser.add_argument("--output", default=None, help="PNG file to write")
    parser.add_argument("--grid", action="store_true", help="draw the expose grid")
    args = parser.parse_args(argv)

    try:
        config = EngineConfig(
            space_width=args.width,
            space_height=args.height,
            num_windows=args.windows,
            seed=args.seed,
        )
    except ValueError as e:
        parser.error(str(e))

    engine = LayoutEngine(config)
    engine.populate()
    status = engine.run(args.keys.split())

    print("exposewm")
    print(f"  Windows: {len(engine.windows)}")
    if engine.layout_manager.active_layout is not None:
        print(f"  Layout: {engine.layout_manager.active_layout.name}")
    for window in engine.windows:
        position = window.position
        print(
            f"  {window.object_id}: pos=({position.x:.1f}, {position.y:.1f}) "
            f"scale={window.scale.x:.3f}"
        )

    if args.output:
        engine.render(args.output, show_grid=args.grid)
        print(f"  Preview: {args.output}")

    return status


if __name__ == "__main__":
    import sys

    sys.exit(main())
