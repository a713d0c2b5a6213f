"""
Window Layout Base Classes

Provides the Layout interface and shared layout infrastructure.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Dict, Tuple, TYPE_CHECKING

from ..geometry import Area, Transition

if TYPE_CHECKING:
    from ..objects import Window


DEFAULT_TRANSITION = Transition.default()


class DegenerateInputError(ValueError):
    """Raised when a layout input would divide by zero (empty space, zero area)."""


@dataclass
class LayoutTarget:
    """Calculated target for a window in a layout."""

    x: float
    y: float
    scale: float
    cell: Optional[Tuple[int, int]] = None  # (row, col) for grid layouts
    bin_index: Optional[int] = None  # shelf packer bin


def window_dimensions(window: "Window") -> Tuple[float, float]:
    """Definite (width, height) of a window, (0, 0) when indefinite."""
    return window.size.resolved()


def window_area(window: "Window") -> float:
    width, height = window_dimensions(window)
    return width * height


def total_window_area(windows: List["Window"]) -> float:
    return sum(window_area(window) for window in windows)


def require_area(width: float, height: float, what: str = "layout space"):
    """Reject non-positive spans before they reach a division."""
    if not (width > 0 and height > 0):
        raise DegenerateInputError(
            f"Invalid {what} {width}x{height}: both dimensions must be positive"
        )


class Layout(ABC):
    """Abstract base class for window layouts."""

    @abstractmethod
    def calculate(
        self, windows: List["Window"], area: Area
    ) -> Dict["Window", LayoutTarget]:
        """
        Calculate window targets.

        Args:
            windows: Ordered list of windows to arrange
            area: Space to arrange them in

        Returns:
            Dictionary mapping windows to their target position and scale.
            Windows the layout could not place are absent.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Layout name for display."""
        pass

    def apply(
        self,
        windows: List["Window"],
        area: Area,
        transition: Optional[Transition] = DEFAULT_TRANSITION,
    ) -> Dict["Window", LayoutTarget]:
        """Calculate the layout and push the targets to the windows.

        Windows missing from the result are left untouched and reported
        on the WINDOW_UNPLACED topic.
        """
        from pubsub import pub
        from .. import topics

        result = self.calculate(windows, area)

        for window, target in result.items():
            window.set_scale(target.scale, target.scale, transition)
            window.set_position(target.x, target.y, transition)

        unplaced = [window for window in windows if window not in result]
        for window in unplaced:
            pub.sendMessage(
                topics.WINDOW_UNPLACED, window=window, layout_name=self.name
            )

        pub.sendMessage(
            topics.LAYOUT_APPLIED,
            layout_name=self.name,
            placed=len(result),
            unplaced=len(unplaced),
        )
        return result


class LayoutManager:
    """
    Owns the scene's windows and applies layouts to them.

    This component subscribes to window lifecycle events and layout command events.
    It publishes LAYOUT_CHANGED and EXPOSE_STEP_CHANGED events.

    Responsibilities:
    - Track the ordered window list of the scene
    - CMD_EXPOSE / CMD_SHELF_PACK / CMD_MAXRECTS_PACK / CMD_NORMALIZE: apply that layout
    - CMD_EXPOSE_STEP: advance the stepped expose and apply it
    - CMD_RESET_STEP: reset the stepped expose progress
    - CMD_CYCLE_LAYOUT: cycle through available layouts
    - CMD_APPLY_LAYOUT: re-apply the active layout
    """

    def __init__(
        self,
        bus,
        area: Area,
        layouts: Optional[List[Layout]] = None,
        step_increment: int = 2,
        transition: Optional[Transition] = DEFAULT_TRANSITION,
    ):
        self.bus = bus
        self.area = area
        self.windows: List["Window"] = []
        self.layouts: List[Layout] = layouts if layouts is not None else []
        self.active_layout: Optional[Layout] = None
        self.step_increment = step_increment
        self.step = 0
        self.transition = transition

        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to events LayoutManager cares about."""
        from pubsub import pub
        from .. import topics

        # Notification events
        pub.subscribe(self._on_window_created, topics.WINDOW_CREATED)
        pub.subscribe(self._on_window_closed, topics.WINDOW_CLOSED)

        # Layout command events
        pub.subscribe(self._on_expose, topics.CMD_EXPOSE)
        pub.subscribe(self._on_expose_step, topics.CMD_EXPOSE_STEP)
        pub.subscribe(self._on_reset_step, topics.CMD_RESET_STEP)
        pub.subscribe(self._on_shelf_pack, topics.CMD_SHELF_PACK)
        pub.subscribe(self._on_maxrects_pack, topics.CMD_MAXRECTS_PACK)
        pub.subscribe(self._on_normalize, topics.CMD_NORMALIZE)
        pub.subscribe(self._on_cycle_layout, topics.CMD_CYCLE_LAYOUT)
        pub.subscribe(self._on_apply_layout, topics.CMD_APPLY_LAYOUT)

    def _on_window_created(self, window: "Window"):
        """Handle WINDOW_CREATED event."""
        self.add_window(window)

    def _on_window_closed(self, window: "Window"):
        """Handle WINDOW_CLOSED event."""
        self.remove_window(window)

    def add_window(self, window: "Window"):
        """Add a window to the scene."""
        if window not in self.windows:
            self.windows.append(window)

    def remove_window(self, window: "Window"):
        """Remove a window from the scene."""
        if window in self.windows:
            self.windows.remove(window)

    def get_layout(self, name: str) -> Layout:
        """Look up a configured layout by name."""
        for layout in self.layouts:
            if layout.name == name:
                return layout
        known = ", ".join(layout.name for layout in self.layouts)
        raise ValueError(f"Unknown layout: {name}. Available: {known}")

    def set_active_layout(self, layout: Layout):
        """Make a layout active, publishing LAYOUT_CHANGED on change."""
        from pubsub import pub
        from .. import topics

        if self.active_layout is layout:
            return
        self.active_layout = layout
        pub.sendMessage(topics.LAYOUT_CHANGED, layout_name=layout.name)

    def apply_layout(self, name: Optional[str] = None) -> Dict["Window", LayoutTarget]:
        """Apply a layout (the active one by default) to the scene."""
        if name is not None:
            self.set_active_layout(self.get_layout(name))
        if self.active_layout is None:
            return {}
        return self.active_layout.apply(self.windows, self.area, self.transition)

    def advance_step(self) -> Dict["Window", LayoutTarget]:
        """Advance the stepped expose by one increment and apply it."""
        from pubsub import pub
        from .. import topics

        layout = self.get_layout("expose_step")
        self.step += self.step_increment
        layout.step = self.step
        pub.sendMessage(topics.EXPOSE_STEP_CHANGED, step=self.step)
        return self.apply_layout(layout.name)

    def reset_step(self):
        """Reset the stepped expose progress."""
        from pubsub import pub
        from .. import topics

        self.step = 0
        pub.sendMessage(topics.EXPOSE_STEP_CHANGED, step=self.step)

    def cycle_layout(self, direction: int = 1) -> Dict["Window", LayoutTarget]:
        """Cycle through available layouts and apply the new one."""
        if not self.layouts:
            return {}

        current_idx = -1 if direction > 0 else 0
        if self.active_layout in self.layouts:
            current_idx = self.layouts.index(self.active_layout)

        new_idx = (current_idx + direction) % len(self.layouts)
        self.set_active_layout(self.layouts[new_idx])
        return self.apply_layout()

    # Command event handlers
    def _on_expose(self):
        """Handle CMD_EXPOSE command."""
        self.apply_layout("expose")

    def _on_expose_step(self):
        """Handle CMD_EXPOSE_STEP command."""
        self.advance_step()

    def _on_reset_step(self):
        """Handle CMD_RESET_STEP command."""
        self.reset_step()

    def _on_shelf_pack(self):
        """Handle CMD_SHELF_PACK command."""
        self.apply_layout("shelf")

    def _on_maxrects_pack(self):
        """Handle CMD_MAXRECTS_PACK command."""
        self.apply_layout("maxrects")

    def _on_normalize(self):
        """Handle CMD_NORMALIZE command."""
        self.apply_layout("normalize")

    def _on_cycle_layout(self):
        """Handle CMD_CYCLE_LAYOUT command."""
        self.cycle_layout(direction=1)

    def _on_apply_layout(self):
        """Handle CMD_APPLY_LAYOUT command."""
        self.apply_layout()
