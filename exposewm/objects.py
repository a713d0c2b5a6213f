"""
Scene Objects

In-memory window handles consumed by the layout algorithms.
"""

from __future__ import annotations
from typing import Optional, Tuple

from .geometry import AUTO, Dimensions, Position, Scale, Transition


class Window:
    """Represents a managed window.

    Layouts read ``size``, ``position`` and ``scale`` and write targets
    through ``set_position``/``set_scale``. Targets are committed
    immediately; the transition that came with each update is kept so an
    animator or renderer can pick it up.
    """

    def __init__(
        self,
        object_id: int,
        width: Optional[float] = AUTO,
        height: Optional[float] = AUTO,
        x: float = 0.0,
        y: float = 0.0,
        title: Optional[str] = None,
        color: Optional[Tuple[int, int, int, int]] = None,
    ):
        self.object_id = object_id
        self.title = title
        self.color = color

        self._size = Dimensions(width, height)
        self._position = Position(x, y)
        self._scale = Scale(1.0, 1.0)

        # Transitions attached to the most recent updates
        self.position_transition: Optional[Transition] = None
        self.scale_transition: Optional[Transition] = None

    @property
    def size(self) -> Dimensions:
        return Dimensions(self._size.width, self._size.height)

    @property
    def position(self) -> Position:
        return Position(self._position.x, self._position.y)

    @property
    def scale(self) -> Scale:
        return Scale(self._scale.x, self._scale.y)

    def set_size(self, width: Optional[float], height: Optional[float]):
        """Set window size (AUTO for an indefinite side)."""
        self._size = Dimensions(width, height)

    def set_position(
        self, x: float, y: float, transition: Optional[Transition] = None
    ):
        """Set target position."""
        self._position = Position(x, y)
        self.position_transition = transition

    def set_scale(self, x: float, y: float, transition: Optional[Transition] = None):
        """Set target scale."""
        self._scale = Scale(x, y)
        self.scale_transition = transition

    def scaled_size(self) -> Tuple[float, float]:
        """On-screen (width, height) after scaling."""
        width, height = self._size.resolved()
        return (width * self._scale.x, height * self._scale.y)

    def __repr__(self) -> str:
        return f"Window({self.object_id})"
