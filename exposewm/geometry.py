"""
Geometry Primitives

Positions, dimensions, scales and areas shared by the layout algorithms.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import math


AUTO = None
"""Indefinite dimension (the window sizes itself); treated as zero by layouts."""


@dataclass
class Position:
    """Position in space coordinates."""

    x: float = 0.0
    y: float = 0.0

    def distance_to(self, x: float, y: float) -> float:
        """Euclidean distance from this position to (x, y)."""
        return math.sqrt((self.x - x) ** 2 + (self.y - y) ** 2)


@dataclass
class Dimensions:
    """Window size. Each side is a definite number or AUTO."""

    width: Optional[float] = AUTO
    height: Optional[float] = AUTO

    @classmethod
    def points(cls, width: float, height: float) -> "Dimensions":
        return cls(float(width), float(height))

    @property
    def is_definite(self) -> bool:
        """True when both sides are definite point values."""
        return self.width is not None and self.height is not None

    def resolved(self) -> Tuple[float, float]:
        """(width, height), or (0, 0) if either side is indefinite."""
        if not self.is_definite:
            return (0.0, 0.0)
        return (self.width, self.height)

    @property
    def area(self) -> float:
        width, height = self.resolved()
        return width * height


@dataclass
class Scale:
    """Per-axis scale factors."""

    x: float = 1.0
    y: float = 1.0


@dataclass
class Area:
    """Area with position and dimensions."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def is_degenerate(self) -> bool:
        return not (self.width > 0 and self.height > 0)


class TimingFunction(Enum):
    """Easing curves understood by the animation collaborator."""

    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"


@dataclass(frozen=True)
class Transition:
    """Transition descriptor attached to a target update.

    The layout core only attaches it; scheduling and tweening belong to
    whatever consumes the window's targets.
    """

    duration: float = 0.5
    delay: float = 0.0
    timing: TimingFunction = TimingFunction.EASE_OUT

    @classmethod
    def default(cls) -> "Transition":
        return cls()


def lerp(current: float, target: float, fraction: float) -> float:
    """Linear interpolation; fractions above 1 overshoot."""
    return current + (target - current) * fraction
