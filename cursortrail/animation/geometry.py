"""Plain 2D geometry shared by the animator and the renderer."""
from __future__ import annotations
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A point in screen space (pixels)."""
    x: float = 0.0
    y: float = 0.0

    def distance_to(self, other: Point) -> float:
        """Calculate distance to another point."""
        dx = other.x - self.x
        dy = other.y - self.y
        return math.sqrt(dx * dx + dy * dy)

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, top-left origin."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_center(cls, cx: float, cy: float, width: float, height: float) -> Rect:
        """Build a rectangle of the given size centered on (cx, cy)."""
        return cls(cx - width * 0.5, cy - height * 0.5, width, height)

    @property
    def center(self) -> Point:
        return Point(self.x + self.width * 0.5, self.y + self.height * 0.5)

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


# Four corners with consistent winding, ready for filled-polygon drawing
Polygon = tuple[Point, Point, Point, Point]
