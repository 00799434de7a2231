"""
Geometry Types

Rectangles and display descriptors shared by every layout stage.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

# Float noise below this never moves an edge across a pixel boundary.
_SNAP_EPS = 1e-6


def snap(value: float) -> int:
    """Round half up, treating values within _SNAP_EPS of .5 as .5."""
    return math.floor(value + 0.5 + _SNAP_EPS)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with position and dimensions."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)

    def contains_point(self, px: float, py: float) -> bool:
        """Half-open containment: left/top edges inside, right/bottom outside."""
        return self.x <= px < self.right and self.y <= py < self.bottom

    def intersection(self, other: "Rect") -> Optional["Rect"]:
        """Overlapping region of two rects, or None if they only touch or miss."""
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return None
        return Rect(left, top, right - left, bottom - top)

    def overlap_area(self, other: "Rect") -> float:
        inter = self.intersection(other)
        return inter.area if inter else 0.0

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def scaled(self, sx: float, sy: float) -> "Rect":
        """
        Scale about the origin.

        Edges are scaled, not sizes, so a rect whose left edge equals a
        neighbour's right edge still does after scaling.
        """
        left = self.x * sx
        top = self.y * sy
        return Rect(left, top, self.right * sx - left, self.bottom * sy - top)

    def snapped(self) -> "Rect":
        """
        Round edges (not sizes) to whole pixels.

        Two rects sharing an edge before snapping still share it afterwards,
        so tiled neighbours stay gap-free and overlap-free.
        """
        left = snap(self.x)
        top = snap(self.y)
        return Rect(left, top, snap(self.right) - left, snap(self.bottom) - top)

    @classmethod
    def bounding(cls, rects: Iterable["Rect"]) -> "Rect":
        """Smallest rect enclosing all given rects."""
        rects = list(rects)
        if not rects:
            return cls()
        left = min(r.x for r in rects)
        top = min(r.y for r in rects)
        right = max(r.right for r in rects)
        bottom = max(r.bottom for r in rects)
        return cls(left, top, right - left, bottom - top)

    def __str__(self) -> str:
        return f"Rect({self.width:g}x{self.height:g}+{self.x:g}+{self.y:g})"


@dataclass(frozen=True)
class DisplayDescriptor:
    """
    A physical display.

    global_frame is expressed in the global, top-left-origin coordinate
    space shared by all displays; its origin may be negative for displays
    placed above or to the left of the main one.
    """

    index: int
    global_frame: Rect
    is_main: bool = False

    @property
    def width(self) -> float:
        return self.global_frame.width

    @property
    def height(self) -> float:
        return self.global_frame.height

    @property
    def area(self) -> float:
        return self.global_frame.area
