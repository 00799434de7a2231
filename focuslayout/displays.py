"""
Multi-Display Coordinate Mapping

Converts window bounds from the global, top-left-origin space into a
display's local, bottom-left-origin pixel space.

Every display goes through the same steps. A display above or left of
the main one has a negative origin, and subtracting it yields the
positive local offset.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .archetypes import AppDescriptor
from .diagnostics import LayoutWarning, WarningKind
from .geometry import DisplayDescriptor, Rect
from .roles import Role


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


@dataclass(frozen=True)
class PlacedWindow:
    """
    Final placement of one window.

    local_bounds is in the display's local, bottom-left-origin pixel space
    and always lies inside [0, W] x [0, H].
    """

    app: AppDescriptor
    display_index: int
    local_bounds: Rect
    role: Role = Role.PEEK_LAYER
    layer: int = 0
    focused: bool = False


class CoordinateMapper:
    """Maps global window bounds onto the display that contains them."""

    def __init__(self, displays: Sequence[DisplayDescriptor]):
        if not displays:
            raise ValueError("CoordinateMapper needs at least one display")
        self.displays = list(displays)

    @property
    def main_display(self) -> DisplayDescriptor:
        return next((d for d in self.displays if d.is_main), self.displays[0])

    def display_at(self, px: float, py: float) -> Optional[DisplayDescriptor]:
        """The display whose global frame contains a point."""
        for display in self.displays:
            if display.global_frame.contains_point(px, py):
                return display
        return None

    def select_display(
        self, bounds: Rect
    ) -> Tuple[DisplayDescriptor, List[LayoutWarning]]:
        """Display containing the window's center, else the main display."""
        cx, cy = bounds.center
        display = self.display_at(cx, cy)
        if display is not None:
            return display, []
        fallback = self.main_display
        return fallback, [
            LayoutWarning(
                WarningKind.NO_CONTAINING_DISPLAY,
                f"center ({cx:g}, {cy:g}) of {bounds} lies outside every "
                f"display; using display {fallback.index}",
            )
        ]

    @staticmethod
    def to_local(bounds: Rect, display: DisplayDescriptor) -> Rect:
        """Global top-left coordinates to display-local top-left ones."""
        origin = display.global_frame
        return Rect(bounds.x - origin.x, bounds.y - origin.y, bounds.width, bounds.height)

    @staticmethod
    def flip(local: Rect, display: DisplayDescriptor) -> Rect:
        """Top-left origin to bottom-left origin within a display."""
        return Rect(
            local.x,
            display.height - local.y - local.height,
            local.width,
            local.height,
        )

    @staticmethod
    def clamp(bounds: Rect, display: DisplayDescriptor) -> Rect:
        """Keep bounds fully inside [0, W] x [0, H]."""
        width = min(bounds.width, display.width)
        height = min(bounds.height, display.height)
        return Rect(
            _clamp(bounds.x, 0, display.width - width),
            _clamp(bounds.y, 0, display.height - height),
            width,
            height,
        )

    @staticmethod
    def to_global(local: Rect, display: DisplayDescriptor) -> Rect:
        """Inverse of flip() followed by to_local()."""
        origin = display.global_frame
        top = display.height - local.y - local.height
        return Rect(local.x + origin.x, top + origin.y, local.width, local.height)

    def convert(
        self, bounds: Rect
    ) -> Tuple[DisplayDescriptor, Rect, List[LayoutWarning]]:
        """Select, translate, flip and clamp."""
        display, warnings = self.select_display(bounds)
        local = self.to_local(bounds, display)
        cocoa = self.flip(local, display)
        return display, self.clamp(cocoa, display), warnings

    def place(
        self,
        app: AppDescriptor,
        bounds: Rect,
        role: Role = Role.PEEK_LAYER,
        layer: int = 0,
        focused: bool = False,
    ) -> Tuple[PlacedWindow, List[LayoutWarning]]:
        """Build a PlacedWindow for an app at global bounds."""
        display, local, warnings = self.convert(bounds)
        warnings = [
            LayoutWarning(w.kind, w.message, app=app.name) for w in warnings
        ]
        placed = PlacedWindow(
            app=app,
            display_index=display.index,
            local_bounds=local,
            role=role,
            layer=layer,
            focused=focused,
        )
        return placed, warnings
