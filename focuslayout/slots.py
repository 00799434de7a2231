"""
Layout Slots

The per-window record passed between layout stages.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from .archetypes import AppDescriptor
from .geometry import DisplayDescriptor, Rect
from .roles import Role


class LayoutMode(Enum):
    """How windows share a display."""

    TILE = "tile"  # Exact partition, no gaps, no overlaps
    CASCADE = "cascade"  # Intentional overlap around a focused primary

    @classmethod
    def parse(cls, value: "str | LayoutMode") -> "LayoutMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid layout mode: {value!r}. Use 'tile' or 'cascade'"
            ) from None


@dataclass
class LayoutSlot:
    """
    A window's place in a layout, in fractions of the display.

    x_frac + width_frac may exceed 1 only until a Layout has arranged the
    slots.
    """

    app: AppDescriptor
    role: Role
    width_frac: float = 0.0
    height_frac: float = 0.0
    x_frac: float = 0.0
    y_frac: float = 0.0
    layer: int = 0
    focused: bool = False
    relevance: float = 0.0

    @property
    def rect(self) -> Rect:
        """Slot bounds in unit display space."""
        return Rect(self.x_frac, self.y_frac, self.width_frac, self.height_frac)

    def with_rect(self, rect: Rect) -> "LayoutSlot":
        return replace(
            self,
            x_frac=rect.x,
            y_frac=rect.y,
            width_frac=rect.width,
            height_frac=rect.height,
        )

    def pixel_rect(self, display: DisplayDescriptor) -> Rect:
        """Slot bounds in display-local, top-left-origin pixels."""
        return self.rect.scaled(display.width, display.height)
