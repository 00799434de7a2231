"""
Proportional Sizing

Computes each window's fractional size from its role and the number of
windows, then grows it until the app stays usable on the target display.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .archetypes import AppDescriptor, Archetype
from .diagnostics import LayoutWarning, WarningKind
from .geometry import DisplayDescriptor
from .slots import LayoutSlot
from .roles import Role

SMALL = "<=2"
MEDIUM = "3"
LARGE = ">=4"


def count_bucket(count: int) -> str:
    """Bucket a window count for the size table."""
    if count <= 2:
        return SMALL
    if count == 3:
        return MEDIUM
    return LARGE


@dataclass(frozen=True)
class MinimumSize:
    """Smallest size at which an archetype stays functional."""

    min_width: float = 0  # pixels
    min_height: float = 0  # pixels
    min_area_fraction: float = 0.0  # of the display area


# (width, height) fractions keyed by (role, count bucket)
DEFAULT_SIZE_TABLE: Mapping[Tuple[Role, str], Tuple[float, float]] = MappingProxyType(
    {
        (Role.PRIMARY, SMALL): (0.80, 0.90),
        (Role.PRIMARY, MEDIUM): (0.70, 0.85),
        (Role.PRIMARY, LARGE): (0.65, 0.85),
        (Role.SIDE_COLUMN, SMALL): (0.35, 1.0),
        (Role.SIDE_COLUMN, MEDIUM): (0.25, 1.0),
        (Role.SIDE_COLUMN, LARGE): (0.25, 1.0),
        (Role.PEEK_LAYER, SMALL): (0.55, 0.50),
        (Role.PEEK_LAYER, MEDIUM): (0.45, 0.45),
        (Role.PEEK_LAYER, LARGE): (0.45, 0.45),
        (Role.CORNER, SMALL): (0.20, 0.25),
        (Role.CORNER, MEDIUM): (0.20, 0.20),
        (Role.CORNER, LARGE): (0.18, 0.20),
    }
)

DEFAULT_MINIMUMS: Mapping[Archetype, MinimumSize] = MappingProxyType(
    {
        Archetype.TEXT_STREAM: MinimumSize(min_width=400, min_height=300),
        Archetype.CONTENT_CANVAS: MinimumSize(min_width=650, min_area_fraction=0.20),
        Archetype.CODE_WORKSPACE: MinimumSize(min_width=500, min_height=400),
        Archetype.GLANCEABLE_MONITOR: MinimumSize(min_width=200, min_height=150),
        Archetype.UNKNOWN: MinimumSize(),
    }
)

# Largest fraction a window may grow to while meeting its minimum, so
# secondary windows never push the primary aside.
DEFAULT_CAPS: Mapping[Role, Tuple[float, float]] = MappingProxyType(
    {
        Role.PRIMARY: (1.0, 1.0),
        Role.SIDE_COLUMN: (0.50, 1.0),
        Role.PEEK_LAYER: (0.65, 0.60),
        Role.CORNER: (0.35, 0.35),
    }
)

_EPS = 1e-9


class ProportionalSizer:
    """Sizes slots as fractions of a display."""

    def __init__(
        self,
        size_table: Mapping[Tuple[Role, str], Tuple[float, float]] = DEFAULT_SIZE_TABLE,
        minimums: Mapping[Archetype, MinimumSize] = DEFAULT_MINIMUMS,
        caps: Mapping[Role, Tuple[float, float]] = DEFAULT_CAPS,
        overrides: Optional[Mapping[Archetype, MinimumSize]] = None,
    ):
        self.size_table = size_table
        merged: Dict[Archetype, MinimumSize] = dict(minimums)
        merged.update(overrides or {})
        self.minimums = MappingProxyType(merged)
        self.caps = caps

    def base_size(self, role: Role, count: int) -> Tuple[float, float]:
        return self.size_table[(role, count_bucket(count))]

    def size(
        self,
        app: AppDescriptor,
        role: Role,
        count: int,
        display: DisplayDescriptor,
    ) -> Tuple[float, float, List[LayoutWarning]]:
        """
        Compute (width_frac, height_frac) for one window.

        Pixel minimums are converted against this display, so the same app
        gets a larger fraction on a smaller screen.
        """
        base_w, base_h = self.base_size(role, count)
        width, height = base_w, base_h
        minimum = self.minimums.get(app.archetype, MinimumSize())

        if display.width <= 0 or display.height <= 0:
            return width, height, []

        need_w = minimum.min_width / display.width
        need_h = minimum.min_height / display.height
        width = max(width, need_w)
        height = max(height, need_h)

        area = width * height
        if minimum.min_area_fraction > 0 and area < minimum.min_area_fraction:
            scale = math.sqrt(minimum.min_area_fraction / area)
            width *= scale
            height *= scale

        cap_w, cap_h = self.caps.get(role, (1.0, 1.0))
        width = min(width, min(1.0, max(cap_w, base_w)))
        height = min(height, min(1.0, max(cap_h, base_h)))

        warnings = []
        unmet = (
            width < need_w - _EPS
            or height < need_h - _EPS
            or width * height < minimum.min_area_fraction - _EPS
        )
        if unmet:
            warnings.append(
                LayoutWarning(
                    WarningKind.SIZING_CONSTRAINT_CONFLICT,
                    f"minimum {minimum.min_width:g}x{minimum.min_height:g}px "
                    f"({minimum.min_area_fraction:.0%} area) exceeds the "
                    f"{role.value} cap; clamped to "
                    f"{width * display.width:.0f}x{height * display.height:.0f}px",
                    app=app.name,
                )
            )
        return width, height, warnings

    def apply(
        self, slots: List[LayoutSlot], display: DisplayDescriptor
    ) -> Tuple[List[LayoutSlot], List[LayoutWarning]]:
        """Size every slot for the given display."""
        count = len(slots)
        sized = []
        warnings: List[LayoutWarning] = []
        for slot in slots:
            width, height, problems = self.size(slot.app, slot.role, count, display)
            sized.append(replace(slot, width_frac=width, height_frac=height))
            warnings.extend(problems)
        return sized, warnings
