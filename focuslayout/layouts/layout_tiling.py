"""
Tiling Layout

Proportional column tiling plus the coverage normalizer that stretches a
provisional tiling to fill the display exactly.
"""

from __future__ import annotations
from typing import List, Optional, Tuple

from .layout_base import Layout
from .layout_grid import GridLayout
from ..diagnostics import LayoutWarning, WarningKind
from ..geometry import DisplayDescriptor, Rect
from ..roles import Role
from ..slots import LayoutMode, LayoutSlot

_EPS = 1e-9


class CoverageNormalizer:
    """
    Rescales slots so their bounding box becomes the whole display.

    Every rect is translated relative to the bounding box origin and then
    scaled by (1 / B.width, 1 / B.height) in unit display space, which is
    displayWidth / B.width in pixels. Relative proportions and neighbour
    relations are preserved, so a provisional tiling stays a tiling.
    """

    def __init__(self, fallback: Optional[GridLayout] = None):
        self.fallback = fallback or GridLayout()

    def normalize(
        self, slots: List[LayoutSlot]
    ) -> Tuple[List[LayoutSlot], List[LayoutWarning]]:
        if not slots:
            return [], []

        bounds = Rect.bounding(slot.rect for slot in slots)
        if bounds.width <= _EPS or bounds.height <= _EPS:
            warning = LayoutWarning(
                WarningKind.DEGENERATE_BOUNDING_BOX,
                f"bounding box {bounds} has no area; falling back to an even grid",
            )
            cells = self.fallback.cells(len(slots))
            return [s.with_rect(c) for s, c in zip(slots, cells)], [warning]

        normalized = [slot.with_rect(self._stretch(slot.rect, bounds)) for slot in slots]
        return normalized, []

    @staticmethod
    def _stretch(rect: Rect, bounds: Rect) -> Rect:
        # Edges map independently; neighbours sharing an edge keep sharing it.
        left = (rect.x - bounds.x) / bounds.width
        top = (rect.y - bounds.y) / bounds.height
        right = (rect.right - bounds.x) / bounds.width
        bottom = (rect.bottom - bounds.y) / bounds.height
        return Rect(left, top, right - left, bottom - top)


class TilingLayout(Layout):
    """
    Tiling layout - no gaps, no overlaps.

    Windows that all share one archetype carry equal weight and get an even
    grid. Otherwise the primary takes a left column, the side column the
    right edge, and everything else is stacked in a middle column with row
    heights proportional to the sized heights. Column widths come from the
    sized width fractions; the normalizer then stretches the result to the
    display.
    """

    def __init__(
        self,
        grid: Optional[GridLayout] = None,
        normalizer: Optional[CoverageNormalizer] = None,
    ):
        self.grid = grid or GridLayout()
        self.normalizer = normalizer or CoverageNormalizer(self.grid)

    @property
    def name(self) -> str:
        return "tile"

    @property
    def mode(self) -> LayoutMode:
        return LayoutMode.TILE

    def provisional(self, slots: List[LayoutSlot]) -> List[LayoutSlot]:
        """Tile slots in unscaled space, keeping the input order."""
        archetypes = set(slot.app.archetype for slot in slots)
        if len(archetypes) <= 1:
            return [s.with_rect(c) for s, c in zip(slots, self.grid.cells(len(slots)))]

        primary = next((s for s in slots if s.role == Role.PRIMARY), slots[0])
        side = next(
            (s for s in slots if s.role == Role.SIDE_COLUMN and s is not primary),
            None,
        )
        stack = [s for s in slots if s is not primary and s is not side]

        placed = {}
        x = 0.0
        placed[id(primary)] = Rect(x, 0.0, primary.width_frac, 1.0)
        x += primary.width_frac

        if stack:
            stack_width = max(s.width_frac for s in stack)
            total_height = sum(s.height_frac for s in stack)
            y = 0.0
            for i, slot in enumerate(stack):
                if i == len(stack) - 1:
                    height = 1.0 - y
                elif total_height > _EPS:
                    height = slot.height_frac / total_height
                else:
                    height = 1.0 / len(stack)
                placed[id(slot)] = Rect(x, y, stack_width, height)
                y += height
            x += stack_width

        if side is not None:
            placed[id(side)] = Rect(x, 0.0, side.width_frac, 1.0)

        return [slot.with_rect(placed[id(slot)]) for slot in slots]

    def arrange(
        self, slots: List[LayoutSlot], display: DisplayDescriptor
    ) -> Tuple[List[LayoutSlot], List[LayoutWarning]]:
        if not slots:
            return [], []
        return self.normalizer.normalize(self.provisional(slots))
