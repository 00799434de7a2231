"""
Grid Layout

Windows arranged in an even grid pattern.
"""

from __future__ import annotations
from typing import List, Tuple

from .layout_base import Layout
from ..diagnostics import LayoutWarning
from ..geometry import DisplayDescriptor, Rect
from ..slots import LayoutMode, LayoutSlot


class GridLayout(Layout):
    """
    Grid layout - windows arranged in a grid pattern.

    The last row is stretched to the full width when it is not full, so
    the grid always covers the whole display.
    """

    @property
    def name(self) -> str:
        return "grid"

    @property
    def mode(self) -> LayoutMode:
        return LayoutMode.TILE

    @staticmethod
    def dimensions(n: int) -> Tuple[int, int]:
        """(cols, rows) for n windows."""
        cols = 1
        while cols * cols < n:
            cols += 1
        rows = (n + cols - 1) // cols
        return cols, rows

    def cells(self, n: int) -> List[Rect]:
        """Grid cells in unit display space, row by row."""
        if n <= 0:
            return []

        cols, rows = self.dimensions(n)
        cell_height = 1.0 / rows
        result = []
        for row in range(rows):
            in_row = min(cols, n - row * cols)
            cell_width = 1.0 / in_row
            for col in range(in_row):
                result.append(
                    Rect(col * cell_width, row * cell_height, cell_width, cell_height)
                )
        return result

    def arrange(
        self, slots: List[LayoutSlot], display: DisplayDescriptor
    ) -> Tuple[List[LayoutSlot], List[LayoutWarning]]:
        if not slots:
            return [], []
        cells = self.cells(len(slots))
        return [slot.with_rect(cell) for slot, cell in zip(slots, cells)], []
