"""
Layout Base Classes

Provides the Layout interface shared by the tiling and cascade layouts.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Tuple

from ..diagnostics import LayoutWarning
from ..geometry import DisplayDescriptor
from ..slots import LayoutMode, LayoutSlot


class Layout(ABC):
    """Abstract base class for window layouts."""

    @abstractmethod
    def arrange(
        self,
        slots: List[LayoutSlot],
        display: DisplayDescriptor,
    ) -> Tuple[List[LayoutSlot], List[LayoutWarning]]:
        """
        Finalise slot positions on a display.

        Args:
            slots: Sized and positioned slots, ordered by relevance
            display: Display the layout is computed for

        Returns:
            The arranged slots (same order) and any warnings raised
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Layout name for display."""
        pass

    @property
    @abstractmethod
    def mode(self) -> LayoutMode:
        """The mode this layout implements."""
        pass
