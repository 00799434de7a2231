"""
Layout System

Provides the tiling and cascade layouts that finalise slot positions.
"""

from .layout_base import Layout
from .layout_grid import GridLayout
from .layout_tiling import CoverageNormalizer, TilingLayout
from .layout_cascade import CascadeLayout

__all__ = [
    # Base class
    "Layout",
    # Layout implementations
    "GridLayout",
    "TilingLayout",
    "CascadeLayout",
    # Helpers
    "CoverageNormalizer",
]
