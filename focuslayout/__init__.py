"""
focuslayout

An intent-driven window layout engine. Given a context ("coding",
"research", ...) and the running applications, it decides which windows
to show, what role each one plays and where it goes on a display.

This package provides:
- Archetype classification of application names
- Context-aware relevance selection
- Role assignment, proportional sizing and cascade positioning
- Tiling and cascade layouts with occlusion checks
- Multi-display coordinate mapping

Example usage:
    from focuslayout import LayoutEngine, LayoutRequest, DisplayDescriptor, Rect

    display = DisplayDescriptor(0, Rect(0, 0, 1440, 900), is_main=True)
    result = LayoutEngine().compute(
        LayoutRequest("coding", ["Cursor", "Terminal", "Arc"], [display])
    )
    for placed in result.placements:
        print(placed.app.name, placed.local_bounds)

Or run directly:
    python -m focuslayout coding Cursor Terminal Arc
"""

__version__ = "0.1.0"

from .geometry import Rect, DisplayDescriptor

from .archetypes import Archetype, AppDescriptor, ArchetypeClassifier

from .selection import ContextProfile, RelevanceSelector, Selection

from .roles import Role, RoleAssigner

from .slots import LayoutMode, LayoutSlot

from .sizing import MinimumSize, ProportionalSizer

from .positioning import PositionResolver

from .occlusion import OcclusionPolicy, OcclusionValidator, VisibilityReport

from .layouts import (
    Layout,
    GridLayout,
    TilingLayout,
    CascadeLayout,
    CoverageNormalizer,
)

from .displays import CoordinateMapper, PlacedWindow

from .diagnostics import LayoutWarning, WarningKind

from .engine import (
    LayoutConfig,
    LayoutEngine,
    LayoutRequest,
    LayoutResult,
)

from . import topics

__all__ = [
    # Geometry
    "Rect",
    "DisplayDescriptor",
    # Classification and selection
    "Archetype",
    "AppDescriptor",
    "ArchetypeClassifier",
    "ContextProfile",
    "RelevanceSelector",
    "Selection",
    # Roles, sizing, positioning
    "Role",
    "RoleAssigner",
    "LayoutMode",
    "LayoutSlot",
    "MinimumSize",
    "ProportionalSizer",
    "PositionResolver",
    # Occlusion
    "OcclusionPolicy",
    "OcclusionValidator",
    "VisibilityReport",
    # Layouts
    "Layout",
    "GridLayout",
    "TilingLayout",
    "CascadeLayout",
    "CoverageNormalizer",
    # Displays
    "CoordinateMapper",
    "PlacedWindow",
    # Diagnostics
    "LayoutWarning",
    "WarningKind",
    # Engine
    "LayoutConfig",
    "LayoutEngine",
    "LayoutRequest",
    "LayoutResult",
    # Events
    "topics",
]
