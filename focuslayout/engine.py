"""
Layout Engine

Runs the full pipeline for one display:

    classify -> select -> assign roles -> size -> position
    -> tile or cascade -> map to display-local coordinates

Each call is a pure function of its request. Nothing is cached between
calls apart from the classifier's memo, and no problem short of invalid
configuration raises; everything else comes back as a LayoutWarning.
"""

from __future__ import annotations
import os
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

from pubsub import pub

from . import topics
from .archetypes import Archetype, ArchetypeClassifier
from .diagnostics import LayoutWarning, WarningKind, publish
from .displays import CoordinateMapper, PlacedWindow
from .geometry import DisplayDescriptor, Rect
from .layouts import CascadeLayout, Layout, TilingLayout
from .occlusion import OcclusionPolicy, OcclusionValidator
from .positioning import PositionResolver
from .roles import RoleAssigner
from .selection import RelevanceSelector, Selection
from .sizing import MinimumSize, ProportionalSizer
from .slots import LayoutMode, LayoutSlot


def _fraction(name: str, value: float, allow_zero: bool = False):
    low_ok = value >= 0 if allow_zero else value > 0
    if not (low_ok and value <= 1):
        raise ValueError(f"{name} must be a fraction of the display, got {value}")


@dataclass
class LayoutConfig:
    """Layout engine configuration."""

    # Selection
    max_apps: int = 4
    relevance_floor: float = 3.0

    # Layout mode: "cascade" or "tile"
    mode: Union[str, LayoutMode] = LayoutMode.CASCADE

    # Cascade: how far each peek layer steps away from the primary
    cascade_offset: Tuple[float, float] = (0.20, 0.30)

    # Occlusion: "adjust" moves violating windows, "report" only warns
    occlusion_policy: Union[str, OcclusionPolicy] = OcclusionPolicy.ADJUST
    min_clickable_pixels: float = 1600
    min_clickable_fraction: float = 0.15

    # Per-archetype pixel minimums replacing the defaults
    minimum_overrides: Optional[Dict[Archetype, MinimumSize]] = None

    # Print every bus event (also enabled by FOCUSLAYOUT_DEBUG)
    debug: bool = field(default_factory=lambda: bool(os.getenv("FOCUSLAYOUT_DEBUG")))

    def __post_init__(self):
        """Parse mode strings and validate ranges."""
        self.mode = LayoutMode.parse(self.mode)
        self.occlusion_policy = OcclusionPolicy.parse(self.occlusion_policy)

        if self.max_apps < 1:
            raise ValueError(f"max_apps must be at least 1, got {self.max_apps}")
        if self.min_clickable_pixels < 0:
            raise ValueError(
                f"min_clickable_pixels must not be negative, got {self.min_clickable_pixels}"
            )
        _fraction("min_clickable_fraction", self.min_clickable_fraction, allow_zero=True)

        if len(self.cascade_offset) != 2:
            raise ValueError(f"cascade_offset must be (x, y), got {self.cascade_offset}")
        ox, oy = self.cascade_offset
        if not (0 <= ox < 1 and 0 <= oy < 1):
            raise ValueError(f"cascade_offset must lie in [0, 1), got {self.cascade_offset}")
        self.cascade_offset = (float(ox), float(oy))


@dataclass
class LayoutRequest:
    """What the intent extractor hands the engine."""

    context: str
    candidate_apps: List[str]
    displays: List[DisplayDescriptor]
    # Overrides for the engine configuration
    max_apps: Optional[int] = None
    mode: Optional[Union[str, LayoutMode]] = None
    # Display index to lay out on; defaults to the main display
    target_display: Optional[int] = None

    def __post_init__(self):
        if not self.displays:
            raise ValueError("LayoutRequest needs at least one display")
        if self.mode is not None:
            self.mode = LayoutMode.parse(self.mode)
        if self.max_apps is not None and self.max_apps < 1:
            raise ValueError(f"max_apps must be at least 1, got {self.max_apps}")


@dataclass
class LayoutResult:
    """Everything a layout pass produced."""

    placements: List[PlacedWindow] = field(default_factory=list)
    slots: List[LayoutSlot] = field(default_factory=list)
    warnings: List[LayoutWarning] = field(default_factory=list)
    # Candidates the caller may hide, least relevant first
    minimized: List[str] = field(default_factory=list)
    selection: Optional[Selection] = None
    mode: LayoutMode = LayoutMode.CASCADE
    display_index: int = 0

    @property
    def focused_placement(self) -> Optional[PlacedWindow]:
        return next((p for p in self.placements if p.focused), None)

    @property
    def names(self) -> List[str]:
        return [p.app.name for p in self.placements]

    def warnings_of(self, kind: WarningKind) -> List[LayoutWarning]:
        return [w for w in self.warnings if w.kind == kind]


class LayoutEngine:
    """
    Intent-driven multi-window layout engine.

    Architecture:
    1. Stage objects are built once from the configuration
    2. compute() threads a request through them
    3. Warnings and the result are published on the event bus (Pypubsub)
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

        if self.config.debug:
            pub.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self.classifier = ArchetypeClassifier()
        self.selector = RelevanceSelector(
            classifier=self.classifier,
            relevance_floor=self.config.relevance_floor,
        )
        self.role_assigner = RoleAssigner()
        self.sizer = ProportionalSizer(overrides=self.config.minimum_overrides)
        self.position_resolver = PositionResolver(
            cascade_offset=self.config.cascade_offset
        )
        self.validator = OcclusionValidator(
            min_clickable_pixels=self.config.min_clickable_pixels,
            min_clickable_fraction=self.config.min_clickable_fraction,
        )
        self.layouts: Dict[LayoutMode, Layout] = {
            LayoutMode.TILE: TilingLayout(),
            LayoutMode.CASCADE: CascadeLayout(
                validator=self.validator,
                policy=self.config.occlusion_policy,
                cascade_offset=self.config.cascade_offset,
            ),
        }

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        timestamp = time.strftime("%H:%M:%S")
        topic_name = topic.getName()
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        print(f"[{timestamp}] EVENT: {topic_name} | {data_str}")

    def _target_display(
        self, request: LayoutRequest
    ) -> Tuple[DisplayDescriptor, List[LayoutWarning]]:
        displays = request.displays
        main = next((d for d in displays if d.is_main), displays[0])
        if request.target_display is None:
            return main, []
        for display in displays:
            if display.index == request.target_display:
                return display, []
        return main, [
            LayoutWarning(
                WarningKind.NO_CONTAINING_DISPLAY,
                f"display {request.target_display} is not connected; "
                f"using display {main.index}",
            )
        ]

    def compute(self, request: LayoutRequest) -> LayoutResult:
        """Compute a complete placement for a request."""
        pub.sendMessage(topics.LAYOUT_STARTED, request=request)

        mode = request.mode or self.config.mode
        max_apps = request.max_apps or self.config.max_apps
        display, warnings = self._target_display(request)

        selection = self.selector.select(request.candidate_apps, request.context, max_apps)
        pub.sendMessage(topics.SELECTION_COMPLETED, selection=selection)

        result = LayoutResult(
            warnings=warnings,
            minimized=[app.name for app in selection.minimized],
            selection=selection,
            mode=mode,
            display_index=display.index,
        )

        if len(selection.apps) < max_apps:
            warnings.append(
                LayoutWarning(
                    WarningKind.SELECTION_UNDERFLOW,
                    f"{len(selection.apps)} of {max_apps} slot(s) filled "
                    f"from {len(selection.scores)} candidate(s)",
                )
            )
        for app in selection.apps:
            if app.archetype == Archetype.UNKNOWN:
                warnings.append(
                    LayoutWarning(
                        WarningKind.CLASSIFICATION_MISS,
                        "unrecognized app, treated as unknown archetype",
                        app=app.name,
                    )
                )

        if selection.apps:
            slots = [
                LayoutSlot(app=app, role=role, relevance=selection.scores[app.name])
                for app, role in self.role_assigner.assign(selection.apps)
            ]
            slots, problems = self.sizer.apply(slots, display)
            warnings.extend(problems)
            slots = self.position_resolver.resolve(slots)
            slots, problems = self.layouts[mode].arrange(slots, display)
            warnings.extend(problems)
            result.slots = slots
            result.placements = self.place(slots, display, request.displays, warnings)

        publish(warnings)
        pub.sendMessage(topics.LAYOUT_COMPUTED, result=result)
        return result

    def place(
        self,
        slots: Sequence[LayoutSlot],
        display: DisplayDescriptor,
        displays: Sequence[DisplayDescriptor],
        warnings: List[LayoutWarning],
    ) -> List[PlacedWindow]:
        """Turn arranged slots into display-local placements."""
        mapper = CoordinateMapper(displays)
        origin = display.global_frame
        placements = []
        for slot in slots:
            local = slot.pixel_rect(display).snapped()
            global_bounds = local.translated(origin.x, origin.y)
            placed, problems = mapper.place(
                slot.app,
                global_bounds,
                role=slot.role,
                layer=slot.layer,
                focused=slot.focused,
            )
            placements.append(placed)
            warnings.extend(problems)
        return placements


def _parse_display(index: int, value: str) -> DisplayDescriptor:
    try:
        x, y, width, height = (float(v) for v in value.split(","))
    except ValueError:
        raise ValueError(f"Invalid display: {value!r}. Use X,Y,WIDTH,HEIGHT") from None
    return DisplayDescriptor(index, Rect(x, y, width, height), is_main=index == 0)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the layout for a context and a list of apps."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="focuslayout", description="Preview an intent-driven window layout"
    )
    parser.add_argument("context", help='context tag, e.g. "coding"')
    parser.add_argument("apps", nargs="+", help="candidate application names")
    parser.add_argument("--mode", choices=[m.value for m in LayoutMode], default=None)
    parser.add_argument("--max-apps", type=int, default=None)
    parser.add_argument(
        "--display",
        action="append",
        metavar="X,Y,W,H",
        help="display frame in global coordinates; the first one is main",
    )
    args = parser.parse_args(argv)

    try:
        displays = [
            _parse_display(i, value) for i, value in enumerate(args.display or ["0,0,1440,900"])
        ]
        request = LayoutRequest(
            context=args.context,
            candidate_apps=args.apps,
            displays=displays,
            max_apps=args.max_apps,
            mode=args.mode,
        )
    except ValueError as e:
        parser.error(str(e))

    result = LayoutEngine().compute(request)
    print(f"{result.mode.value} layout on display {result.display_index}:")
    for placed in result.placements:
        marker = "*" if placed.focused else " "
        print(
            f" {marker} {placed.app.name:<20} {placed.role.value:<12} "
            f"layer {placed.layer:<2} {placed.local_bounds}"
        )
    if result.minimized:
        print(f"minimized: {', '.join(result.minimized)}")
    for warning in result.warnings:
        print(f"warning: {warning}")
    return 0


if __name__ == "__main__":
    import sys

    sys.exit(main())
