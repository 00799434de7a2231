"""
Cascade Layout

Overlapping layout around a focused primary window. Runs the occlusion
policy before a layout is handed out.
"""

from __future__ import annotations
from typing import List, Optional, Tuple

from .layout_base import Layout
from ..diagnostics import LayoutWarning, WarningKind
from ..geometry import DisplayDescriptor, Rect
from ..occlusion import OcclusionPolicy, OcclusionValidator
from ..roles import Role
from ..slots import LayoutMode, LayoutSlot


def _steps(limit: float, step: float) -> List[float]:
    """0, step, 2*step, ... up to and including limit."""
    if limit <= 0:
        return [0.0]
    count = int(limit / step + 1e-9)
    values = [i * step for i in range(count + 1)]
    if limit - values[-1] > 1e-9:
        values.append(limit)
    return values


class CascadeLayout(Layout):
    """
    Cascade layout - windows overlap, the primary stays on top.

    With OcclusionPolicy.ADJUST, windows are revisited from the highest
    layer down. A window whose visible area is below the clickable minimum
    is first pushed further along its cascade direction, then moved to the
    nearest grid position that satisfies the minimum. Primary and side
    column windows never move. Whatever is still violated is reported.

    The visibility guarantee is best-effort under ADJUST: many windows on a
    small or portrait display may leave no position that satisfies every
    minimum, and those windows come back with an OCCLUSION_VIOLATION warning.
    """

    def __init__(
        self,
        validator: Optional[OcclusionValidator] = None,
        policy: OcclusionPolicy = OcclusionPolicy.ADJUST,
        cascade_offset: Tuple[float, float] = (0.20, 0.30),
        escalation_step: float = 0.1,
        search_step: float = 0.05,
    ):
        self.validator = validator or OcclusionValidator()
        self.policy = policy
        self.cascade_offset = cascade_offset
        self.escalation_step = escalation_step
        self.search_step = search_step

    @property
    def name(self) -> str:
        return "cascade"

    @property
    def mode(self) -> LayoutMode:
        return LayoutMode.CASCADE

    def arrange(
        self, slots: List[LayoutSlot], display: DisplayDescriptor
    ) -> Tuple[List[LayoutSlot], List[LayoutWarning]]:
        if not slots:
            return [], []

        if self.policy == OcclusionPolicy.ADJUST:
            slots = self.adjust(slots, display)

        warnings = []
        for report in self.validator.validate(slots, display):
            if not report.ok:
                warnings.append(
                    LayoutWarning(
                        WarningKind.OCCLUSION_VIOLATION,
                        f"visible area {report.visible_area:.0f}px² is below "
                        f"the required {report.required:.0f}px² "
                        f"({report.visible_fraction:.0%} visible)",
                        app=report.app,
                    )
                )
        return slots, warnings

    def _fixed(self, slot: LayoutSlot) -> bool:
        return slot.role in (Role.PRIMARY, Role.SIDE_COLUMN)

    def adjust(
        self, slots: List[LayoutSlot], display: DisplayDescriptor
    ) -> List[LayoutSlot]:
        """Move violating windows, highest layer first."""
        result = list(slots)
        order = sorted(range(len(slots)), key=lambda i: -slots[i].layer)
        above: List[Rect] = []

        for i in order:
            slot = result[i]
            rect = slot.pixel_rect(display)
            if not self._fixed(slot) and not self.validator.is_visible(rect, above):
                result[i] = self._relocate(slot, display, above)
                rect = result[i].pixel_rect(display)
            above.append(rect)

        return result

    def _candidates(self, slot: LayoutSlot) -> List[Tuple[float, float]]:
        """Positions to try, in order of preference."""
        max_x = max(0.0, 1.0 - slot.width_frac)
        max_y = max(0.0, 1.0 - slot.height_frac)
        candidates = []

        if slot.role == Role.PEEK_LAYER:
            ox, oy = self.cascade_offset
            x, y = slot.x_frac, slot.y_frac
            while True:
                x = min(x + ox * self.escalation_step, max_x)
                y = min(y + oy * self.escalation_step, max_y)
                candidates.append((x, y))
                if (x >= max_x or ox <= 0) and (y >= max_y or oy <= 0):
                    break

        grid = [
            (x, y)
            for x in _steps(max_x, self.search_step)
            for y in _steps(max_y, self.search_step)
        ]
        grid.sort(key=lambda p: abs(p[0] - slot.x_frac) + abs(p[1] - slot.y_frac))
        return candidates + grid

    def _relocate(
        self, slot: LayoutSlot, display: DisplayDescriptor, above: List[Rect]
    ) -> LayoutSlot:
        best = slot
        best_visible = self.validator.visible_area(slot.pixel_rect(display), above)
        for x, y in self._candidates(slot):
            moved = slot.with_rect(Rect(x, y, slot.width_frac, slot.height_frac))
            rect = moved.pixel_rect(display)
            visible = self.validator.visible_area(rect, above)
            if visible >= self.validator.required_area(rect):
                return moved
            if visible > best_visible:
                best, best_visible = moved, visible
        return best
