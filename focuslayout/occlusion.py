"""
Occlusion Validation

Measures how much of each window stays visible under the windows stacked
above it, and flags windows that drop below the clickable minimum.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, List, Sequence

from .geometry import DisplayDescriptor, Rect
from .slots import LayoutSlot
from .roles import Role


class OcclusionPolicy(Enum):
    """What a cascade layout does about occlusion violations."""

    REPORT = "report"  # Leave positions alone, return warnings
    ADJUST = "adjust"  # Move violating windows, warn about what is left

    @classmethod
    def parse(cls, value: "str | OcclusionPolicy") -> "OcclusionPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid occlusion policy: {value!r}. Use 'report' or 'adjust'"
            ) from None


@dataclass(frozen=True)
class VisibilityReport:
    """Visibility of one window."""

    app: str
    layer: int
    area: float
    visible_area: float
    required: float
    exempt: bool = False

    @property
    def ok(self) -> bool:
        return self.exempt or self.visible_area >= self.required

    @property
    def visible_fraction(self) -> float:
        return self.visible_area / self.area if self.area > 0 else 0.0


def union_area(rects: Iterable[Rect]) -> float:
    """Area covered by the union of rects (coordinate compression)."""
    rects = [r for r in rects if r.area > 0]
    if not rects:
        return 0.0
    xs = sorted(set([r.x for r in rects] + [r.right for r in rects]))
    total = 0.0
    for left, right in zip(xs, xs[1:]):
        spans = sorted(
            (r.y, r.bottom) for r in rects if r.x <= left and r.right >= right
        )
        covered = 0.0
        current_top = current_bottom = None
        for top, bottom in spans:
            if current_bottom is None or top > current_bottom:
                if current_bottom is not None:
                    covered += current_bottom - current_top
                current_top, current_bottom = top, bottom
            else:
                current_bottom = max(current_bottom, bottom)
        if current_bottom is not None:
            covered += current_bottom - current_top
        total += covered * (right - left)
    return total


class OcclusionValidator:
    """
    Checks the clickable-area invariant:

        visible_area >= max(min_clickable_pixels, min_clickable_fraction * area)

    Only reports; never moves a window.
    """

    def __init__(
        self,
        min_clickable_pixels: float = 1600,
        min_clickable_fraction: float = 0.15,
        exempt_roles: FrozenSet[Role] = frozenset({Role.SIDE_COLUMN}),
    ):
        self.min_clickable_pixels = min_clickable_pixels
        self.min_clickable_fraction = min_clickable_fraction
        self.exempt_roles = frozenset(exempt_roles)

    def required_area(self, rect: Rect) -> float:
        return max(self.min_clickable_pixels, self.min_clickable_fraction * rect.area)

    def visible_area(self, rect: Rect, occluders: Sequence[Rect]) -> float:
        """Area of rect not covered by any occluder."""
        overlaps = [o.intersection(rect) for o in occluders]
        return rect.area - union_area(o for o in overlaps if o is not None)

    def is_visible(self, rect: Rect, occluders: Sequence[Rect]) -> bool:
        return self.visible_area(rect, occluders) >= self.required_area(rect)

    def validate(
        self, slots: Sequence[LayoutSlot], display: DisplayDescriptor
    ) -> List[VisibilityReport]:
        """Report visibility for every slot, in slot order."""
        rects = [slot.pixel_rect(display) for slot in slots]
        reports = []
        for slot, rect in zip(slots, rects):
            occluders = [
                other_rect
                for other, other_rect in zip(slots, rects)
                if other.layer > slot.layer
            ]
            reports.append(
                VisibilityReport(
                    app=slot.app.name,
                    layer=slot.layer,
                    area=rect.area,
                    visible_area=self.visible_area(rect, occluders),
                    required=self.required_area(rect),
                    exempt=slot.role in self.exempt_roles,
                )
            )
        return reports
