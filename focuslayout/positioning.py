"""
Position Resolution

Anchors each sized slot on the display and assigns stacking order.
"""

from __future__ import annotations
from dataclasses import replace
from typing import List, Optional, Tuple

from .slots import LayoutSlot
from .roles import Role


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, max(low, high)))


class PositionResolver:
    """
    Resolves fractional positions and layers for sized slots.

    Anchors:
    - Primary at primary_anchor, narrowed to end at a side column if any
    - Side column flush with the right edge, full height
    - k-th peek layer at primary + cascade_offset * (k + 1)
    - Corners cycle bottom-right, bottom-left, top-right, top-left

    Peeks and corners are handed out by descending relevance, so the most
    relevant one gets the first cascade step and the highest layer below
    the primary.
    """

    def __init__(
        self,
        cascade_offset: Tuple[float, float] = (0.20, 0.30),
        primary_anchor: Tuple[float, float] = (0.05, 0.05),
        corner_anchor: Tuple[float, float] = (0.80, 0.80),
    ):
        self.cascade_offset = cascade_offset
        self.primary_anchor = primary_anchor
        self.corner_anchor = corner_anchor

    def peek_anchor(self, primary: LayoutSlot, step: float) -> Tuple[float, float]:
        """Cascade anchor `step` offsets away from the primary."""
        ox, oy = self.cascade_offset
        return primary.x_frac + ox * step, primary.y_frac + oy * step

    def corner_position(
        self, index: int, width: float, height: float, right_limit: float = 1.0
    ) -> Tuple[float, float]:
        ax, ay = self.corner_anchor
        right_x = _clamp(min(ax, right_limit - width), 0.0, 1.0 - width)
        left_x = _clamp(1.0 - ax - width, 0.0, right_limit - width)
        bottom_y = _clamp(ay, 0.0, 1.0 - height)
        top_y = _clamp(1.0 - ay - height, 0.0, 1.0 - height)
        corners = [
            (right_x, bottom_y),
            (left_x, bottom_y),
            (right_x, top_y),
            (left_x, top_y),
        ]
        return corners[index % len(corners)]

    def resolve(self, slots: List[LayoutSlot]) -> List[LayoutSlot]:
        """Position every slot; output keeps the input order."""
        if not slots:
            return []

        side: Optional[LayoutSlot] = next(
            (s for s in slots if s.role == Role.SIDE_COLUMN), None
        )
        # Right edge left free for the side column
        right_limit = 1.0 - side.width_frac if side else 1.0

        n = len(slots)
        resolved: List[LayoutSlot] = []
        primary: Optional[LayoutSlot] = None
        for slot in slots:
            if slot.role == Role.PRIMARY:
                px, py = self.primary_anchor
                width = slot.width_frac
                if right_limit - px > 0:
                    width = min(width, right_limit - px)
                height = min(slot.height_frac, 1.0 - py)
                primary = replace(
                    slot,
                    x_frac=px,
                    y_frac=py,
                    width_frac=width,
                    height_frac=height,
                    layer=n,
                    focused=True,
                )
                resolved.append(primary)
            else:
                resolved.append(slot)

        if primary is None:
            raise ValueError("Cannot position a layout without a primary slot")

        next_layer = n - 1
        if side is not None:
            next_layer = n - 2

        peeks = 0
        corners = 0
        # More relevant windows sit closer to the primary and higher up;
        # ties keep selection order.
        order = sorted(range(n), key=lambda i: -resolved[i].relevance)
        for i in order:
            slot = resolved[i]
            if slot.role == Role.PRIMARY:
                continue
            w, h = slot.width_frac, slot.height_frac
            if slot is side:
                resolved[i] = replace(
                    slot, x_frac=1.0 - w, y_frac=0.0, layer=n - 1, focused=False
                )
                continue

            if slot.role == Role.CORNER:
                x, y = self.corner_position(corners, w, h, right_limit)
                corners += 1
            else:
                x, y = self.peek_anchor(primary, peeks + 1)
                x = _clamp(x, 0.0, 1.0 - w)
                y = _clamp(y, 0.0, 1.0 - h)
                peeks += 1
            resolved[i] = replace(
                slot, x_frac=x, y_frac=y, layer=next_layer, focused=False
            )
            next_layer -= 1

        return resolved
