"""
Layout Diagnostics

Every problem the engine can hit is recoverable. Instead of raising, stages
return LayoutWarning records that end up on the LayoutResult and are
published on the event bus.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from pubsub import pub

from . import topics


class WarningKind(Enum):
    """Categories of recoverable layout problems."""

    CLASSIFICATION_MISS = "classification_miss"
    SELECTION_UNDERFLOW = "selection_underflow"
    SIZING_CONSTRAINT_CONFLICT = "sizing_constraint_conflict"
    DEGENERATE_BOUNDING_BOX = "degenerate_bounding_box"
    OCCLUSION_VIOLATION = "occlusion_violation"
    NO_CONTAINING_DISPLAY = "no_containing_display"


@dataclass(frozen=True)
class LayoutWarning:
    """A non-fatal diagnostic produced while computing a layout."""

    kind: WarningKind
    message: str
    app: Optional[str] = None

    def __str__(self) -> str:
        prefix = f"{self.app}: " if self.app else ""
        return f"[{self.kind.value}] {prefix}{self.message}"


def publish(warnings: Iterable[LayoutWarning]):
    """Publish warnings on the event bus."""
    for warning in warnings:
        pub.sendMessage(topics.LAYOUT_WARNING, warning=warning)
