"""
Role Assignment

Gives each selected app its structural place in the layout.
"""

from __future__ import annotations
from enum import Enum
from itertools import cycle
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

from .archetypes import AppDescriptor, Archetype


class Role(Enum):
    """Structural position of a window."""

    PRIMARY = "primary"  # Main workspace, focused, on top
    SIDE_COLUMN = "side_column"  # Full-height column on the right edge
    PEEK_LAYER = "peek_layer"  # Cascades out from under the primary
    CORNER = "corner"  # Small glance window in a corner


DEFAULT_ROLE_MAP: Mapping[Archetype, Role] = MappingProxyType(
    {
        Archetype.CODE_WORKSPACE: Role.PRIMARY,
        Archetype.TEXT_STREAM: Role.SIDE_COLUMN,
        Archetype.CONTENT_CANVAS: Role.PEEK_LAYER,
        Archetype.GLANCEABLE_MONITOR: Role.CORNER,
        Archetype.UNKNOWN: Role.PEEK_LAYER,
    }
)

DEFAULT_DEMOTION_CYCLE: Tuple[Role, ...] = (Role.PEEK_LAYER, Role.CORNER)


class RoleAssigner:
    """Maps (archetype, selection position) to a role."""

    def __init__(
        self,
        natural_roles: Mapping[Archetype, Role] = DEFAULT_ROLE_MAP,
        demotion_cycle: Sequence[Role] = DEFAULT_DEMOTION_CYCLE,
    ):
        self.natural_roles = MappingProxyType(dict(natural_roles))
        self.demotion_cycle = tuple(demotion_cycle)

    def assign(self, apps: Sequence[AppDescriptor]) -> List[Tuple[AppDescriptor, Role]]:
        """
        Assign roles to apps ordered by relevance.

        The first app of each archetype keeps the archetype's natural role;
        later ones cycle through the demotion roles. If nothing ends up
        primary, the most relevant app is promoted.
        """
        demotions: Dict[Archetype, Iterator[Role]] = {}
        assigned: List[Tuple[AppDescriptor, Role]] = []

        has_primary = False
        for app in apps:
            if app.archetype not in demotions:
                demotions[app.archetype] = cycle(self.demotion_cycle)
                role = self.natural_roles.get(app.archetype, Role.PEEK_LAYER)
            else:
                role = next(demotions[app.archetype])
            # A custom role map may name several primary archetypes
            if role == Role.PRIMARY and has_primary:
                role = next(demotions[app.archetype])
            has_primary = has_primary or role == Role.PRIMARY
            assigned.append((app, role))

        if assigned and not has_primary:
            assigned[0] = (assigned[0][0], Role.PRIMARY)

        return assigned
