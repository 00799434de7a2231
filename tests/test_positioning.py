"""
Unit tests for position resolution.
"""

import pytest
from focuslayout.archetypes import Archetype
from focuslayout.positioning import PositionResolver
from focuslayout.roles import Role


@pytest.fixture
def scenario_slots(make_slot):
    """Sized slots of the coding scenario plus a corner window."""
    return [
        make_slot("Cursor", Archetype.CODE_WORKSPACE, Role.PRIMARY, 0.65, 0.85),
        make_slot("Terminal", Archetype.TEXT_STREAM, Role.SIDE_COLUMN, 0.25, 1.0),
        make_slot("Arc", Archetype.CONTENT_CANVAS, Role.PEEK_LAYER, 0.45, 0.45),
        make_slot("Finder", Archetype.GLANCEABLE_MONITOR, Role.CORNER, 0.18, 0.20),
    ]


@pytest.mark.unit
class TestPositionResolver:
    """Test anchors and stacking order."""

    def test_coding_scenario_positions(self, make_slot):
        """Cursor at (5%, 5%), Terminal at (75%, 0%), Arc at (25%, 35%)."""
        slots = [
            make_slot("Cursor", Archetype.CODE_WORKSPACE, Role.PRIMARY, 0.70, 0.85),
            make_slot("Terminal", Archetype.TEXT_STREAM, Role.SIDE_COLUMN, 0.25, 1.0),
            make_slot("Arc", Archetype.CONTENT_CANVAS, Role.PEEK_LAYER, 0.45, 0.45),
        ]
        cursor, terminal, arc = PositionResolver().resolve(slots)

        assert (cursor.x_frac, cursor.y_frac) == pytest.approx((0.05, 0.05))
        assert (cursor.width_frac, cursor.height_frac) == pytest.approx((0.70, 0.85))
        assert (terminal.x_frac, terminal.y_frac) == pytest.approx((0.75, 0.0))
        assert (arc.x_frac, arc.y_frac) == pytest.approx((0.25, 0.35))

    def test_layers_and_focus(self, scenario_slots):
        """Primary on top, side column next, the rest below in order."""
        resolved = PositionResolver().resolve(scenario_slots)
        assert [s.layer for s in resolved] == [4, 3, 2, 1]
        assert [s.focused for s in resolved] == [True, False, False, False]

    def test_primary_clipped_at_side_column(self, make_slot):
        slots = [
            make_slot("Cursor", Archetype.CODE_WORKSPACE, Role.PRIMARY, 0.80, 0.90),
            make_slot("Terminal", Archetype.TEXT_STREAM, Role.SIDE_COLUMN, 0.35, 1.0),
        ]
        cursor, terminal = PositionResolver().resolve(slots)
        assert cursor.x_frac + cursor.width_frac == pytest.approx(terminal.x_frac)

    def test_corner_stays_left_of_side_column(self, scenario_slots):
        resolved = PositionResolver().resolve(scenario_slots)
        finder = resolved[3]
        assert finder.x_frac + finder.width_frac <= 0.75 + 1e-9
        assert finder.y_frac == pytest.approx(0.80)

    def test_peek_layers_cascade(self, make_slot):
        """Each further peek is one more offset away from the primary."""
        slots = [
            make_slot("Cursor", Archetype.CODE_WORKSPACE, Role.PRIMARY, 0.5, 0.5),
            make_slot("Arc", Archetype.CONTENT_CANVAS, Role.PEEK_LAYER, 0.3, 0.2),
            make_slot("Safari", Archetype.CONTENT_CANVAS, Role.PEEK_LAYER, 0.3, 0.2),
        ]
        resolver = PositionResolver(cascade_offset=(0.1, 0.2))
        _, first, second = resolver.resolve(slots)
        assert (first.x_frac, first.y_frac) == pytest.approx((0.15, 0.25))
        assert (second.x_frac, second.y_frac) == pytest.approx((0.25, 0.45))

    def test_more_relevant_peek_cascades_first(self, make_slot):
        """The higher-scoring peek takes the first step and the higher layer."""
        slots = [
            make_slot("Cursor", Archetype.CODE_WORKSPACE, Role.PRIMARY, 0.5, 0.5, relevance=10.0),
            make_slot("Safari", Archetype.CONTENT_CANVAS, Role.PEEK_LAYER, 0.3, 0.2, relevance=4.0),
            make_slot("Arc", Archetype.CONTENT_CANVAS, Role.PEEK_LAYER, 0.3, 0.2, relevance=8.0),
        ]
        resolver = PositionResolver(cascade_offset=(0.1, 0.2))
        _, safari, arc = resolver.resolve(slots)
        assert (arc.x_frac, arc.y_frac) == pytest.approx((0.15, 0.25))
        assert (safari.x_frac, safari.y_frac) == pytest.approx((0.25, 0.45))
        assert arc.layer > safari.layer

    def test_peek_clamped_on_display(self, make_slot):
        slots = [
            make_slot("Cursor", Archetype.CODE_WORKSPACE, Role.PRIMARY, 0.5, 0.5),
            make_slot("Arc", Archetype.CONTENT_CANVAS, Role.PEEK_LAYER, 0.6, 0.6),
        ]
        _, arc = PositionResolver(cascade_offset=(0.5, 0.5)).resolve(slots)
        assert arc.x_frac + arc.width_frac <= 1.0 + 1e-9
        assert arc.y_frac + arc.height_frac <= 1.0 + 1e-9

    def test_corner_cycle(self):
        """Bottom-right, bottom-left, top-right, top-left, then around again."""
        resolver = PositionResolver()
        corners = [resolver.corner_position(i, 0.2, 0.2) for i in range(5)]
        assert corners[0] == pytest.approx((0.8, 0.8))
        assert corners[1] == pytest.approx((0.0, 0.8))
        assert corners[2] == pytest.approx((0.8, 0.0))
        assert corners[3] == pytest.approx((0.0, 0.0))
        assert corners[4] == corners[0]

    def test_input_order_kept(self, scenario_slots):
        resolved = PositionResolver().resolve(list(reversed(scenario_slots)))
        assert [s.app.name for s in resolved] == ["Finder", "Arc", "Terminal", "Cursor"]

    def test_requires_primary(self, make_slot):
        with pytest.raises(ValueError):
            PositionResolver().resolve([make_slot("Arc")])

    def test_empty(self):
        assert PositionResolver().resolve([]) == []
