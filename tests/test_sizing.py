"""
Unit tests for proportional sizing.
"""

import pytest
from focuslayout.archetypes import AppDescriptor, Archetype
from focuslayout.diagnostics import WarningKind
from focuslayout.geometry import DisplayDescriptor, Rect
from focuslayout.roles import Role
from focuslayout.sizing import MinimumSize, ProportionalSizer, count_bucket

CURSOR = AppDescriptor("Cursor", Archetype.CODE_WORKSPACE)
TERMINAL = AppDescriptor("Terminal", Archetype.TEXT_STREAM)
ARC = AppDescriptor("Arc", Archetype.CONTENT_CANVAS)
MYSTERY = AppDescriptor("Zzyzx", Archetype.UNKNOWN)


def display(width, height):
    return DisplayDescriptor(0, Rect(0, 0, width, height), is_main=True)


@pytest.mark.unit
class TestCountBucket:
    """Test window-count bucketing."""

    @pytest.mark.parametrize(
        "count,bucket", [(1, "<=2"), (2, "<=2"), (3, "3"), (4, ">=4"), (9, ">=4")]
    )
    def test_buckets(self, count, bucket):
        assert count_bucket(count) == bucket


@pytest.mark.unit
class TestProportionalSizer:
    """Test base sizes, minimums and caps."""

    @pytest.mark.parametrize(
        "role,count,expected",
        [
            (Role.PRIMARY, 2, (0.80, 0.90)),
            (Role.PRIMARY, 3, (0.70, 0.85)),
            (Role.PRIMARY, 4, (0.65, 0.85)),
            (Role.SIDE_COLUMN, 2, (0.35, 1.0)),
            (Role.SIDE_COLUMN, 3, (0.25, 1.0)),
            (Role.PEEK_LAYER, 2, (0.55, 0.50)),
            (Role.PEEK_LAYER, 4, (0.45, 0.45)),
            (Role.CORNER, 3, (0.20, 0.20)),
            (Role.CORNER, 4, (0.18, 0.20)),
        ],
    )
    def test_base_size(self, role, count, expected):
        assert ProportionalSizer().base_size(role, count) == expected

    def test_base_size_kept_when_minimum_met(self, standard_display):
        """Scenario sizes fit a 1920x1080 display untouched."""
        sizer = ProportionalSizer()
        assert sizer.size(CURSOR, Role.PRIMARY, 3, standard_display)[:2] == (0.70, 0.85)
        assert sizer.size(TERMINAL, Role.SIDE_COLUMN, 3, standard_display)[:2] == (0.25, 1.0)
        width, height, warnings = sizer.size(ARC, Role.PEEK_LAYER, 3, standard_display)
        assert (width, height) == (0.45, 0.45)
        assert warnings == []

    def test_grows_to_pixel_minimum(self, laptop_display):
        """A browser needs 650px, which is more than 45% of 1440px."""
        width, height, warnings = ProportionalSizer().size(
            ARC, Role.PEEK_LAYER, 3, laptop_display
        )
        assert width == pytest.approx(650 / 1440)
        assert height == pytest.approx(0.45)
        assert warnings == []

    def test_same_app_takes_larger_fraction_on_smaller_display(self):
        sizer = ProportionalSizer()
        small = sizer.size(TERMINAL, Role.SIDE_COLUMN, 3, display(1280, 800))[0]
        large = sizer.size(TERMINAL, Role.SIDE_COLUMN, 3, display(2560, 1440))[0]
        assert small == pytest.approx(400 / 1280)
        assert large == pytest.approx(0.25)

    def test_area_minimum_scales_both_sides(self, standard_display):
        """An area shortfall grows width and height by the same factor."""
        sizer = ProportionalSizer(
            overrides={Archetype.CONTENT_CANVAS: MinimumSize(min_area_fraction=0.30)}
        )
        width, height, warnings = sizer.size(ARC, Role.PEEK_LAYER, 3, standard_display)
        assert width * height == pytest.approx(0.30)
        assert width == pytest.approx(height)
        assert warnings == []

    def test_cap_conflict_warns(self):
        """A minimum larger than the role cap is clamped and reported."""
        width, height, warnings = ProportionalSizer().size(
            TERMINAL, Role.CORNER, 3, display(800, 600)
        )
        assert width == pytest.approx(0.35)
        assert height == pytest.approx(0.35)
        assert [w.kind for w in warnings] == [WarningKind.SIZING_CONSTRAINT_CONFLICT]
        assert warnings[0].app == "Terminal"

    def test_never_beyond_display(self):
        """Fractions stay within 1.0 even on a tiny display."""
        width, height, warnings = ProportionalSizer().size(
            CURSOR, Role.PRIMARY, 1, display(320, 240)
        )
        assert width <= 1.0 and height <= 1.0
        assert warnings

    def test_unknown_has_no_minimum(self):
        width, height, warnings = ProportionalSizer().size(
            MYSTERY, Role.PEEK_LAYER, 4, display(200, 100)
        )
        assert (width, height) == (0.45, 0.45)
        assert warnings == []

    def test_apply_uses_slot_count(self, make_slot, standard_display):
        slots = [
            make_slot("Cursor", Archetype.CODE_WORKSPACE, Role.PRIMARY),
            make_slot("Terminal", Archetype.TEXT_STREAM, Role.SIDE_COLUMN),
        ]
        sized, warnings = ProportionalSizer().apply(slots, standard_display)
        assert [(s.width_frac, s.height_frac) for s in sized] == [
            (0.80, 0.90),
            (0.35, 1.0),
        ]
        assert warnings == []
