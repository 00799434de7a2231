"""
Shared pytest fixtures for focuslayout tests.
"""

import pytest
from focuslayout.archetypes import AppDescriptor, Archetype, ArchetypeClassifier
from focuslayout.engine import LayoutConfig, LayoutEngine
from focuslayout.geometry import DisplayDescriptor, Rect
from focuslayout.roles import Role
from focuslayout.slots import LayoutSlot


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external resources")


@pytest.fixture
def standard_display():
    """Standard 1920x1080 main display."""
    return DisplayDescriptor(0, Rect(0, 0, 1920, 1080), is_main=True)


@pytest.fixture
def laptop_display():
    """1440x900 laptop panel."""
    return DisplayDescriptor(0, Rect(0, 0, 1440, 900), is_main=True)


@pytest.fixture
def offset_display():
    """Secondary 2560x1440 display right of and above the main one."""
    return DisplayDescriptor(1, Rect(1440, -540, 2560, 1440))


@pytest.fixture
def classifier():
    return ArchetypeClassifier()


@pytest.fixture
def engine():
    """Engine with default configuration and the debug logger off."""
    return LayoutEngine(LayoutConfig(debug=False))


@pytest.fixture
def make_slot():
    """Factory fixture for layout slots."""

    def _make(
        name="App",
        archetype=Archetype.UNKNOWN,
        role=Role.PEEK_LAYER,
        width=0.5,
        height=0.5,
        x=0.0,
        y=0.0,
        layer=0,
        relevance=0.0,
    ):
        return LayoutSlot(
            app=AppDescriptor(name, archetype),
            role=role,
            width_frac=width,
            height_frac=height,
            x_frac=x,
            y_frac=y,
            layer=layer,
            relevance=relevance,
        )

    return _make
