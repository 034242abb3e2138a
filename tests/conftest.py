"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import pytest

from src.common.types import Quadrilateral, Rect
from src.stabilization.types import StabilizationConfig


@pytest.fixture
def portrait_frame():
    """Fixture providing a 1000x1400 portrait reference frame."""
    return Rect.from_size(1000, 1400)


@pytest.fixture
def a4_config():
    """Fixture providing default thresholds for an A4-like target ratio."""
    return StabilizationConfig(target_ratio=1.41)


@pytest.fixture
def tracked_a4():
    """
    Fixture providing an 800x1130 tracked rectangle (ratio ~1.41).

    Covers ~64.6% of the portrait frame.
    """
    return Quadrilateral.from_mapping(
        {
            "top_left": [100, 100],
            "top_right": [900, 100],
            "bottom_left": [100, 1230],
            "bottom_right": [900, 1230],
        }
    )


@pytest.fixture
def make_candidate(tracked_a4):
    """Fixture building a candidate from the tracked rectangle with overrides."""

    def _make(**overrides):
        corners = tracked_a4.to_dict()
        corners.update({role: list(xy) for role, xy in overrides.items()})
        return Quadrilateral.from_mapping(corners)

    return _make
