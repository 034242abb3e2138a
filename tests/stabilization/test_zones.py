"""
Unit tests for zones module.
"""

import pytest

from src.common.types import CornerRole, Point, Rect
from src.stabilization.zones import is_in_zone, zone_of


class TestZoneOf:
    """Tests for zone_of function."""

    @pytest.mark.parametrize(
        "role, origin",
        [
            (CornerRole.TOP_LEFT, (0.0, 0.0)),
            (CornerRole.TOP_RIGHT, (500.0, 0.0)),
            (CornerRole.BOTTOM_LEFT, (0.0, 700.0)),
            (CornerRole.BOTTOM_RIGHT, (500.0, 700.0)),
        ],
    )
    def test_quadrants(self, portrait_frame, role, origin):
        """Each zone is a half-size quadrant at the matching corner."""
        zone = zone_of(portrait_frame, role)

        assert (zone.x, zone.y) == origin
        assert (zone.width, zone.height) == (500.0, 700.0)

    def test_offset_frame(self):
        """Zones are positioned relative to the frame origin."""
        zone = zone_of(Rect(x=20, y=40, width=200, height=100), CornerRole.BOTTOM_RIGHT)

        assert (zone.x, zone.y, zone.width, zone.height) == (120.0, 90.0, 100.0, 50.0)


class TestIsInZone:
    """Tests for is_in_zone function."""

    def test_point_in_own_quadrant(self, portrait_frame):
        assert is_in_zone(portrait_frame, Point(x=150, y=150, role=CornerRole.TOP_LEFT))
        assert is_in_zone(
            portrait_frame, Point(x=900, y=1230, role=CornerRole.BOTTOM_RIGHT)
        )

    def test_point_in_other_quadrant(self, portrait_frame):
        """A top-left point in the bottom-right quadrant is not plausible."""
        assert not is_in_zone(
            portrait_frame, Point(x=900, y=1230, role=CornerRole.TOP_LEFT)
        )

    def test_centre_belongs_to_bottom_right(self):
        """The frame centre is on the boundary and outside the top-left zone."""
        frame = Rect.from_size(1000, 1000)
        centre_tl = Point(x=500, y=500, role=CornerRole.TOP_LEFT)
        centre_br = Point(x=500, y=500, role=CornerRole.BOTTOM_RIGHT)

        assert not is_in_zone(frame, centre_tl)
        assert is_in_zone(frame, centre_br)

    def test_outside_frame(self, portrait_frame):
        assert not is_in_zone(portrait_frame, Point(x=-1, y=10, role=CornerRole.TOP_LEFT))

    def test_empty_frame(self):
        frame = Rect.from_size(0, 0)

        assert not is_in_zone(frame, Point(x=0, y=0, role=CornerRole.TOP_LEFT))
