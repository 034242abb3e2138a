"""
Stabilized-rectangle store.

Holds the tracked document corners. The store is only ever updated one
corner at a time; readers get an immutable snapshot.
"""

import logging
from typing import Dict

from src.common.types import CORNER_ORDER, CornerRole, Point, Quadrilateral

logger = logging.getLogger(__name__)


class TrackedRectangleStore:
    """Mutable holder of the four tracked corners."""

    def __init__(self, initial: Quadrilateral):
        self._points: Dict[CornerRole, Point] = {
            role: initial.point(role) for role in CORNER_ORDER
        }

    def point(self, role: CornerRole) -> Point:
        return self._points[role]

    def update_point(self, point: Point) -> None:
        """Replace the tracked point for point.role."""
        previous = self._points[point.role]
        if previous.to_tuple() != point.to_tuple():
            logger.debug(
                f"{point.role.value}: ({previous.x:.1f}, {previous.y:.1f}) -> "
                f"({point.x:.1f}, {point.y:.1f})"
            )
        self._points[point.role] = point

    def current_rectangle(self) -> Quadrilateral:
        """Snapshot of the tracked rectangle."""
        return Quadrilateral.from_points(self._points)
