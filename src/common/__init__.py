"""
Common types shared across the scanner modules.

Geometry value types used by the stabilization engine and the scanner
session: corner-tagged points, rectangles and quadrilaterals.
"""

from src.common.types import (
    ARRAY_ORDER,
    CORNER_ORDER,
    CornerRole,
    Point,
    Quadrilateral,
    Rect,
)

__all__ = ["CornerRole", "CORNER_ORDER", "ARRAY_ORDER", "Point", "Quadrilateral", "Rect"]
