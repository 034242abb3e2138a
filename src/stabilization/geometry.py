"""
Geometric measurements for the Stabilization module.

Computes the aspect ratio, area and corner angles of document
quadrilaterals. Two families of formulas are available:

- EUCLIDEAN: width/height from the longest pair of opposite edges, true
  polygon area, interior angles from adjacent edge vectors.
- LEGACY: the axis-mixed width/height/area formulas used by earlier
  scanner releases, and a fixed (90, 90) angle pair.

No function here raises on degenerate input: an undefined ratio is
``math.inf`` and an undefined angle is ``nan``, both of which fail the
acceptance gates.
"""

import logging
import math
from typing import Tuple

import cv2
import numpy as np

from src.common.types import CornerRole, Quadrilateral, Rect
from src.stabilization.types import AngleMode, MetricMode

logger = logging.getLogger(__name__)

FIXED_ANGLES = (90.0, 90.0)


def calculate_edge_lengths(quad: Quadrilateral) -> Tuple[float, float, float, float]:
    """
    Calculate the length of all 4 edges of a quadrilateral.

    Returns:
        Tuple of (top_edge, right_edge, bottom_edge, left_edge) lengths.

    Example:
        >>> quad = Quadrilateral.from_numpy([[0, 0], [300, 0], [300, 100], [0, 100]])
        >>> calculate_edge_lengths(quad)
        (300.0, 100.0, 300.0, 100.0)
    """
    tl, tr, br, bl = quad.to_numpy()

    top_edge = float(np.linalg.norm(tr - tl))
    right_edge = float(np.linalg.norm(br - tr))
    bottom_edge = float(np.linalg.norm(bl - br))
    left_edge = float(np.linalg.norm(tl - bl))

    return top_edge, right_edge, bottom_edge, left_edge


def calculate_dimensions(
    quad: Quadrilateral, mode: MetricMode = MetricMode.EUCLIDEAN
) -> Tuple[float, float]:
    """
    Calculate the (width, height) used for the aspect ratio.

    EUCLIDEAN takes the maximum of each pair of opposite edges so that a
    perspective-skewed document is measured by its least foreshortened side.
    LEGACY measures |BR.x - BL.x| and |TR.y - BR.y|.
    """
    if mode is MetricMode.LEGACY:
        width = abs(quad.bottom_right.x - quad.bottom_left.x)
        height = abs(quad.top_right.y - quad.bottom_right.y)
        return float(width), float(height)

    top, right, bottom, left = calculate_edge_lengths(quad)
    return max(top, bottom), max(left, right)


def calculate_ratio(
    quad: Quadrilateral, mode: MetricMode = MetricMode.EUCLIDEAN
) -> float:
    """
    Calculate the aspect ratio as long side over short side (always >= 1).

    Returns:
        The ratio, or math.inf if the short side is zero.

    Example:
        >>> quad = Quadrilateral.from_numpy([[0, 0], [100, 0], [100, 141], [0, 141]])
        >>> round(calculate_ratio(quad), 2)
        1.41
    """
    width, height = calculate_dimensions(quad, mode)
    short_side = min(width, height)

    if short_side == 0:
        logger.debug(f"Degenerate quadrilateral ({width:.1f} x {height:.1f})")
        return math.inf

    return max(width, height) / short_side


def calculate_area(
    quad: Quadrilateral, mode: MetricMode = MetricMode.EUCLIDEAN
) -> float:
    """
    Calculate the area of a quadrilateral.

    EUCLIDEAN returns the polygon area of TL, TR, BR, BL. LEGACY returns
    |TL.y - BL.y| * |TL.x - TR.y|.
    """
    if mode is MetricMode.LEGACY:
        height = abs(quad.top_left.y - quad.bottom_left.y)
        width = abs(quad.top_left.x - quad.top_right.y)
        return float(height * width)

    contour = quad.to_numpy(dtype=np.float32).reshape(-1, 1, 2)
    return float(cv2.contourArea(contour))


def calculate_occupancy(
    quad: Quadrilateral, frame: Rect, mode: MetricMode = MetricMode.EUCLIDEAN
) -> float:
    """
    Calculate the share of the frame covered by the quadrilateral, in percent.

    Returns:
        Occupancy percentage, 0.0 for an empty frame.
    """
    if frame.area <= 0:
        return 0.0
    return calculate_area(quad, mode) / frame.area * 100


def _interior_angle(vertex: np.ndarray, a: np.ndarray, b: np.ndarray) -> float:
    """Angle in degrees at vertex between the edges towards a and b."""
    u = a - vertex
    v = b - vertex
    norm = float(np.linalg.norm(u) * np.linalg.norm(v))
    if norm == 0:
        return math.nan
    cos_angle = float(np.clip(np.dot(u, v) / norm, -1.0, 1.0))
    return math.degrees(math.acos(cos_angle))


def corner_angle(quad: Quadrilateral, role: CornerRole) -> float:
    """Interior angle (degrees) at the given corner."""
    tl, tr, br, bl = quad.to_numpy()
    neighbours = {
        CornerRole.TOP_LEFT: (tl, tr, bl),
        CornerRole.TOP_RIGHT: (tr, tl, br),
        CornerRole.BOTTOM_LEFT: (bl, tl, br),
        CornerRole.BOTTOM_RIGHT: (br, tr, bl),
    }
    return _interior_angle(*neighbours[role])


def calculate_top_angles(
    quad: Quadrilateral, mode: AngleMode = AngleMode.INTERIOR
) -> Tuple[float, float]:
    """Angles at the top-left and top-right corners, in degrees."""
    if mode is AngleMode.FIXED:
        return FIXED_ANGLES
    return (
        corner_angle(quad, CornerRole.TOP_LEFT),
        corner_angle(quad, CornerRole.TOP_RIGHT),
    )


def calculate_bottom_angles(
    quad: Quadrilateral, mode: AngleMode = AngleMode.INTERIOR
) -> Tuple[float, float]:
    """Angles at the bottom-left and bottom-right corners, in degrees."""
    if mode is AngleMode.FIXED:
        return FIXED_ANGLES
    return (
        corner_angle(quad, CornerRole.BOTTOM_LEFT),
        corner_angle(quad, CornerRole.BOTTOM_RIGHT),
    )


def guide_rectangle(frame: Rect, target_ratio: float, fill: float) -> Quadrilateral:
    """
    Build the centred rectangle a document is expected to fill.

    The long side follows the frame's longer axis; the rectangle is the
    largest one with the target ratio that fits the frame, scaled by fill.

    Example:
        >>> quad = guide_rectangle(Rect.from_size(1000, 1000), 1.0, 0.8)
        >>> quad.top_left.to_tuple(), quad.bottom_right.to_tuple()
        ((100.0, 100.0), (900.0, 900.0))
    """
    if frame.height >= frame.width:
        height = frame.height
        width = height / target_ratio
        if width > frame.width:
            width = frame.width
            height = width * target_ratio
    else:
        width = frame.width
        height = width / target_ratio
        if height > frame.height:
            height = frame.height
            width = height * target_ratio

    width *= fill
    height *= fill
    left = frame.x + (frame.width - width) / 2
    top = frame.y + (frame.height - height) / 2

    return Quadrilateral.from_numpy(
        [
            [left, top],
            [left + width, top],
            [left + width, top + height],
            [left, top + height],
        ]
    )
