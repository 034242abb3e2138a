"""
Zone partitioning of the reference frame.

A corner can only be the named corner of the document if it lies in the
matching quadrant of the frame: the top-left corner in the top-left
quadrant, and so on.
"""

from src.common.types import CornerRole, Point, Rect


def zone_of(frame: Rect, role: CornerRole) -> Rect:
    """
    Return the quadrant of frame that a corner with the given role may occupy.

    Example:
        >>> zone_of(Rect.from_size(1000, 1400), CornerRole.BOTTOM_RIGHT)
        Rect(x=500.0, y=700.0, width=500.0, height=700.0)
    """
    half_width = frame.width / 2
    half_height = frame.height / 2

    is_left = role in (CornerRole.TOP_LEFT, CornerRole.BOTTOM_LEFT)
    left = frame.x if is_left else frame.x + half_width
    top = frame.y if role.is_top else frame.y + half_height

    return Rect(x=left, y=top, width=half_width, height=half_height)


def is_in_zone(frame: Rect, point: Point) -> bool:
    """Check whether point lies in the quadrant assigned to its role."""
    return zone_of(frame, point.role).contains(point.x, point.y)
