"""
Common type definitions for the document scanner.

This module provides Pydantic-based value types for the geometry shared by
the stabilization engine and the scanner session: corner-tagged points,
axis-aligned rectangles (reference frames and zones) and quadrilaterals.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Conversion helpers for numpy arrays coming from detectors
"""

import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator


class CornerRole(Enum):
    """Role of a point within a document quadrilateral."""

    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"

    @property
    def is_top(self) -> bool:
        return self in (CornerRole.TOP_LEFT, CornerRole.TOP_RIGHT)


# Order in which tracked corners are refreshed for every candidate.
CORNER_ORDER: Tuple[CornerRole, ...] = (
    CornerRole.TOP_LEFT,
    CornerRole.TOP_RIGHT,
    CornerRole.BOTTOM_LEFT,
    CornerRole.BOTTOM_RIGHT,
)

# Detector ordering convention for (4, 2) arrays: TL, TR, BR, BL.
ARRAY_ORDER: Tuple[CornerRole, ...] = (
    CornerRole.TOP_LEFT,
    CornerRole.TOP_RIGHT,
    CornerRole.BOTTOM_RIGHT,
    CornerRole.BOTTOM_LEFT,
)


class Point(BaseModel):
    """
    Corner-tagged 2D point.

    The role is part of the point's identity: a top-left point always
    describes the tracked top-left corner, whatever its coordinates.

    Attributes:
        x: X-coordinate (horizontal).
        y: Y-coordinate (vertical).
        role: Corner this point describes.

    Example:
        >>> point = Point(x=120.5, y=80, role=CornerRole.TOP_LEFT)
        >>> point.to_tuple()
        (120.5, 80.0)
    """

    model_config = {"frozen": True}

    x: float = Field(..., description="X-coordinate (horizontal)")
    y: float = Field(..., description="Y-coordinate (vertical)")
    role: CornerRole = Field(..., description="Corner role of the point")

    @field_validator("x", "y")
    @classmethod
    def _require_finite(cls, v: float) -> float:
        """Reject NaN and infinite coordinates."""
        if not math.isfinite(v):
            raise ValueError(f"Coordinate must be finite, got {v}")
        return v

    @classmethod
    def from_sequence(cls, coords: Any, role: CornerRole) -> "Point":
        """
        Create Point from an [x, y] list, tuple or numpy array.

        Raises:
            ValueError: If coords does not hold exactly 2 values or a value
                does not fit in a float.
        """
        try:
            arr = np.asarray(coords, dtype=np.float64)
        except OverflowError as e:
            raise ValueError(f"Coordinate out of float range: {e}") from e
        if arr.shape != (2,):
            raise ValueError(f"Expected 2 coordinates, got shape {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]), role=role)

    def moved_to(self, x: float, y: float) -> "Point":
        """Return a point with the same role at new coordinates."""
        return Point(x=x, y=y, role=self.role)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_numpy(self, dtype: type = np.float64) -> np.ndarray:
        return np.array([self.x, self.y], dtype=dtype)


class Rect(BaseModel):
    """
    Axis-aligned rectangle: the reference frame or one of its zones.

    Containment is half-open: a point on the right or bottom edge
    belongs to the neighbouring rectangle.

    Example:
        >>> frame = Rect(x=0, y=0, width=1000, height=1400)
        >>> frame.area
        1400000.0
        >>> frame.contains(999, 0)
        True
    """

    model_config = {"frozen": True}

    x: float = 0.0
    y: float = 0.0
    width: float
    height: float

    @model_validator(mode="after")
    def _validate_size(self) -> "Rect":
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f"Rect values must be finite, got {values}")
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rect size must be non-negative, got {self.width}x{self.height}"
            )
        return self

    @classmethod
    def from_size(cls, width: float, height: float) -> "Rect":
        """Create a rectangle anchored at the origin."""
        return cls(x=0.0, y=0.0, width=width, height=height)

    @property
    def area(self) -> float:
        return float(self.width * self.height)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, x: float, y: float) -> bool:
        """Check whether (x, y) lies inside [x, x+w) × [y, y+h)."""
        if self.is_empty:
            return False
        return (
            self.x <= x < self.x + self.width and self.y <= y < self.y + self.height
        )


QuadrilateralLike = Union["Quadrilateral", Mapping[str, Any], np.ndarray, List, Tuple]


class Quadrilateral(BaseModel):
    """
    Four corner-tagged points describing a document boundary.

    The figure is not assumed to be convex or axis-aligned; the only
    structural guarantee is one point per corner role.

    Example:
        >>> quad = Quadrilateral.from_numpy(
        ...     np.array([[100, 100], [900, 100], [900, 1230], [100, 1230]])
        ... )
        >>> quad.top_right.to_tuple()
        (900.0, 100.0)
    """

    model_config = {"frozen": True}

    top_left: Point
    top_right: Point
    bottom_left: Point
    bottom_right: Point

    @model_validator(mode="after")
    def _validate_roles(self) -> "Quadrilateral":
        for role in CORNER_ORDER:
            point = getattr(self, role.value)
            if point.role is not role:
                raise ValueError(
                    f"Point in slot '{role.value}' has role '{point.role.value}'"
                )
        return self

    @classmethod
    def from_points(cls, points: Mapping[CornerRole, Point]) -> "Quadrilateral":
        """Build from a role -> Point mapping holding all four roles."""
        missing = [role.value for role in CORNER_ORDER if role not in points]
        if missing:
            raise ValueError(f"Missing corner roles: {missing}")
        return cls(**{role.value: points[role] for role in CORNER_ORDER})

    @classmethod
    def from_numpy(cls, arr: Union[np.ndarray, list, tuple]) -> "Quadrilateral":
        """
        Create Quadrilateral from 4 points ordered TL, TR, BR, BL.

        Args:
            arr: Array-like of shape (4, 2).

        Raises:
            ValueError: If the array shape is not (4, 2).
        """
        try:
            arr = np.asarray(arr, dtype=np.float64)
        except OverflowError as e:
            raise ValueError(f"Coordinate out of float range: {e}") from e
        if arr.shape != (4, 2):
            raise ValueError(f"Expected array of shape (4, 2), got {arr.shape}")
        return cls.from_points(
            {role: Point.from_sequence(arr[i], role) for i, role in enumerate(ARRAY_ORDER)}
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Quadrilateral":
        """
        Create Quadrilateral from {"top_left": [x, y], ...}.

        Raises:
            ValueError: If a role key is missing or a value is not [x, y].
        """
        points: Dict[CornerRole, Point] = {}
        for role in CORNER_ORDER:
            if role.value not in data:
                raise ValueError(f"Missing corner role: {role.value}")
            points[role] = Point.from_sequence(data[role.value], role)
        return cls.from_points(points)

    @classmethod
    def coerce(cls, candidate: QuadrilateralLike) -> "Quadrilateral":
        """Accept a Quadrilateral, a role mapping or a (4, 2) array-like."""
        if isinstance(candidate, Quadrilateral):
            return candidate
        if isinstance(candidate, Mapping):
            return cls.from_mapping(candidate)
        return cls.from_numpy(candidate)

    def point(self, role: CornerRole) -> Point:
        return getattr(self, role.value)

    def points(self) -> Tuple[Point, Point, Point, Point]:
        """Points in refresh order: TL, TR, BL, BR."""
        return tuple(self.point(role) for role in CORNER_ORDER)

    def with_point(self, point: Point) -> "Quadrilateral":
        """Return a copy where only the corner matching point.role is replaced."""
        points = {role: self.point(role) for role in CORNER_ORDER}
        points[point.role] = point
        return Quadrilateral.from_points(points)

    def to_numpy(self, dtype: type = np.float64) -> np.ndarray:
        """Convert to a (4, 2) array ordered TL, TR, BR, BL."""
        return np.array(
            [self.point(role).to_tuple() for role in ARRAY_ORDER], dtype=dtype
        )

    def to_dict(self) -> Dict[str, List[float]]:
        return {role.value: list(self.point(role).to_tuple()) for role in CORNER_ORDER}
