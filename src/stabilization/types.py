"""
Data types and structures for the Stabilization module.

Provides type-safe containers for configuration and per-frame results.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from src.common.types import CornerRole, Point, Quadrilateral


class MetricMode(Enum):
    """How ratio and area are measured on a quadrilateral."""

    EUCLIDEAN = "euclidean"  # Edge lengths and true polygon area
    LEGACY = "legacy"  # Axis-mixed formulas kept for behavioral parity


class AngleMode(Enum):
    """How corner angles are measured on a quadrilateral."""

    INTERIOR = "interior"  # Interior angle between adjacent edges
    FIXED = "fixed"  # Always (90, 90)


class CornerRejection(Enum):
    """Gate that rejected a candidate corner."""

    ZONE = "Outside Zone"
    RATIO = "Ratio Out Of Band"
    MOVEMENT = "Excessive Movement"
    OCCUPANCY = "Low Occupancy"
    ANGLE = "Angle Mismatch"
    NONE = "None"  # Accepted


@dataclass
class GateConfig:
    """Thresholds for the corner acceptance gates."""

    ratio_tolerance: float = 0.2  # Band half-width around target ratio
    movement_tolerance_pct: float = 10.0  # Max movement, % of frame width/height
    movement_penalty_px: float = 17.0  # Raw x-movement that costs progress
    min_occupancy_pct: float = 60.0  # Min document area, % of frame area
    angle_tolerance_deg: float = 10.0  # Max difference within an angle pair


@dataclass
class ProgressConfig:
    """Capture progress accumulator settings."""

    step: float = 1.0  # Added per plausible candidate
    penalty: float = 2.0  # Removed on a penalised movement rejection
    ceiling: float = 100.0  # Upper clamp of the raw value
    scale: float = 4.0  # fraction = value * scale / 100


@dataclass
class GeometryConfig:
    """Geometry measurement options."""

    metrics: MetricMode = MetricMode.EUCLIDEAN
    angles: AngleMode = AngleMode.INTERIOR
    initial_fill: float = 0.9  # Guide rectangle size relative to the frame


@dataclass
class StabilizationConfig:
    """Complete stabilization engine configuration."""

    target_ratio: float
    gates: GateConfig = field(default_factory=GateConfig)
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    geometry: GeometryConfig = field(default_factory=GeometryConfig)

    @property
    def min_ratio(self) -> float:
        return self.target_ratio - self.gates.ratio_tolerance

    @property
    def max_ratio(self) -> float:
        return self.target_ratio + self.gates.ratio_tolerance

    def with_target_ratio(self, target_ratio: float) -> "StabilizationConfig":
        """Return a copy tuned for a different document aspect ratio."""
        return dataclasses.replace(self, target_ratio=target_ratio)


@dataclass
class CornerDecision:
    """
    Outcome of the acceptance gates for one corner of one candidate.

    Attributes:
        role: Corner the decision applies to.
        accepted: True if the candidate point replaces the tracked point.
        rejection_reason: Gate that failed, NONE if accepted.
        point: Tracked point after the decision.
        penalize: True if the rejection should cost capture progress.
    """

    role: CornerRole
    accepted: bool
    rejection_reason: CornerRejection
    point: Point
    penalize: bool = False


@dataclass
class FrameResult:
    """
    Output of the engine for one candidate quadrilateral.

    Attributes:
        accepted: True if the candidate passed the frame-level ratio check.
        ratio: Aspect ratio of the raw candidate (inf when undefined).
        decisions: Per-corner decisions, empty if the candidate was discarded.
        rectangle: Tracked rectangle after processing.
        progress: Capture progress fraction after processing.
        previous: Tracked rectangle before processing, used to report
            which roles actually moved.
    """

    accepted: bool
    ratio: float
    decisions: Dict[CornerRole, CornerDecision]
    rectangle: Quadrilateral
    progress: float
    previous: Optional[Quadrilateral] = None

    @property
    def updated_roles(self) -> Tuple[CornerRole, ...]:
        """Roles whose tracked coordinates changed in this frame."""
        if self.previous is None:
            return tuple(r for r, d in self.decisions.items() if d.accepted)
        return tuple(
            role
            for role, decision in self.decisions.items()
            if decision.accepted
            and self.previous.point(role).to_tuple()
            != self.rectangle.point(role).to_tuple()
        )

    def rejection_summary(self) -> str:
        """Get human-readable summary of rejected corners."""
        if not self.accepted:
            return f"Candidate discarded: ratio {self.ratio:.2f} out of band"
        rejected = [
            f"{role.value}={decision.rejection_reason.value}"
            for role, decision in self.decisions.items()
            if not decision.accepted
        ]
        return ", ".join(rejected) if rejected else "All corners accepted"
