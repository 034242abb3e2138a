"""
Corner acceptance gates for the Stabilization module.

Decides whether a candidate corner replaces the tracked corner with the
same role. Gates run in a fixed order and stop at the first failure:

1. Zone: the point lies in the frame quadrant assigned to its role
2. Ratio: the tracked rectangle with this corner replaced keeps the
   expected aspect ratio
3. Movement: the corner moved at most a fixed share of the frame size
4. Occupancy: the hypothetical rectangle covers enough of the frame
5. Angle: the two angles on the corner's side stay similar

Gates are side-effect free; a movement rejection only flags that the
caller should apply a progress penalty.
"""

import logging
import math

from src.common.types import Point, Quadrilateral, Rect
from src.stabilization.geometry import (
    calculate_bottom_angles,
    calculate_occupancy,
    calculate_ratio,
    calculate_top_angles,
)
from src.stabilization.types import CornerDecision, CornerRejection, StabilizationConfig
from src.stabilization.zones import is_in_zone

logger = logging.getLogger(__name__)


class CornerGatePipeline:
    """
    Five-stage acceptance test for candidate corners.

    Example:
        >>> pipeline = CornerGatePipeline(config, Rect.from_size(1000, 1400))
        >>> decision = pipeline.evaluate(tracked, candidate.top_left)
        >>> decision.accepted, decision.rejection_reason
        (True, <CornerRejection.NONE: 'None'>)
    """

    def __init__(self, config: StabilizationConfig, frame: Rect):
        self.config = config
        self.frame = frame

    def evaluate(self, tracked: Quadrilateral, candidate: Point) -> CornerDecision:
        """
        Run all gates for one candidate corner.

        Args:
            tracked: Current tracked rectangle.
            candidate: Candidate point; its role selects the tracked corner.

        Returns:
            CornerDecision holding the point to keep for this role.
        """
        previous = tracked.point(candidate.role)
        hypothetical = tracked.with_point(candidate)

        if not self.pass_zone(candidate):
            return self._reject(previous, CornerRejection.ZONE)

        if not self.pass_ratio(hypothetical):
            return self._reject(previous, CornerRejection.RATIO)

        if not self.pass_movement(previous, candidate):
            x_movement = abs(previous.x - candidate.x)
            penalize = x_movement > self.config.gates.movement_penalty_px
            return self._reject(previous, CornerRejection.MOVEMENT, penalize)

        if not self.pass_occupancy(hypothetical):
            return self._reject(previous, CornerRejection.OCCUPANCY)

        if not self.pass_angles(hypothetical, candidate):
            return self._reject(previous, CornerRejection.ANGLE)

        return CornerDecision(
            role=candidate.role,
            accepted=True,
            rejection_reason=CornerRejection.NONE,
            point=candidate,
        )

    def pass_zone(self, candidate: Point) -> bool:
        return is_in_zone(self.frame, candidate)

    def pass_ratio(self, hypothetical: Quadrilateral) -> bool:
        """Ratio must lie strictly inside (min_ratio, max_ratio)."""
        ratio = calculate_ratio(hypothetical, self.config.geometry.metrics)
        return self.config.min_ratio < ratio < self.config.max_ratio

    def pass_movement(self, previous: Point, candidate: Point) -> bool:
        """Movement along each axis must stay within the tolerance percentage."""
        if self.frame.width <= 0 or self.frame.height <= 0:
            return False

        x_movement_pct = abs(previous.x - candidate.x) / self.frame.width * 100
        y_movement_pct = abs(previous.y - candidate.y) / self.frame.height * 100
        tolerance = self.config.gates.movement_tolerance_pct

        return x_movement_pct <= tolerance and y_movement_pct <= tolerance

    def pass_occupancy(self, hypothetical: Quadrilateral) -> bool:
        if self.frame.area <= 0:
            return False
        occupancy = calculate_occupancy(
            hypothetical, self.frame, self.config.geometry.metrics
        )
        return occupancy >= self.config.gates.min_occupancy_pct

    def pass_angles(self, hypothetical: Quadrilateral, candidate: Point) -> bool:
        """The angle pair on the candidate's side must differ by at most the tolerance."""
        mode = self.config.geometry.angles
        if candidate.role.is_top:
            first, second = calculate_top_angles(hypothetical, mode)
        else:
            first, second = calculate_bottom_angles(hypothetical, mode)

        if math.isnan(first) or math.isnan(second):
            return False
        return abs(first - second) <= self.config.gates.angle_tolerance_deg

    def _reject(
        self, previous: Point, reason: CornerRejection, penalize: bool = False
    ) -> CornerDecision:
        logger.debug(f"Corner {previous.role.value} rejected: {reason.value}")
        return CornerDecision(
            role=previous.role,
            accepted=False,
            rejection_reason=reason,
            point=previous,
            penalize=penalize,
        )
