"""
Rectangle stabilization engine.

Takes one raw quadrilateral candidate per camera frame and refreshes the
tracked document boundary corner by corner:

1. Frame check: the candidate's own aspect ratio must lie in
   [target - tolerance, target + tolerance]; otherwise the frame is
   discarded and progress is left untouched
2. Progress: a plausible candidate adds one progress step
3. Corner gates: TL, TR, BL, BR are each run through the acceptance
   gates against the tracked rectangle as updated so far
4. Penalties: large horizontal jumps rejected by the movement gate
   remove progress

Bad frames never raise; the worst outcome is that nothing changes.
"""

import logging
import threading
from typing import Dict, Optional

from src.common.types import (
    CORNER_ORDER,
    CornerRole,
    Quadrilateral,
    QuadrilateralLike,
    Rect,
)
from src.stabilization.config_loader import validate_config
from src.stabilization.gates import CornerGatePipeline
from src.stabilization.geometry import calculate_ratio, guide_rectangle
from src.stabilization.progress import CaptureProgress, ProgressObserver
from src.stabilization.store import TrackedRectangleStore
from src.stabilization.types import CornerDecision, FrameResult, StabilizationConfig

logger = logging.getLogger(__name__)


class StabilizationEngine:
    """
    Owner of the tracked rectangle and the capture progress of one session.

    Example:
        >>> config = StabilizationConfig(target_ratio=1.41)
        >>> engine = StabilizationEngine(config, Rect.from_size(1000, 1400))
        >>> result = engine.refresh(detector_corners)
        >>> result.updated_roles
        (<CornerRole.TOP_LEFT: 'top_left'>,)
    """

    def __init__(
        self,
        config: StabilizationConfig,
        frame: Rect,
        initial_rectangle: Optional[Quadrilateral] = None,
        progress_observer: Optional[ProgressObserver] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Stabilization configuration.
            frame: Reference frame in which candidates are detected.
            initial_rectangle: Starting tracked rectangle. Defaults to the
                centred guide rectangle for the target ratio.
            progress_observer: Called with the progress fraction on every change.
        """
        validate_config(config)
        self.config = config
        self.frame = frame
        self.pipeline = CornerGatePipeline(config, frame)
        self.progress = CaptureProgress(config.progress)
        if progress_observer is not None:
            self.progress.add_observer(progress_observer)

        if initial_rectangle is None:
            initial_rectangle = guide_rectangle(
                frame, config.target_ratio, config.geometry.initial_fill
            )
        self._store = TrackedRectangleStore(initial_rectangle)
        self._lock = threading.RLock()

        if frame.is_empty:
            logger.warning(
                f"Reference frame {frame.width}x{frame.height} has no area; "
                "every candidate will be discarded"
            )
        logger.info(
            f"StabilizationEngine initialized (target ratio {config.target_ratio:.3f}, "
            f"band [{config.min_ratio:.3f}, {config.max_ratio:.3f}], "
            f"frame {frame.width:.0f}x{frame.height:.0f})"
        )

    def current_rectangle(self) -> Quadrilateral:
        """Snapshot of the tracked rectangle for renderers and capture."""
        with self._lock:
            return self._store.current_rectangle()

    def reset_progress(self) -> None:
        with self._lock:
            self.progress.reset()

    def refresh(self, candidate: QuadrilateralLike) -> FrameResult:
        """
        Process one candidate quadrilateral.

        Args:
            candidate: Quadrilateral, {"top_left": [x, y], ...} mapping, or
                (4, 2) array ordered TL, TR, BR, BL.

        Returns:
            FrameResult describing the decisions taken for this frame.
        """
        with self._lock:
            previous = self._store.current_rectangle()

            quad = self._coerce(candidate)
            if quad is None or self.frame.is_empty:
                return self._discarded(previous, float("inf"))

            ratio = calculate_ratio(quad, self.config.geometry.metrics)
            if not self.config.min_ratio <= ratio <= self.config.max_ratio:
                logger.debug(f"Candidate discarded: ratio {ratio:.3f} out of band")
                return self._discarded(previous, ratio)

            self.progress.increment()

            decisions: Dict[CornerRole, CornerDecision] = {}
            for role in CORNER_ORDER:
                tracked = self._store.current_rectangle()
                decision = self.pipeline.evaluate(tracked, quad.point(role))
                if decision.penalize:
                    self.progress.penalize()
                if decision.accepted:
                    self._store.update_point(decision.point)
                decisions[role] = decision

            result = FrameResult(
                accepted=True,
                ratio=ratio,
                decisions=decisions,
                rectangle=self._store.current_rectangle(),
                progress=self.progress.fraction,
                previous=previous,
            )
            logger.debug(f"Frame processed: {result.rejection_summary()}")
            return result

    def _coerce(self, candidate: QuadrilateralLike) -> Optional[Quadrilateral]:
        try:
            return Quadrilateral.coerce(candidate)
        except (TypeError, ValueError) as e:
            logger.warning(f"Malformed candidate ignored: {e}")
            return None

    def _discarded(self, previous: Quadrilateral, ratio: float) -> FrameResult:
        return FrameResult(
            accepted=False,
            ratio=ratio,
            decisions={},
            rectangle=previous,
            progress=self.progress.fraction,
            previous=previous,
        )
