"""
Document scanner session.

Connects the stabilization engine to its collaborators: the detector that
finds candidates in each camera frame, the renderer that draws the
tracked rectangle and the cropper that produces the final image.

Example:
    >>> engine = StabilizationEngine(load_config(), Rect.from_size(1080, 1920))
    >>> scanner = DocumentScanner(engine, detector, cropper=crop_document)
    >>> for frame in camera:
    ...     scanner.process_frame(frame)
    ...     if scanner.is_ready:
    ...         image = scanner.capture(frame, ImageFilter.CONTRAST)
"""

import logging
from typing import Any, Optional

from src.common.types import Quadrilateral
from src.scanner.types import (
    CaptureObserver,
    Cropper,
    ImageFilter,
    ImageOrientation,
    RectangleDetector,
)
from src.stabilization.engine import StabilizationEngine
from src.stabilization.progress import ProgressObserver
from src.stabilization.types import FrameResult

logger = logging.getLogger(__name__)


class DocumentScanner:
    """
    Per-session glue between detector, stabilization engine and capture.

    Args:
        engine: Stabilization engine owning the tracked rectangle.
        detector: Source of candidate quadrilaterals.
        cropper: Produces the captured image from the tracked rectangle.
        on_progress: Called with the progress fraction on every change.
        on_capture: Called with the result of every capture.
    """

    def __init__(
        self,
        engine: StabilizationEngine,
        detector: RectangleDetector,
        cropper: Optional[Cropper] = None,
        on_progress: Optional[ProgressObserver] = None,
        on_capture: Optional[CaptureObserver] = None,
    ):
        self.engine = engine
        self.detector = detector
        self.cropper = cropper
        self.on_capture = on_capture
        self._contrast_filter_enabled = False

        if on_progress is not None:
            self.engine.progress.add_observer(on_progress)

    @property
    def contrast_filter_enabled(self) -> bool:
        return self._contrast_filter_enabled

    @contrast_filter_enabled.setter
    def contrast_filter_enabled(self, enabled: bool) -> None:
        """Switching the preview filter restarts the stability count."""
        self._contrast_filter_enabled = enabled
        self.engine.reset_progress()

    @property
    def progress(self) -> float:
        return self.engine.progress.fraction

    @property
    def is_ready(self) -> bool:
        return self.engine.progress.is_complete

    def process_frame(self, frame: Any) -> Optional[FrameResult]:
        """
        Detect candidates in a frame and feed the last one to the engine.

        Returns:
            FrameResult, or None if nothing was detected or detection failed.
        """
        try:
            candidates = self.detector.detect(frame)
        except Exception as e:
            logger.error(f"Detection failed, frame dropped: {e}")
            return None

        candidates = list(candidates) if candidates is not None else []
        if not candidates:
            return None

        if len(candidates) > 1:
            logger.debug(f"{len(candidates)} candidates detected, using the last one")
        return self.engine.refresh(candidates[-1])

    def overlay_rectangle(self) -> Quadrilateral:
        """Tracked rectangle to highlight on the preview."""
        return self.engine.current_rectangle()

    def capture(
        self,
        image: Any,
        image_filter: ImageFilter = ImageFilter.NONE,
        orientation: ImageOrientation = ImageOrientation.VERTICAL,
    ) -> Any:
        """
        Produce the final image from the tracked rectangle and reset progress.

        Without a cropper the tracked rectangle itself is returned.
        """
        rectangle = self.engine.current_rectangle()
        logger.info(
            f"Capturing document (filter={image_filter.value}, "
            f"orientation={orientation.value})"
        )

        if self.cropper is not None:
            result = self.cropper(image, rectangle, image_filter, orientation)
        else:
            result = rectangle

        self.engine.reset_progress()
        if self.on_capture is not None:
            self.on_capture(result)
        return result
