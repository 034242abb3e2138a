"""
Type definitions for the Scanner module.

Capture options and the interfaces of the external collaborators the
scanner session talks to.
"""

from enum import Enum
from typing import Any, Callable, Protocol, Sequence

from src.common.types import Quadrilateral, QuadrilateralLike


class ImageFilter(Enum):
    """Filter requested for the captured document image."""

    CONTRAST = "contrast"
    NONE = "none"


class ImageOrientation(Enum):
    """Preferred orientation of the captured document image."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class RectangleDetector(Protocol):
    """Anything that finds document quadrilateral candidates in a frame."""

    def detect(self, frame: Any) -> Sequence[QuadrilateralLike]:
        ...


# cropper(image, rectangle, image_filter, orientation) -> captured image
Cropper = Callable[[Any, Quadrilateral, ImageFilter, ImageOrientation], Any]

CaptureObserver = Callable[[Any], None]
