"""
Rectangle Stabilization

Turns noisy per-frame document quadrilaterals into a stable tracked
boundary and a capture-readiness progress signal.

Pipeline stages per candidate:
1. Frame-level aspect ratio check (+1 progress when plausible)
2. Per-corner gates, in TL, TR, BL, BR order:
   zone, ratio, movement, occupancy, angle
3. Progress penalty for large rejected jumps
"""

from src.stabilization.config_loader import load_config
from src.stabilization.engine import StabilizationEngine
from src.stabilization.gates import CornerGatePipeline
from src.stabilization.geometry import (
    calculate_area,
    calculate_bottom_angles,
    calculate_ratio,
    calculate_top_angles,
)
from src.stabilization.progress import CaptureProgress
from src.stabilization.store import TrackedRectangleStore
from src.stabilization.types import (
    AngleMode,
    CornerDecision,
    CornerRejection,
    FrameResult,
    MetricMode,
    StabilizationConfig,
)
from src.stabilization.zones import is_in_zone, zone_of

__all__ = [
    "StabilizationEngine",
    "CornerGatePipeline",
    "CaptureProgress",
    "TrackedRectangleStore",
    "load_config",
    "calculate_area",
    "calculate_ratio",
    "calculate_top_angles",
    "calculate_bottom_angles",
    "zone_of",
    "is_in_zone",
    "AngleMode",
    "MetricMode",
    "CornerDecision",
    "CornerRejection",
    "FrameResult",
    "StabilizationConfig",
]
