"""
Replay recorded detector candidates through the stabilization engine.

Input YAML format:

    frame: {width: 1000, height: 1400}
    target_ratio: 1.41          # optional, overrides the config
    initial:                    # optional tracked rectangle
      top_left: [100, 100]
      top_right: [900, 100]
      bottom_left: [100, 1230]
      bottom_right: [900, 1230]
    candidates:
      - [[120, 120], [900, 100], [900, 1230], [100, 1230]]   # TL, TR, BR, BL
      - {top_left: [500, 500], ...}

Usage:
    python scripts/replay_candidates.py recording.yaml
    python scripts/replay_candidates.py recording.yaml --config my.yaml --log-level DEBUG
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.types import Quadrilateral, Rect  # noqa: E402
from src.stabilization.config_loader import DEFAULT_CONFIG_PATH, load_config  # noqa: E402
from src.stabilization.engine import StabilizationEngine  # noqa: E402
from src.stabilization.types import FrameResult, StabilizationConfig  # noqa: E402
from src.utils.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


def load_recording(path: Path) -> Dict[str, Any]:
    """
    Load a candidate recording.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the frame or candidates section is missing or malformed.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Recording not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or "frame" not in data:
        raise ValueError(f"Recording must contain a 'frame' section: {path}")
    frame = data["frame"]
    if not isinstance(frame, dict) or not {"width", "height"} <= frame.keys():
        raise ValueError(
            f"Recording 'frame' must be a {{width, height}} mapping: {path}"
        )
    if "candidates" not in data:
        raise ValueError(f"Recording must contain a 'candidates' list: {path}")

    return data


def replay(data: Dict[str, Any], config: StabilizationConfig) -> List[FrameResult]:
    """Run every recorded candidate through a fresh engine."""
    if "target_ratio" in data:
        config = config.with_target_ratio(float(data["target_ratio"]))

    frame = Rect.from_size(
        float(data["frame"]["width"]), float(data["frame"]["height"])
    )
    initial: Optional[Quadrilateral] = None
    if data.get("initial") is not None:
        initial = Quadrilateral.coerce(data["initial"])

    engine = StabilizationEngine(config, frame, initial_rectangle=initial)
    return [engine.refresh(candidate) for candidate in data["candidates"] or []]


def format_result(index: int, result: FrameResult) -> str:
    updated = ",".join(role.value for role in result.updated_roles) or "-"
    return (
        f"frame {index:4d}  accepted={str(result.accepted):5s}  "
        f"ratio={result.ratio:6.3f}  updated={updated}  "
        f"progress={result.progress:.2f}  [{result.rejection_summary()}]"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the replay tool."""
    parser = argparse.ArgumentParser(
        description="Replay detector candidates through the stabilization engine",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("recording", type=Path, help="Candidate recording (YAML)")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Stabilization config file",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        config = load_config(args.config)
        data = load_recording(args.recording)
        results = replay(data, config)
    except (FileNotFoundError, KeyError, TypeError, ValueError) as e:
        logger.error(str(e))
        return 1

    for index, result in enumerate(results):
        print(format_result(index, result))

    if results:
        print("Final rectangle:")
        for role, (x, y) in results[-1].rectangle.to_dict().items():
            print(f"  {role:13s} ({x:.1f}, {y:.1f})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
