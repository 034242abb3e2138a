"""
Configuration loader for the Stabilization module.

Loads and validates configuration from config.yaml file.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from src.stabilization.types import (
    AngleMode,
    GateConfig,
    GeometryConfig,
    MetricMode,
    ProgressConfig,
    StabilizationConfig,
)

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> StabilizationConfig:
    """
    Load stabilization configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated StabilizationConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.

    Example:
        >>> config = load_config()
        >>> print(config.target_ratio, config.gates.min_occupancy_pct)
        1.414 60.0
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading stabilization config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded stabilization configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _parse_config(raw: Dict[str, Any]) -> StabilizationConfig:
    """Parse raw dictionary into structured config objects."""
    if not isinstance(raw, dict):
        raise TypeError("Configuration root must be a mapping")

    gates = raw.get("gates") or {}
    progress = raw.get("progress") or {}
    geometry = raw.get("geometry") or {}

    gate_defaults = GateConfig()
    progress_defaults = ProgressConfig()
    geometry_defaults = GeometryConfig()

    return StabilizationConfig(
        target_ratio=float(raw["target_ratio"]),
        gates=GateConfig(
            ratio_tolerance=float(
                gates.get("ratio_tolerance", gate_defaults.ratio_tolerance)
            ),
            movement_tolerance_pct=float(
                gates.get(
                    "movement_tolerance_pct", gate_defaults.movement_tolerance_pct
                )
            ),
            movement_penalty_px=float(
                gates.get("movement_penalty_px", gate_defaults.movement_penalty_px)
            ),
            min_occupancy_pct=float(
                gates.get("min_occupancy_pct", gate_defaults.min_occupancy_pct)
            ),
            angle_tolerance_deg=float(
                gates.get("angle_tolerance_deg", gate_defaults.angle_tolerance_deg)
            ),
        ),
        progress=ProgressConfig(
            step=float(progress.get("step", progress_defaults.step)),
            penalty=float(progress.get("penalty", progress_defaults.penalty)),
            ceiling=float(progress.get("ceiling", progress_defaults.ceiling)),
            scale=float(progress.get("scale", progress_defaults.scale)),
        ),
        geometry=GeometryConfig(
            metrics=MetricMode(
                geometry.get("metrics", geometry_defaults.metrics.value)
            ),
            angles=AngleMode(geometry.get("angles", geometry_defaults.angles.value)),
            initial_fill=float(
                geometry.get("initial_fill", geometry_defaults.initial_fill)
            ),
        ),
    )


def validate_config(config: StabilizationConfig) -> None:
    """Validate a programmatically built configuration."""
    _validate_config(config)


def _validate_config(config: StabilizationConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    if config.target_ratio <= 0:
        raise ValueError(f"target_ratio ({config.target_ratio}) must be positive")

    gates = config.gates
    if gates.ratio_tolerance <= 0:
        raise ValueError("ratio_tolerance must be positive")
    if gates.ratio_tolerance >= config.target_ratio:
        raise ValueError(
            f"ratio_tolerance ({gates.ratio_tolerance}) must be less than "
            f"target_ratio ({config.target_ratio})"
        )
    if not 0 < gates.movement_tolerance_pct <= 100:
        raise ValueError("movement_tolerance_pct must be in (0, 100]")
    if gates.movement_penalty_px < 0:
        raise ValueError("movement_penalty_px cannot be negative")
    if not 0 <= gates.min_occupancy_pct <= 100:
        raise ValueError("min_occupancy_pct must be in [0, 100]")
    if gates.angle_tolerance_deg < 0:
        raise ValueError("angle_tolerance_deg cannot be negative")

    progress = config.progress
    if progress.step <= 0:
        raise ValueError("progress step must be positive")
    if progress.penalty < 0:
        raise ValueError("progress penalty cannot be negative")
    if progress.ceiling <= 0:
        raise ValueError("progress ceiling must be positive")
    if progress.scale <= 0:
        raise ValueError("progress scale must be positive")

    if not 0 < config.geometry.initial_fill <= 1:
        raise ValueError("initial_fill must be in (0, 1]")

    logger.debug("Configuration validation passed")
