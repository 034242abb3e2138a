"""
Logging configuration shared by scripts.

Library modules only create ``logging.getLogger(__name__)`` loggers;
entry points call setup_logging() once.
"""

import logging
from typing import Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO, fmt: str = DEFAULT_FORMAT
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name ("DEBUG", "INFO", ...) or numeric level.
        fmt: Log record format.

    Raises:
        ValueError: If level is an unknown level name.
    """
    if isinstance(level, str):
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric_level

    logging.basicConfig(level=level, format=fmt, force=True)
