"""
Shared Utilities

Common functions used across all modules.
"""

from src.utils.logging_config import setup_logging

__all__ = ["setup_logging"]
