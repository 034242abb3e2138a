"""
Scanner Session

Drives the stabilization engine from a stream of camera frames:
detection (last candidate wins), overlay snapshot, and capture with
progress reset.
"""

from src.scanner.session import DocumentScanner
from src.scanner.types import ImageFilter, ImageOrientation, RectangleDetector

__all__ = ["DocumentScanner", "ImageFilter", "ImageOrientation", "RectangleDetector"]
