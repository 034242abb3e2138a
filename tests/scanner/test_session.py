"""
Unit tests for the document scanner session.
"""

import numpy as np
import pytest

from src.scanner.session import DocumentScanner
from src.scanner.types import ImageFilter, ImageOrientation
from src.stabilization.engine import StabilizationEngine


class FakeDetector:
    """Detector returning pre-recorded candidates, one list per frame."""

    def __init__(self, *frames):
        self.frames = list(frames)
        self.calls = 0

    def detect(self, frame):
        self.calls += 1
        return self.frames.pop(0)


class FailingDetector:
    def detect(self, frame):
        raise RuntimeError("camera buffer unavailable")


@pytest.fixture
def engine(a4_config, portrait_frame, tracked_a4):
    return StabilizationEngine(a4_config, portrait_frame, initial_rectangle=tracked_a4)


@pytest.fixture
def image():
    return np.zeros((1400, 1000, 3), dtype=np.uint8)


class TestProcessFrame:
    """Tests for DocumentScanner.process_frame."""

    def test_last_candidate_wins(self, engine, make_candidate, image):
        """Only the last candidate of a frame reaches the engine."""
        detector = FakeDetector(
            [make_candidate(top_left=[130, 130]), make_candidate(top_left=[120, 120])]
        )
        scanner = DocumentScanner(engine, detector)

        result = scanner.process_frame(image)

        assert result is not None
        assert scanner.overlay_rectangle().top_left.to_tuple() == (120.0, 120.0)
        assert engine.progress.value == 1.0

    def test_no_candidates(self, engine, image):
        scanner = DocumentScanner(engine, FakeDetector([], None))

        assert scanner.process_frame(image) is None
        assert scanner.process_frame(image) is None
        assert engine.progress.value == 0.0

    def test_array_of_candidates(self, engine, image):
        """A (N, 4, 2) detector array is treated as N candidates."""
        candidates = np.array(
            [
                [[100, 100], [900, 100], [900, 900], [100, 900]],
                [[120, 120], [900, 100], [900, 1230], [100, 1230]],
            ],
            dtype=np.float32,
        )
        scanner = DocumentScanner(engine, FakeDetector(candidates))

        result = scanner.process_frame(image)

        assert result.accepted is True
        assert scanner.overlay_rectangle().top_left.to_tuple() == (120.0, 120.0)

    def test_detector_failure_drops_frame(self, engine, tracked_a4, image):
        scanner = DocumentScanner(engine, FailingDetector())

        assert scanner.process_frame(image) is None
        assert scanner.overlay_rectangle() == tracked_a4

    def test_progress_reported(self, engine, tracked_a4, image):
        received = []
        detector = FakeDetector([tracked_a4], [tracked_a4])
        scanner = DocumentScanner(engine, detector, on_progress=received.append)

        scanner.process_frame(image)
        scanner.process_frame(image)

        assert received == pytest.approx([0.04, 0.08])
        assert scanner.progress == pytest.approx(0.08)
        assert scanner.is_ready is False

    def test_ready_after_enough_stable_frames(self, engine, tracked_a4, image):
        detector = FakeDetector(*([[tracked_a4]] * 25))
        scanner = DocumentScanner(engine, detector)

        for _ in range(25):
            scanner.process_frame(image)

        assert scanner.is_ready is True


class TestContrastFilter:
    """Tests for the contrast filter toggle."""

    def test_toggle_resets_progress(self, engine, tracked_a4, image):
        scanner = DocumentScanner(engine, FakeDetector([tracked_a4]))
        scanner.process_frame(image)
        assert scanner.progress > 0

        scanner.contrast_filter_enabled = True

        assert scanner.contrast_filter_enabled is True
        assert scanner.progress == 0.0

    def test_disabled_by_default(self, engine):
        assert DocumentScanner(engine, FakeDetector()).contrast_filter_enabled is False


class TestCapture:
    """Tests for DocumentScanner.capture."""

    def test_capture_with_cropper(self, engine, tracked_a4, image):
        calls = []

        def cropper(img, rectangle, image_filter, orientation):
            calls.append((rectangle, image_filter, orientation))
            return "cropped"

        captured = []
        scanner = DocumentScanner(
            engine,
            FakeDetector([tracked_a4]),
            cropper=cropper,
            on_capture=captured.append,
        )
        scanner.process_frame(image)

        result = scanner.capture(
            image, ImageFilter.CONTRAST, ImageOrientation.HORIZONTAL
        )

        assert result == "cropped"
        assert calls == [
            (tracked_a4, ImageFilter.CONTRAST, ImageOrientation.HORIZONTAL)
        ]
        assert captured == ["cropped"]
        assert scanner.progress == 0.0

    def test_capture_without_cropper_returns_rectangle(self, engine, tracked_a4, image):
        scanner = DocumentScanner(engine, FakeDetector())

        assert scanner.capture(image) == tracked_a4
