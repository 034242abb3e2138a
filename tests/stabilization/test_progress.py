"""
Unit tests for the capture progress accumulator.
"""

import pytest

from src.stabilization.progress import CaptureProgress
from src.stabilization.types import ProgressConfig


@pytest.fixture
def progress():
    return CaptureProgress(ProgressConfig())


class TestCaptureProgress:
    """Tests for CaptureProgress."""

    def test_starts_at_zero(self, progress):
        assert progress.value == 0.0
        assert progress.fraction == 0.0
        assert progress.is_complete is False

    def test_increment_and_fraction(self, progress):
        """Fraction is value * 4 / 100 with the default scale."""
        for _ in range(5):
            progress.increment()

        assert progress.value == 5.0
        assert progress.fraction == pytest.approx(0.2)

    def test_penalty_floors_at_zero(self, progress):
        progress.increment()
        progress.penalize()

        assert progress.value == 0.0

    def test_penalty_removes_two(self, progress):
        for _ in range(5):
            progress.increment()
        progress.penalize()

        assert progress.value == 3.0

    def test_ceiling_clamps_value(self):
        progress = CaptureProgress(ProgressConfig(ceiling=3.0))
        for _ in range(10):
            progress.increment()

        assert progress.value == 3.0

    def test_fraction_capped_at_one(self, progress):
        """25 steps complete the capture; further steps keep the fraction at 1."""
        for _ in range(30):
            progress.increment()

        assert progress.value == 30.0
        assert progress.fraction == 1.0
        assert progress.is_complete is True

    def test_reset(self, progress):
        progress.increment()
        progress.reset()

        assert progress.value == 0.0

    def test_observers_notified_on_every_mutation(self, progress):
        received = []
        progress.add_observer(received.append)

        progress.increment()
        progress.increment()
        progress.penalize()
        progress.reset()

        assert received == pytest.approx([0.04, 0.08, 0.0, 0.0])

    def test_removed_observer_not_notified(self, progress):
        received = []
        progress.add_observer(received.append)
        progress.remove_observer(received.append)

        progress.increment()

        assert received == []
