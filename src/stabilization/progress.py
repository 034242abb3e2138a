"""
Capture progress accumulator.

Counts how long the document has been plausibly detected. The raw value
grows by one step per plausible candidate, shrinks on large corner jumps
and is reset after a capture. Observers receive the value scaled onto
[0, 1] after every change.
"""

import logging
from typing import Callable, List

from src.stabilization.types import ProgressConfig

logger = logging.getLogger(__name__)

ProgressObserver = Callable[[float], None]


class CaptureProgress:
    """
    Bounded capture-readiness counter.

    Example:
        >>> progress = CaptureProgress(ProgressConfig())
        >>> progress.add_observer(lambda fraction: print(f"{fraction:.2f}"))
        >>> value = progress.increment()
        0.04
        >>> value
        1.0
    """

    def __init__(self, config: ProgressConfig):
        self.config = config
        self._value = 0.0
        self._observers: List[ProgressObserver] = []

    @property
    def value(self) -> float:
        return self._value

    @property
    def fraction(self) -> float:
        """Value scaled for UI consumption, capped at 1.0."""
        return min(1.0, self._value * self.config.scale / 100)

    @property
    def is_complete(self) -> bool:
        return self.fraction >= 1.0

    def add_observer(self, observer: ProgressObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: ProgressObserver) -> None:
        self._observers.remove(observer)

    def increment(self) -> float:
        """Add one step, clamped to the ceiling."""
        return self._set(min(self.config.ceiling, self._value + self.config.step))

    def penalize(self) -> float:
        """Remove the penalty amount, floored at zero."""
        logger.debug(f"Progress penalized by {self.config.penalty} at {self._value}")
        return self._set(max(0.0, self._value - self.config.penalty))

    def reset(self) -> float:
        return self._set(0.0)

    def _set(self, value: float) -> float:
        self._value = value
        fraction = self.fraction
        for observer in list(self._observers):
            observer(fraction)
        return self._value
