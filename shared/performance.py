"""
Advisory timing of UI actions.

UI timing varies with the machine, browser and network, so a slow
action is reported rather than failed.  Reporting goes through an
injected observer; the default one writes to the standard logging
module, which pytest captures per test.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_MS = 2000


@dataclass(frozen=True)
class PerformanceSample:
    """One measured action."""

    description: str
    duration_ms: int
    threshold_ms: int

    @property
    def within_threshold(self) -> bool:
        return self.duration_ms <= self.threshold_ms


class PerformanceObserver(Protocol):
    """Receives every sample a :class:`PerformanceMonitor` records."""

    def on_sample(self, sample: PerformanceSample) -> None:
        ...


class LoggingPerformanceObserver:
    """Log samples at INFO, and at WARNING when over threshold."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def on_sample(self, sample: PerformanceSample) -> None:
        if sample.within_threshold:
            self.log.info("%s took %dms", sample.description, sample.duration_ms)
        else:
            self.log.warning(
                "Performance warning: %s took %dms (expected < %dms)",
                sample.description,
                sample.duration_ms,
                sample.threshold_ms,
            )


class RecordingPerformanceObserver:
    """Keep samples in memory, e.g. for assertions or an end-of-run summary."""

    def __init__(self) -> None:
        self.samples: list[PerformanceSample] = []

    def on_sample(self, sample: PerformanceSample) -> None:
        self.samples.append(sample)

    @property
    def breaches(self) -> list[PerformanceSample]:
        return [sample for sample in self.samples if not sample.within_threshold]


class PerformanceMonitor:
    """
    Time actions against a threshold without ever failing the caller.

    Attributes:
        threshold_ms: Duration above which a sample is flagged.
        observer: Receives each sample; defaults to logging.
    """

    def __init__(
        self,
        threshold_ms: int = DEFAULT_THRESHOLD_MS,
        observer: PerformanceObserver | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if threshold_ms < 0:
            raise ValueError("threshold_ms must be non-negative")
        self.threshold_ms = threshold_ms
        self.observer = observer or LoggingPerformanceObserver()
        self._clock = clock

    def measure(self, action: Callable[[], Any], description: str = "Action") -> PerformanceSample:
        """
        Run ``action`` and record how long it took.

        Exceptions raised by ``action`` propagate and nothing is recorded.

        Args:
            action: Zero-argument callable to time.
            description: Label used when reporting the sample.

        Returns:
            The recorded PerformanceSample.
        """
        start = self._clock()
        action()
        duration_ms = round((self._clock() - start) * 1000)

        sample = PerformanceSample(
            description=description,
            duration_ms=duration_ms,
            threshold_ms=self.threshold_ms,
        )
        self._notify(sample)
        return sample

    def _notify(self, sample: PerformanceSample) -> None:
        try:
            self.observer.on_sample(sample)
        except Exception:
            # Observers are advisory.
            logger.warning("Performance observer failed for %s", sample.description, exc_info=True)
