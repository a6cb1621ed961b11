"""
Polling-based waits for UI state.

Both waits are driver-agnostic: they take plain callables for the
condition or geometry sample, plus an injectable clock and sleep so
page objects can route sleeps through Playwright and unit tests can run
against a fake clock.

Key Concepts Demonstrated:
- Generic "wait until predicate or timeout" primitive
- Debouncing reads until an element's geometry has settled
- Field-by-field geometry comparison with an epsilon
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from shared.errors import TimeoutExceeded

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 100
DEFAULT_STABLE_SAMPLES = 3
DEFAULT_STABILITY_TIMEOUT_MS = 5000

# Layout coordinates are sub-pixel floats; differences below this are noise.
GEOMETRY_EPSILON = 0.01

Clock = Callable[[], float]
Sleep = Callable[[float], Any]


@dataclass(frozen=True)
class BoundingBox:
    """Geometry snapshot of a UI element at one instant."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_mapping(cls, box: Mapping[str, float] | None) -> "BoundingBox | None":
        """
        Build a box from the dict Playwright's ``bounding_box()`` returns.

        Args:
            box: Mapping with ``x``, ``y``, ``width`` and ``height`` keys,
                or ``None`` when the element is not rendered.

        Returns:
            A BoundingBox, or ``None`` if ``box`` is ``None``.
        """
        if box is None:
            return None
        return cls(
            x=float(box["x"]),
            y=float(box["y"]),
            width=float(box["width"]),
            height=float(box["height"]),
        )

    def is_close(self, other: "BoundingBox", epsilon: float = GEOMETRY_EPSILON) -> bool:
        """Return True if every field differs from ``other`` by at most ``epsilon``."""
        return all(
            math.isclose(mine, theirs, rel_tol=0.0, abs_tol=epsilon)
            for mine, theirs in (
                (self.x, other.x),
                (self.y, other.y),
                (self.width, other.width),
                (self.height, other.height),
            )
        )


def _elapsed_ms(clock: Clock, start: float) -> float:
    return (clock() - start) * 1000


def poll_until(
    predicate: Callable[[], Any],
    timeout_ms: float,
    interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
    *,
    description: str | None = None,
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> None:
    """
    Block until ``predicate`` returns a truthy value.

    The predicate is evaluated strictly sequentially, with ``interval_ms``
    of sleep between attempts.  The final sleep is clipped to whatever
    budget remains, so the wait never overshoots by a full interval.

    Args:
        predicate: Zero-argument callable; exceptions it raises propagate.
        timeout_ms: Budget in milliseconds, measured from the call.
        interval_ms: Pause between attempts in milliseconds.
        description: Name of the condition, used in the timeout message.
        clock: Monotonic clock returning seconds.
        sleep: Sleep function taking seconds.

    Raises:
        TimeoutExceeded: If the budget runs out first.  Its
            ``elapsed_ms`` is always ``>= timeout_ms``.
        ValueError: If ``timeout_ms`` or ``interval_ms`` is negative.
    """
    if timeout_ms < 0:
        raise ValueError("timeout_ms must be non-negative")
    if interval_ms < 0:
        raise ValueError("interval_ms must be non-negative")

    start = clock()
    deadline = start + timeout_ms / 1000
    attempts = 0
    while True:
        attempts += 1
        if predicate():
            logger.debug(
                "%s met after %d attempt(s) in %.0fms",
                description or "Condition",
                attempts,
                _elapsed_ms(clock, start),
            )
            return

        now = clock()
        if now >= deadline:
            elapsed = max(_elapsed_ms(clock, start), timeout_ms)
            raise TimeoutExceeded(elapsed, timeout_ms, description)

        sleep(min(interval_ms / 1000, deadline - now))


def wait_for_stable(
    sampler: Callable[[], BoundingBox | None],
    required_stable_samples: int = DEFAULT_STABLE_SAMPLES,
    sample_interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
    timeout_ms: float = DEFAULT_STABILITY_TIMEOUT_MS,
    *,
    ready: Callable[[], Any] | None = None,
    epsilon: float = GEOMETRY_EPSILON,
    description: str | None = None,
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> None:
    """
    Block until an element's geometry stops changing.

    Elements mid-animation or mid-layout give misleading reads.  This
    samples the bounding box every ``sample_interval_ms`` and counts
    consecutive samples matching the previous one; any movement resets
    the count and the reference sample.  A ``None`` sample (element not
    rendered) never counts as stable.

    Args:
        sampler: Returns the element's current BoundingBox or ``None``.
        required_stable_samples: Consecutive unchanged samples needed.
        sample_interval_ms: Pause between samples in milliseconds.
        timeout_ms: Overall budget in milliseconds, including ``ready``.
        ready: Optional predicate (e.g. visibility) polled before sampling.
        epsilon: Per-field tolerance in pixels.
        description: Name of the element, used in the timeout message.
        clock: Monotonic clock returning seconds.
        sleep: Sleep function taking seconds.

    Raises:
        TimeoutExceeded: If stability is not reached within ``timeout_ms``.
        ValueError: If ``required_stable_samples`` or ``timeout_ms`` is negative.
    """
    if required_stable_samples < 0:
        raise ValueError("required_stable_samples must be non-negative")
    if timeout_ms < 0:
        raise ValueError("timeout_ms must be non-negative")

    label = description or "Element stability"
    start = clock()
    deadline = start + timeout_ms / 1000

    if ready is not None:
        poll_until(
            ready,
            timeout_ms,
            sample_interval_ms,
            description=f"{label} (ready)",
            clock=clock,
            sleep=sleep,
        )

    reference = sampler()
    stable_count = 0
    while stable_count < required_stable_samples:
        if clock() >= deadline:
            elapsed = max(_elapsed_ms(clock, start), timeout_ms)
            raise TimeoutExceeded(elapsed, timeout_ms, label)

        sleep(sample_interval_ms / 1000)
        current = sampler()

        if reference is not None and current is not None and reference.is_close(current, epsilon):
            stable_count += 1
        else:
            stable_count = 0
            reference = current

    logger.debug("%s settled after %.0fms", label, _elapsed_ms(clock, start))
