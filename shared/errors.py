"""Exceptions raised by the UI assertion toolkit."""

from __future__ import annotations


class TimeoutExceeded(TimeoutError):
    """
    A wait did not reach its condition within the allotted budget.

    Raised by :func:`shared.waits.poll_until` and
    :func:`shared.waits.wait_for_stable`.  Callers can tell this apart
    from assertion failures and inspect how long the wait actually ran.

    Attributes:
        elapsed_ms: Milliseconds spent waiting before giving up.
        timeout_ms: The configured budget in milliseconds.
        description: Optional human-readable name of what was awaited.
    """

    def __init__(self, elapsed_ms: float, timeout_ms: float, description: str | None = None):
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        self.description = description
        subject = description or "Condition"
        super().__init__(
            f"{subject} not met within {timeout_ms}ms (waited {elapsed_ms:.0f}ms)"
        )
