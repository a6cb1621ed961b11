"""
Shared pytest fixtures for the interest calculator test suite.

Key Concepts Demonstrated:
- Fake clocks for deterministic timing tests (no real sleeping)
- Test data factories backed by Faker
"""

from __future__ import annotations

import pytest
from faker import Faker

# Initialize Faker for generating test data
fake = Faker()


class FakeClock:
    """
    Manually advanced monotonic clock.

    Time is tracked in whole milliseconds so repeated sleeps add up
    exactly.  ``sleep`` advances the clock instead of blocking.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now_ms / 1000

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now_ms += round(seconds * 1000)

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a fresh fake clock starting at zero."""
    return FakeClock()


@pytest.fixture
def amount_factory():
    """
    Factory fixture for random monetary amounts and their display forms.

    Returns:
        Function returning ``(value, display)`` where ``display`` is the
        value rendered with a currency symbol and grouping commas.
    """

    def _make(symbol: str = "£") -> tuple[float, str]:
        value = float(fake.pydecimal(left_digits=7, right_digits=2, positive=True))
        return value, f"{symbol}{value:,.2f}"

    return _make
