"""
Verification helpers for the interest calculator's rendered results.

Every check here is driver-independent: it works on the strings a page
object reads out of the DOM and the inputs a scenario typed in.  Checks
that can find several defects return a :class:`ValidationResult` so a
single test run reports all of them instead of stopping at the first.

Key Concepts Demonstrated:
- Total parsing of display strings (NaN instead of exceptions)
- Pattern-based format checks for currency amounts
- Tolerance-bounded comparison of financial values
- Accumulating validation errors rather than failing fast
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.01
DEFAULT_DECIMAL_PLACES = 2

_NON_NUMERIC = re.compile(r"[^\d.-]")
_NON_DIGIT_OR_DOT = re.compile(r"[^\d.]")
_CURRENCY_DECORATION = re.compile(r"[£$€,\s]")
_SIGNED_DECIMAL = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_SEPARATOR_DASH = re.compile(r"(?<!\S)-(?!\S)")

# Slack for binary noise left in sums such as ``principal + interest``.
_FLOAT_NOISE = Decimal("1e-9")


class Duration(str, Enum):
    """Enumeration of the calculator's interest periods."""

    DAILY = "Daily"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"

    @property
    def periods_per_year(self) -> int:
        """Number of times this period fits into a year."""
        return {Duration.DAILY: 365, Duration.MONTHLY: 12, Duration.YEARLY: 1}[self]


class FormField(str, Enum):
    """Enumeration of the calculator's mandatory form fields."""

    PRINCIPAL = "principal"
    RATE = "rate"
    DURATION = "duration"
    CONSENT = "consent"

    @property
    def error_test_id(self) -> str:
        """data-testid of the inline error shown under this field."""
        return f"{self.value}-error"

    @property
    def required_message(self) -> str:
        """Message the calculator shows when this field is left empty."""
        return _REQUIRED_MESSAGES[self]


_REQUIRED_MESSAGES = {
    FormField.PRINCIPAL: "Principal amount is required",
    FormField.RATE: "Interest rate must be selected",
    FormField.DURATION: "Duration must be selected",
    FormField.CONSENT: "Consent is required",
}


def _to_decimal(value: float) -> Decimal:
    """Decimal of the float's shortest representation (``0.58`` not ``0.5799...``)."""
    return Decimal(repr(value))


def parse_rate_label(label: str) -> float:
    """
    Convert a rate label such as ``"7.5%"`` into a fraction (``0.075``).

    Raises:
        ValueError: If the label is not a percentage.
    """
    match = re.fullmatch(r"\s*(\d+(?:\.\d+)?)\s*%\s*", label)
    if not match:
        raise ValueError(f"Not a percentage rate label: {label!r}")
    return float(Decimal(match.group(1)) / 100)


@dataclass(frozen=True)
class CalculationInput:
    """Parameters of one calculator invocation."""

    principal: float
    rate: float
    duration: Duration

    @classmethod
    def from_labels(cls, principal: str, rate: str, duration: str) -> "CalculationInput":
        """
        Build an input from the values a user types and picks in the UI.

        Args:
            principal: Principal as typed, e.g. ``"750.50"``.
            rate: Rate option label, e.g. ``"7.5%"``.
            duration: Duration option label, e.g. ``"Daily"``.
        """
        return cls(
            principal=float(principal),
            rate=parse_rate_label(rate),
            duration=Duration(duration),
        )


@dataclass(frozen=True)
class ToleranceComparison:
    """Two amounts that are equal if they differ by at most ``tolerance``."""

    actual: float
    expected: float
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        if not self.tolerance >= 0:
            raise ValueError("tolerance must be non-negative")

    @property
    def difference(self) -> float:
        return abs(self.actual - self.expected)

    @property
    def is_equal(self) -> bool:
        # Compared in decimal so a one-cent gap passes in either direction.
        # NaN never counts as equal.
        if not (math.isfinite(self.actual) and math.isfinite(self.expected)):
            return False
        gap = abs(_to_decimal(self.actual) - _to_decimal(self.expected))
        return gap - _to_decimal(self.tolerance) <= _FLOAT_NOISE


@dataclass
class ValidationResult:
    """Outcome of a validation pass with every defect it found."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)


def extract_numeric_value(display: str) -> float:
    """
    Parse a display string such as ``"£1,050.00"`` into a number.

    Currency symbols, grouping separators and any other decoration are
    dropped; only digits, the decimal point and a leading minus survive.
    A hyphen standing alone between spaces, as in ``"Yearly - £50.00"``,
    is a separator rather than a sign.

    Args:
        display: Raw text read from the page.

    Returns:
        The parsed value, or ``math.nan`` if nothing numeric remains or
        the remainder is malformed (e.g. two decimal points).
    """
    cleaned = _NON_NUMERIC.sub("", _SEPARATOR_DASH.sub(" ", display))
    if not _SIGNED_DECIMAL.fullmatch(cleaned):
        return math.nan
    return float(cleaned)


def verify_number_format(display: str, expected_decimal_places: int = DEFAULT_DECIMAL_PLACES) -> bool:
    """
    Check that a value is rendered with exactly ``expected_decimal_places`` decimals.

    Everything except digits and the decimal point is stripped first, so
    ``"£1,234.50"`` is checked as ``"1234.50"``.

    Raises:
        ValueError: If ``expected_decimal_places`` is negative.
    """
    if expected_decimal_places < 0:
        raise ValueError("expected_decimal_places must be non-negative")
    pattern = rf"\d+\.\d{{{expected_decimal_places}}}"
    return re.fullmatch(pattern, _NON_DIGIT_OR_DOT.sub("", display)) is not None


def verify_currency_display(display: str) -> bool:
    """Check a currency amount (``£ $ €``, grouping commas allowed) has 2 decimals."""
    return verify_number_format(_CURRENCY_DECORATION.sub("", display))


def round_half_away_from_zero(value: float, places: int = DEFAULT_DECIMAL_PLACES) -> float:
    """
    Round ``value`` to ``places`` decimals, ties going away from zero.

    The float's shortest decimal representation is rounded, so ``1.005``
    becomes ``1.01`` even though its binary value is slightly below it.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(_to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def expected_interest(principal: float, rate: float, duration: Duration | str) -> float:
    """
    Simple (non-compounding) interest for one period, rounded to 2 decimals.

    Args:
        principal: Amount deposited or borrowed.
        rate: Annual rate as a fraction (``0.05`` for 5%).
        duration: Period the annual interest is apportioned over.
    """
    periods = Duration(duration).periods_per_year
    return round_half_away_from_zero(principal * rate / periods)


def verify_mathematical_accuracy(
    principal: float,
    rate: float,
    duration: Duration | str,
    displayed_interest: str,
) -> bool:
    """
    Check the displayed interest against an independently computed value.

    Args:
        principal: Principal entered in the form.
        rate: Annual rate as a fraction.
        duration: Selected period.
        displayed_interest: Interest text read from the page.

    Returns:
        True if the displayed value is within one cent of the expected one.
    """
    expected = expected_interest(principal, rate, duration)
    actual = extract_numeric_value(displayed_interest)
    comparison = ToleranceComparison(actual=actual, expected=expected)
    if not comparison.is_equal:
        logger.info(
            "Interest mismatch for %s at %s (%s): expected %.2f, displayed %r",
            principal,
            rate,
            Duration(duration).value,
            expected,
            displayed_interest,
        )
    return comparison.is_equal


def verify_results_presentation(
    interest_display: str,
    total_display: str,
    principal_amount: float,
) -> ValidationResult:
    """
    Cross-check the displayed interest and total against each other.

    Every check runs even after an earlier one fails.

    Args:
        interest_display: Interest text read from the page.
        total_display: Total amount text read from the page.
        principal_amount: Principal entered in the form.

    Returns:
        ValidationResult listing every inconsistency found.
    """
    result = ValidationResult()

    if not verify_number_format(interest_display):
        result.add_error("Interest amount is not properly formatted to 2 decimal places")

    if not verify_number_format(total_display):
        result.add_error("Total amount is not properly formatted to 2 decimal places")

    total_value = extract_numeric_value(total_display)
    if not total_value > principal_amount:
        result.add_error("Total amount should be greater than principal amount")

    interest_value = extract_numeric_value(interest_display)
    if not interest_value > 0:
        result.add_error("Interest amount should be positive")

    bookkeeping = ToleranceComparison(actual=total_value, expected=principal_amount + interest_value)
    if not bookkeeping.is_equal:
        result.add_error("Total amount does not equal principal plus interest")

    return result


def verify_calculation_consistency(
    calculate: Callable[[CalculationInput], tuple[str, str]],
    cases: Iterable[CalculationInput],
    repetitions: int = 3,
) -> ValidationResult:
    """
    Run identical inputs repeatedly and check the outputs never change.

    Args:
        calculate: Performs one calculation and returns the displayed
            ``(interest, total)`` pair.
        cases: Inputs to repeat.
        repetitions: How many times each input is calculated.

    Returns:
        ValidationResult with one error per input whose outputs varied.

    Raises:
        ValueError: If ``repetitions`` is less than 1.
    """
    if repetitions < 1:
        raise ValueError("repetitions must be at least 1")

    cases = list(cases)
    observed: dict[int, list[tuple[str, str]]] = {index: [] for index in range(len(cases))}
    for _ in range(repetitions):
        for index, case in enumerate(cases):
            observed[index].append(calculate(case))

    result = ValidationResult()
    for index, case in enumerate(cases):
        distinct = sorted(set(observed[index]))
        if len(distinct) > 1:
            result.add_error(
                f"Inconsistent results for {case.principal} at {case.rate} "
                f"({case.duration.value}): {distinct}"
            )
    return result
