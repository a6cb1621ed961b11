"""UI assertion and polling-wait toolkit for the interest calculator suite."""

from shared.calculator_validation import (
    CalculationInput,
    Duration,
    FormField,
    ToleranceComparison,
    ValidationResult,
    expected_interest,
    extract_numeric_value,
    verify_calculation_consistency,
    verify_currency_display,
    verify_mathematical_accuracy,
    verify_number_format,
    verify_results_presentation,
)
from shared.errors import TimeoutExceeded
from shared.performance import (
    LoggingPerformanceObserver,
    PerformanceMonitor,
    PerformanceSample,
    RecordingPerformanceObserver,
)
from shared.waits import BoundingBox, poll_until, wait_for_stable

__all__ = [
    "BoundingBox",
    "CalculationInput",
    "Duration",
    "FormField",
    "LoggingPerformanceObserver",
    "PerformanceMonitor",
    "PerformanceSample",
    "RecordingPerformanceObserver",
    "TimeoutExceeded",
    "ToleranceComparison",
    "ValidationResult",
    "expected_interest",
    "extract_numeric_value",
    "poll_until",
    "verify_calculation_consistency",
    "verify_currency_display",
    "verify_mathematical_accuracy",
    "verify_number_format",
    "verify_results_presentation",
    "wait_for_stable",
]
