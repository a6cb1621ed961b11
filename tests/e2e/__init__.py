"""
End-to-end browser tests for the interest calculator.

This package contains Playwright-based tests and demonstrates:
- Page Object Model (POM) pattern
- Role-based and data-testid locator strategies
- Verifying rendered results with the shared toolkit
- Responsive layout checks across viewports
"""
