"""
Test suite for the interest calculator UI.

This package contains:
- unit/: Tests for the shared assertion and wait toolkit
- e2e/: Browser-based tests using Playwright
"""
