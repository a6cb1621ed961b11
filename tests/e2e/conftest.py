"""Playwright fixtures for interest calculator E2E tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest
import requests
from playwright.sync_api import Browser, BrowserContext, Page

from config import Config, get_config, load_thresholds
from shared.errors import TimeoutExceeded
from shared.performance import PerformanceMonitor
from shared.waits import poll_until
from tests.e2e.pages.base_page import BasePage
from tests.e2e.pages.interest_calculator_page import InterestCalculatorPage
from tests.e2e.pages.login_page import LoginPage


def _is_reachable(url: str) -> bool:
    """Return True once the calculator answers without a server error."""
    try:
        response = requests.get(url, timeout=2)
    except requests.RequestException:
        return False
    return response.status_code < 500


@pytest.fixture(scope="session")
def suite_config() -> type[Config]:
    """Configuration class for the current TEST_ENV."""
    return get_config()


@pytest.fixture(scope="session")
def thresholds(suite_config: type[Config]) -> dict[str, int]:
    """Advisory performance thresholds in milliseconds."""
    return load_thresholds(suite_config.THRESHOLDS_FILE)


@pytest.fixture(scope="session")
def calculator_url(suite_config: type[Config]) -> str:
    """
    Return the base URL of the calculator under test.

    Skips E2E tests when CALCULATOR_BASE_URL is not set; otherwise waits
    until the site is reachable.
    """
    base_url = suite_config.BASE_URL
    if not base_url:
        pytest.skip("CALCULATOR_BASE_URL is not set; E2E tests need a running calculator")

    base_url = base_url.rstrip("/")
    try:
        poll_until(
            lambda: _is_reachable(base_url),
            suite_config.REACHABILITY_TIMEOUT_MS,
            interval_ms=1000,
            description=f"Calculator at {base_url} reachable",
        )
    except TimeoutExceeded as exc:
        raise RuntimeError(f"Calculator at {base_url} not reachable: {exc}") from exc
    return base_url


@pytest.fixture(scope="session")
def credentials(suite_config: type[Config]) -> dict[str, str]:
    """Login credentials, read from the environment only."""
    email = suite_config.TEST_USER_EMAIL
    password = suite_config.TEST_USER_PASSWORD
    if not email or not password:
        pytest.skip("TEST_USER_EMAIL and TEST_USER_PASSWORD must be set for E2E tests")
    return {"email": email, "password": password}


@pytest.fixture(scope="session")
def browser_context_args():
    return {
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="function")
def context(
    request, browser: Browser, browser_context_args: dict, suite_config: type[Config]
) -> Generator[BrowserContext, None, None]:
    """Fresh browser context per test; tests marked `touch` get touch input."""
    options = dict(browser_context_args)
    if request.node.get_closest_marker("touch"):
        options["has_touch"] = True
    context = browser.new_context(**options)
    context.set_default_timeout(suite_config.DEFAULT_TIMEOUT_MS)
    yield context
    context.close()


@pytest.fixture(scope="function")
def page(context: BrowserContext) -> Generator[Page, None, None]:
    page = context.new_page()
    yield page
    page.close()


@pytest.fixture
def login_page(page: Page, calculator_url: str, thresholds: dict[str, int]) -> LoginPage:
    return LoginPage(
        page,
        calculator_url,
        monitor=PerformanceMonitor(threshold_ms=thresholds["login_ms"]),
    )


@pytest.fixture
def authenticated_page(login_page: LoginPage, credentials: dict[str, str]) -> Page:
    """Log the standard test user in within the current browser context."""
    login_page.login(credentials["email"], credentials["password"])
    return login_page.page


@pytest.fixture
def calculator_page(
    authenticated_page: Page,
    calculator_url: str,
    thresholds: dict[str, int],
    suite_config: type[Config],
) -> InterestCalculatorPage:
    return InterestCalculatorPage(
        authenticated_page,
        calculator_url,
        monitor=PerformanceMonitor(threshold_ms=thresholds["calculation_ms"]),
        stability_timeout=suite_config.STABILITY_TIMEOUT_MS,
    )


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture screenshot on UI test failure."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = item.funcargs.get("page")
        if page:
            test_name = item.name.replace("/", "_").replace("::", "_")
            try:
                screenshot_path = BasePage(page, "").take_debug_screenshot(test_name)
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
