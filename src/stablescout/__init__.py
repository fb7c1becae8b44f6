"""
stablescout - Stable, Observable Browser Interactions

A thin layer over Playwright locators for E2E test suites:
1. Readiness waits before every action (visible, or opt-in position-stable)
2. One log line per action, one error line per failure
3. Original Playwright errors re-raised untouched

Page objects describe where elements are; ElementActions decides how to
touch them, so timeout tuning and flake mitigation live in one place.

Quick Start:
    ```python
    from playwright.sync_api import sync_playwright
    from stablescout import ActionOptions, ElementActions, configure_logging

    configure_logging()

    with sync_playwright() as p:
        browser = p.chromium.launch()
        page = browser.new_page()
        page.goto("https://automationexercise.com/login")

        actions = ElementActions(page)
        actions.fill(page.locator("[data-qa='login-email']"), "user@example.com")
        actions.click(
            page.locator("[data-qa='login-button']"),
            ActionOptions(description="Login button"),
        )

        names = actions.get_all_texts(page.locator(".productinfo p"))

        browser.close()
    ```

Flaky, animating elements:
    ```python
    actions.click(menu_item, ActionOptions(aggressive_stability=True))
    ```

pytest:
    ```python
    # conftest.py
    pytest_plugins = ["stablescout.fixtures"]

    # test_login.py
    def test_login(navigation, element_actions, page):
        navigation.goto("/login")
        element_actions.fill(page.locator("#email"), "user@example.com")
    ```
"""

from .actions import (
    ActionOptions,
    ElementActions,
    Target,
    describe_target,
    resolve_target,
)
from .api import ApiClient, MultipartFile, new_api_context
from .config import (
    ConfigError,
    EnvConfig,
    Timeouts,
    load_env_config,
)
from .logger import configure_logging
from .navigation import NavigationActions
from .observability import with_observability
from .pages import BasePage
from .security import (
    AIOutputInvalid,
    InjectionDetected,
    SecurityViolation,
    UnsafeSelector,
    assert_no_injection,
    assert_safe_selector,
    validate_ai_output,
)
from .schema import SchemaViolation, validate_schema
from .trace import ActionRecord, ActionTrace
from .waits import smart_wait, wait_stable, wait_visible

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    # Main classes
    "ElementActions",
    "ActionOptions",
    "NavigationActions",
    "BasePage",
    "Target",
    "resolve_target",
    "describe_target",
    # Waits
    "smart_wait",
    "wait_visible",
    "wait_stable",
    # API
    "ApiClient",
    "MultipartFile",
    "new_api_context",
    "validate_schema",
    "SchemaViolation",
    # Observability
    "with_observability",
    "configure_logging",
    "ActionTrace",
    "ActionRecord",
    # Config
    "Timeouts",
    "EnvConfig",
    "ConfigError",
    "load_env_config",
    # Security
    "assert_no_injection",
    "assert_safe_selector",
    "validate_ai_output",
    "SecurityViolation",
    "InjectionDetected",
    "UnsafeSelector",
    "AIOutputInvalid",
]
