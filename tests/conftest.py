"""
Pytest configuration and shared fixtures for stablescout tests.

Unit tests run against FakeLocator; browser tests use a real Chromium page
loaded with inline HTML and are skipped when no browser is installed.
"""

from typing import Generator

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from stablescout.fixtures import (  # noqa: F401
    action_trace,
    api_client,
    api_context,
    element_actions,
    env_config,
    navigation,
    timeouts,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "browser: marks tests that drive a real Chromium page")


@pytest.fixture(scope="session")
def playwright():
    """Session-scoped Playwright driver."""
    with sync_playwright() as p:
        yield p


@pytest.fixture(scope="session")
def playwright_browser(playwright):
    """Session-scoped browser for faster tests."""
    try:
        browser = playwright.chromium.launch(headless=True)
    except PlaywrightError as e:
        pytest.skip(f"Chromium not available: {e.message.splitlines()[0]}")
    yield browser
    browser.close()


@pytest.fixture
def page(playwright_browser) -> Generator[Page, None, None]:
    """Fresh page for each test."""
    page = playwright_browser.new_page()
    yield page
    page.close()


class FakeLocator:
    """
    Stand-in for a Playwright Locator that records every call.

    Args:
        name: Selector shown by str()
        text: Value returned by inner_text()
        texts: Values returned by all_inner_texts()
        attributes: Attribute map for get_attribute()
        visible: Whether wait_for(state="visible") succeeds
        boxes: Bounding boxes returned by successive bounding_box() calls
        fail_on: Method names that raise `error`
        error: Exception raised for fail_on methods
    """

    def __init__(
        self,
        name="#target",
        text="",
        texts=None,
        attributes=None,
        visible=True,
        boxes=None,
        fail_on=(),
        error=None,
    ):
        self.name = name
        self.text = text
        self.texts = texts or []
        self.attributes = attributes or {}
        self.visible = visible
        self.boxes = list(boxes) if boxes else []
        self.fail_on = set(fail_on)
        self.error = error or PlaywrightError("boom")
        self.value = ""
        self.calls = []

    def __str__(self):
        return f"<Locator selector='{self.name}'>"

    @property
    def names(self):
        return [call[0] for call in self.calls]

    @property
    def first(self):
        return self

    def _record(self, method, *args, **kwargs):
        self.calls.append((method, args, kwargs))
        if method in self.fail_on:
            raise self.error

    def wait_for(self, state="visible", timeout=None):
        self._record("wait_for", state=state, timeout=timeout)
        if state == "visible" and not self.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        if state == "hidden" and self.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")

    def is_enabled(self, timeout=None):
        self._record("is_enabled")
        return True

    def bounding_box(self, timeout=None):
        self._record("bounding_box")
        if self.boxes:
            return self.boxes.pop(0)
        return {"x": 0, "y": 0, "width": 10, "height": 10}

    def is_visible(self, timeout=None):
        self._record("is_visible")
        return self.visible

    def click(self, **kwargs):
        self._record("click", **kwargs)

    def dblclick(self, **kwargs):
        self._record("dblclick", **kwargs)

    def fill(self, value, **kwargs):
        self._record("fill", value, **kwargs)
        self.value = value

    def clear(self, **kwargs):
        self._record("clear", **kwargs)
        self.value = ""

    def press(self, key, **kwargs):
        self._record("press", key, **kwargs)

    def press_sequentially(self, text, **kwargs):
        self._record("press_sequentially", text, **kwargs)
        self.value += text

    def inner_text(self, **kwargs):
        self._record("inner_text", **kwargs)
        return self.text

    def all_inner_texts(self):
        self._record("all_inner_texts")
        return list(self.texts)

    def get_attribute(self, name, **kwargs):
        self._record("get_attribute", name, **kwargs)
        return self.attributes.get(name)

    def hover(self, **kwargs):
        self._record("hover", **kwargs)

    def check(self, **kwargs):
        self._record("check", **kwargs)

    def uncheck(self, **kwargs):
        self._record("uncheck", **kwargs)

    def select_option(self, value=None, **kwargs):
        self._record("select_option", value, **kwargs)

    def set_input_files(self, files, **kwargs):
        self._record("set_input_files", files, **kwargs)

    def drag_to(self, target, **kwargs):
        self._record("drag_to", target, **kwargs)


@pytest.fixture
def make_locator():
    """Factory for FakeLocator instances."""
    return FakeLocator


@pytest.fixture
def no_sleep(monkeypatch):
    """Replace the stability pause with a recorder."""
    pauses = []
    monkeypatch.setattr("stablescout.waits.time.sleep", pauses.append)
    return pauses
