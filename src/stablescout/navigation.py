"""
Page-level navigation with the same logging contract as element actions.
"""

import re
from typing import Optional, Pattern, Union

from playwright.sync_api import Page

from .config import Timeouts
from .observability import with_observability
from .trace import ActionTrace


class NavigationActions:
    """
    Navigation relative to a base URL.

    Usage:
        nav = NavigationActions(page, base_url="https://automationexercise.com")
        nav.goto("/login")
        nav.wait_for_url("**/account")
    """

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        timeouts: Optional[Timeouts] = None,
        trace: Optional[ActionTrace] = None,
    ):
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.timeouts = timeouts or Timeouts()
        self.trace = trace

    def url_for(self, path: str) -> str:
        """Join a path onto the base URL; absolute URLs pass through."""
        if re.match(r"^[a-z][a-z0-9+.-]*://", path, re.IGNORECASE):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def goto(self, path: str) -> None:
        """Navigate to a path relative to the base URL."""
        url = self.url_for(path)
        with_observability(
            "goto",
            url,
            lambda: self.page.goto(
                url, timeout=self.timeouts.navigation_ms, wait_until="domcontentloaded"
            ),
            kind="NAV",
            trace=self.trace,
        )

    def reload(self) -> None:
        with_observability(
            "reload",
            self.page.url,
            lambda: self.page.reload(
                timeout=self.timeouts.navigation_ms, wait_until="domcontentloaded"
            ),
            kind="NAV",
            trace=self.trace,
        )

    def wait_for_url(self, url_pattern: Union[str, Pattern[str]]) -> None:
        """Wait until the page URL matches a glob string or compiled regex."""
        label = url_pattern.pattern if isinstance(url_pattern, re.Pattern) else url_pattern
        with_observability(
            "wait_for_url",
            label,
            lambda: self.page.wait_for_url(url_pattern, timeout=self.timeouts.navigation_ms),
            kind="NAV",
            trace=self.trace,
        )
