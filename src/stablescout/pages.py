"""
Base class for page objects.

Page objects describe *where* things are; ElementActions and
NavigationActions decide *how* to interact. Expose locators as properties
so each access builds a fresh Locator:

    class LoginPage(BasePage):
        path = "/login"

        @property
        def email(self):
            return self.page.locator("[data-qa='login-email']")

        @property
        def password(self):
            return self.page.locator("[data-qa='login-password']")

        @property
        def submit(self):
            return self.page.get_by_role("button", name="Login")

        def login(self, email, password):
            self.action.fill(self.email, email, ActionOptions("Login email"))
            self.action.fill(self.password, password, ActionOptions("Login password"))
            self.action.click(self.submit, ActionOptions("Login button"))
"""

from typing import Optional

from playwright.sync_api import Page

from .actions import ElementActions
from .config import Timeouts
from .navigation import NavigationActions
from .trace import ActionTrace


class BasePage:
    """Gives every page object `action` and `nav` helpers bound to its page."""

    path: str = "/"

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        timeouts: Optional[Timeouts] = None,
        trace: Optional[ActionTrace] = None,
    ):
        self.page = page
        self.action = ElementActions(page, timeouts=timeouts, trace=trace)
        self.nav = NavigationActions(page, base_url=base_url, timeouts=timeouts, trace=trace)

    def open(self) -> "BasePage":
        """Navigate to this page's path."""
        self.nav.goto(self.path)
        return self
