#!/usr/bin/env python3
"""
stablescout Example: Login and add a product to the cart

Runs against automationexercise.com (or BASE_URL) using page objects built
on BasePage. Every interaction is logged; the action trace is printed at
the end.

Configure via environment variables (or a .env file):
  BASE_URL - Site under test (default: https://automationexercise.com)
  USER_EMAIL / USER_PASSWORD - An existing account
  STABLESCOUT_ACTION_TIMEOUT / STABLESCOUT_WAIT_TIMEOUT - Seconds
"""

import sys

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from stablescout import (
    ActionOptions,
    ActionTrace,
    BasePage,
    Timeouts,
    configure_logging,
    load_env_config,
)


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
        return self.page.locator("[data-qa='login-button']")

    @property
    def logged_in_as(self):
        return self.page.locator("li:has-text('Logged in as')")

    def login(self, email: str, password: str) -> None:
        self.action.fill(self.email, email, ActionOptions("Login email"))
        self.action.fill(self.password, password, ActionOptions("Login password"))
        self.action.click(self.submit, ActionOptions("Login button"))


class ProductsPage(BasePage):
    path = "/products"

    @property
    def names(self):
        return self.page.locator(".productinfo p")

    def add_first_to_cart(self) -> None:
        card = self.page.locator(".product-image-wrapper").first
        self.action.hover(card, ActionOptions("First product card"))
        self.action.click(
            card.locator(".overlay-content .add-to-cart"),
            ActionOptions("Add to cart overlay", aggressive_stability=True),
        )
        self.action.click(self.page.locator(".close-modal"), ActionOptions("Continue shopping"))


def main():
    configure_logging()
    config = load_env_config()
    timeouts = Timeouts.from_env()
    trace = ActionTrace()

    print("=" * 60)
    print("stablescout: Login and cart")
    print("=" * 60)
    print(f"URL: {config.base_url}")
    print()

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        page = browser.new_page()

        try:
            login = LoginPage(page, config.base_url, timeouts, trace).open()
            login.login(config.user_email, config.user_password)

            if login.action.is_visible(login.logged_in_as):
                print(f"✅ {login.action.get_text(login.logged_in_as)}")
            else:
                print("⚠️  Not logged in, continuing as guest")

            products = ProductsPage(page, config.base_url, timeouts, trace).open()
            names = products.action.get_all_texts(products.names, ActionOptions("Product names"))
            print(f"📋 {len(names)} products, first: {names[0] if names else '-'}")

            products.add_first_to_cart()
        except PlaywrightError as e:
            print(f"❌ {e.message}")
            return 1
        finally:
            browser.close()

    print()
    print(f"Summary: {trace.summary()}")
    return 0 if not trace.failures else 1


if __name__ == "__main__":
    sys.exit(main())
