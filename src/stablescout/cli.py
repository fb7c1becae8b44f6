"""
Command-line interface for stablescout.

Provides a probe command for checking a selector against a live page
before writing a test around it.
"""

import argparse
import sys

from .actions import ActionOptions, ElementActions
from .config import Timeouts
from .logger import configure_logging


def probe_command(args):
    """Open a URL and report what a selector resolves to."""
    from playwright.sync_api import Error as PlaywrightError
    from playwright.sync_api import sync_playwright

    print("🔍 stablescout probe")
    print(f"URL: {args.url}")
    print(f"Selector: {args.selector}")
    print()

    if args.verbose:
        configure_logging("INFO")

    timeouts = Timeouts.from_env()
    opts = ActionOptions(
        description=args.description or args.selector,
        aggressive_stability=args.aggressive,
    )

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=args.headless)
        page = browser.new_page()
        actions = ElementActions(page, timeouts=timeouts)

        try:
            page.goto(args.url, timeout=timeouts.navigation_ms, wait_until="domcontentloaded")
            target = page.locator(args.selector)

            visible = actions.is_visible(target, opts)
            print(f"{'✅' if visible else '⚠️ '} visible: {visible}")

            if args.all:
                texts = actions.get_all_texts(target, opts)
                print(f"📋 {len(texts)} match(es):")
                for i, text in enumerate(texts, 1):
                    print(f"   {i}. {text}")
            elif args.attr:
                value = actions.get_attribute(target, args.attr, opts)
                print(f"🏷️  {args.attr} = {value!r}")
            else:
                print(f"📝 text: {actions.get_text(target, opts)!r}")
        except PlaywrightError as e:
            print(f"❌ Error: {e.message}")
            sys.exit(1)
        finally:
            browser.close()


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="stablescout - stable, observable browser interactions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Text of the first heading
  stablescout probe https://example.com h1

  # Every product name on a listing page
  stablescout probe https://automationexercise.com/products \\
      ".productinfo p" --all

  # An attribute, waiting for the element to stop moving first
  stablescout probe https://example.com "a" --attr href --aggressive
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    probe_parser = subparsers.add_parser(
        "probe", help="Check visibility and text of a selector on a live page"
    )
    probe_parser.add_argument("url", help="Page URL")
    probe_parser.add_argument("selector", help="Playwright selector (CSS, text=, role=...)")
    probe_parser.add_argument("--attr", help="Read this attribute instead of the text")
    probe_parser.add_argument(
        "--all", action="store_true", help="Read the text of every match, in document order"
    )
    probe_parser.add_argument(
        "--aggressive",
        action="store_true",
        help="Wait for the element's position to settle before reading",
    )
    probe_parser.add_argument("--description", help="Label used in log lines")
    probe_parser.add_argument(
        "--headless",
        action="store_true",
        default=True,
        help="Run browser in headless mode (default: True)",
    )
    probe_parser.add_argument(
        "--headed",
        action="store_false",
        dest="headless",
        help="Run browser in headed mode (show browser window)",
    )
    probe_parser.add_argument(
        "--verbose", action="store_true", help="Print ACTION/FAILED log lines"
    )
    probe_parser.set_defaults(func=probe_command)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
