"""
Readiness waits run before every interaction.

Two tiers, selected per call:
- Default: wait for Playwright's native "visible" state
- Aggressive (opt-in): visible -> enabled -> bounding box unchanged across
  a short probe window, re-waiting once if the element moved

The aggressive tier costs a fixed pause on every call, so it is never the
default.
"""

import time
from typing import Any, Dict, Optional

from .config import Timeouts


def wait_visible(locator, timeout: float) -> None:
    """
    Wait until the locator resolves to a visible element.

    Args:
        locator: Playwright Locator
        timeout: Maximum wait in seconds

    Raises:
        playwright.sync_api.TimeoutError: If the element never becomes visible
    """
    locator.wait_for(state="visible", timeout=timeout * 1000)


def has_moved(before: Optional[Dict[str, Any]], after: Optional[Dict[str, Any]]) -> bool:
    """True if both boxes exist and their position differs."""
    if not before or not after:
        return False
    return before["x"] != after["x"] or before["y"] != after["y"]


def wait_stable(locator, timeouts: Timeouts) -> None:
    """
    Aggressive readiness wait for animating or repositioning elements.

    Performs at most one extra visibility wait: an element that is still
    moving after the second sample is acted on anyway.
    """
    wait_visible(locator, timeouts.wait)

    # Enabled state is only queried here; the primitive's own actionability check enforces it
    locator.is_enabled()
    first = locator.bounding_box()
    time.sleep(timeouts.stability_pause)
    second = locator.bounding_box()

    if has_moved(first, second):
        wait_visible(locator, timeouts.wait)


def smart_wait(locator, aggressive_stability: bool = False, timeouts: Optional[Timeouts] = None) -> None:
    """
    Run the readiness wait selected by the aggressive_stability flag.

    Args:
        locator: Playwright Locator
        aggressive_stability: Use the bounding-box stability tier
        timeouts: Time budgets (default: Timeouts())
    """
    timeouts = timeouts or Timeouts()
    if aggressive_stability:
        wait_stable(locator, timeouts)
    else:
        wait_visible(locator, timeouts.wait)
