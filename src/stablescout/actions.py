"""
Stable element interactions.

ElementActions wraps each Playwright locator primitive with:
1. A readiness wait (visible, or visible + enabled + position-stable)
2. A bounded action timeout
3. Start/result/failure logging
4. Transparent re-raising of the original Playwright error

Targets are resolved immediately before every call. A target may be a
Locator (already lazy) or a zero-argument callable returning one, which
lets page objects hand over resolvers instead of live handles.
"""

import json
import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page

from .config import Timeouts
from .logger import logger, safe_log
from .observability import format_start, with_observability
from .trace import ActionTrace
from .waits import smart_wait

Target = Union[Locator, Callable[[], Locator]]
FilePaths = Union[str, "os.PathLike[str]", Sequence[Union[str, "os.PathLike[str]"]]]


@dataclass(frozen=True)
class ActionOptions:
    """Per-call interaction options."""
    description: Optional[str] = None  # Log label; defaults to the locator's repr
    aggressive_stability: bool = False  # Bounding-box stability check (~100ms)


_DEFAULT_OPTIONS = ActionOptions()


def resolve_target(target: Target) -> Locator:
    """Return a fresh Locator for the target."""
    if callable(target) and not isinstance(target, Locator):
        return target()
    return target


def describe_target(target: Target) -> str:
    """Label for a target without resolving it."""
    if callable(target) and not isinstance(target, Locator):
        return f"{getattr(target, '__qualname__', repr(target))}()"
    return str(target)


class ElementActions:
    """
    Observable, stability-aware element interactions for one page.

    Usage:
        actions = ElementActions(page)

        actions.fill(page.locator("#email"), "test@example.com")
        actions.click(
            page.get_by_role("button", name="Sign in"),
            ActionOptions(description="Sign in button"),
        )
        assert actions.get_text(page.locator("h1")) == "Dashboard"

        # Sliding drawer: confirm it stopped moving before clicking
        actions.click(drawer_link, ActionOptions(aggressive_stability=True))
    """

    def __init__(
        self,
        page: Optional[Page] = None,
        timeouts: Optional[Timeouts] = None,
        trace: Optional[ActionTrace] = None,
    ):
        """
        Args:
            page: Playwright page the locators belong to (kept for page objects)
            timeouts: Time budgets (default: Timeouts())
            trace: Optional ActionTrace recording every call
        """
        self.page = page
        self.timeouts = timeouts or Timeouts()
        self.trace = trace

    # ── internals ────────────────────────────────────────────────────────

    def _label(self, target: Target, opts: ActionOptions) -> str:
        return opts.description if opts.description is not None else describe_target(target)

    def _ready(self, locator: Locator, opts: ActionOptions) -> None:
        smart_wait(locator, opts.aggressive_stability, self.timeouts)

    def _run(
        self,
        operation: str,
        target: Target,
        opts: Optional[ActionOptions],
        act: Callable[[Locator], object],
        detail: str = "",
        show_result: bool = False,
        wait: bool = True,
    ):
        opts = opts or _DEFAULT_OPTIONS

        def call():
            locator = resolve_target(target)
            if wait:
                self._ready(locator, opts)
            return act(locator)

        return with_observability(
            operation,
            self._label(target, opts),
            call,
            detail=detail,
            show_result=show_result,
            trace=self.trace,
        )

    # ── clicks ───────────────────────────────────────────────────────────

    def click(self, target: Target, opts: Optional[ActionOptions] = None) -> None:
        """Click the element after the readiness wait."""
        self._run("click", target, opts,
                  lambda loc: loc.click(timeout=self.timeouts.action_ms))

    def double_click(self, target: Target, opts: Optional[ActionOptions] = None) -> None:
        self._run("double_click", target, opts,
                  lambda loc: loc.dblclick(timeout=self.timeouts.action_ms))

    def right_click(self, target: Target, opts: Optional[ActionOptions] = None) -> None:
        """Right-click the element (opens a context menu)."""
        self._run("right_click", target, opts,
                  lambda loc: loc.click(button="right", timeout=self.timeouts.action_ms))

    # ── text input ───────────────────────────────────────────────────────

    def fill(self, target: Target, value: str, opts: Optional[ActionOptions] = None) -> None:
        """Replace the input's value with `value`."""
        self._run("fill", target, opts,
                  lambda loc: loc.fill(value, timeout=self.timeouts.action_ms),
                  detail=f'value="{value}"')

    def clear(self, target: Target, opts: Optional[ActionOptions] = None) -> None:
        self._run("clear", target, opts,
                  lambda loc: loc.clear(timeout=self.timeouts.action_ms))

    def press(self, target: Target, key: str, opts: Optional[ActionOptions] = None) -> None:
        """Press a key on the element (e.g. "Enter", "Tab", "Escape")."""
        self._run("press", target, opts,
                  lambda loc: loc.press(key, timeout=self.timeouts.action_ms),
                  detail=f'key="{key}"')

    def type_sequentially(self, target: Target, text: str, opts: Optional[ActionOptions] = None) -> None:
        """
        Type text one character at a time.

        For inputs that reject fill(): OTP fields, autocompletes with key
        listeners, masked inputs.
        """
        self._run("type_sequentially", target, opts,
                  lambda loc: loc.press_sequentially(text, timeout=self.timeouts.action_ms),
                  detail=f'text="{text}"')

    # ── reads ────────────────────────────────────────────────────────────

    def get_text(self, target: Target, opts: Optional[ActionOptions] = None) -> str:
        """Return the element's inner text, trimmed."""
        return self._run("get_text", target, opts,
                         lambda loc: loc.inner_text(timeout=self.timeouts.action_ms).strip(),
                         show_result=True)

    def get_all_texts(self, target: Target, opts: Optional[ActionOptions] = None) -> List[str]:
        """
        Return the trimmed inner text of every match, in document order.

        The readiness wait applies to the first match only, so multi-match
        targets (list items, table rows) do not trip strict mode.
        """
        opts = opts or _DEFAULT_OPTIONS

        def call():
            locator = resolve_target(target)
            self._ready(locator.first, opts)
            return [text.strip() for text in locator.all_inner_texts()]

        return with_observability(
            "get_all_texts",
            self._label(target, opts),
            call,
            show_result=True,
            trace=self.trace,
        )

    def get_attribute(
        self,
        target: Target,
        name: str,
        opts: Optional[ActionOptions] = None,
    ) -> Optional[str]:
        """
        Return a DOM attribute value (e.g. "href", "value", "aria-label").

        Returns None when the element has no such attribute.
        """
        return self._run("get_attribute", target, opts,
                         lambda loc: loc.get_attribute(name, timeout=self.timeouts.action_ms),
                         detail=f'attr="{name}"', show_result=True)

    # ── pointer & form controls ──────────────────────────────────────────

    def hover(self, target: Target, opts: Optional[ActionOptions] = None) -> None:
        self._run("hover", target, opts,
                  lambda loc: loc.hover(timeout=self.timeouts.action_ms))

    def check(self, target: Target, opts: Optional[ActionOptions] = None) -> None:
        """Check a checkbox or radio button."""
        self._run("check", target, opts,
                  lambda loc: loc.check(timeout=self.timeouts.action_ms))

    def uncheck(self, target: Target, opts: Optional[ActionOptions] = None) -> None:
        self._run("uncheck", target, opts,
                  lambda loc: loc.uncheck(timeout=self.timeouts.action_ms))

    def select_option(
        self,
        target: Target,
        option: Union[str, Dict[str, str]],
        opts: Optional[ActionOptions] = None,
    ) -> None:
        """
        Select a dropdown option.

        Args:
            target: The <select> element
            option: A string matched against option values and labels, or
                {"value": ...} / {"label": ...} to match one explicitly
            opts: Interaction options
        """
        def act(loc: Locator):
            if isinstance(option, dict):
                return loc.select_option(**option, timeout=self.timeouts.action_ms)
            return loc.select_option(option, timeout=self.timeouts.action_ms)

        self._run("select_option", target, opts, act,
                  detail=f"value={json.dumps(option)}")

    def upload_file(self, target: Target, files: FilePaths, opts: Optional[ActionOptions] = None) -> None:
        """
        Set one or more files on a file input.

        No readiness wait: file inputs are usually hidden behind a styled
        button.
        """
        if isinstance(files, (str, os.PathLike)):
            paths = [files]
        else:
            paths = list(files)
        names = [os.fspath(f) for f in paths]
        self._run("upload_file", target, opts,
                  lambda loc: loc.set_input_files(paths, timeout=self.timeouts.action_ms),
                  detail=f"files={json.dumps(names)}", wait=False)

    def drag_to(self, source: Target, destination: Target, opts: Optional[ActionOptions] = None) -> None:
        """Drag the source element and drop it onto the destination."""
        self._run("drag_to", source, opts,
                  lambda loc: loc.drag_to(resolve_target(destination), timeout=self.timeouts.action_ms))

    # ── state probes ─────────────────────────────────────────────────────

    def is_visible(self, target: Target, opts: Optional[ActionOptions] = None) -> bool:
        """
        Return whether the element is visible. Never raises.

        Missing elements, hidden elements, invalid selectors and multi-match
        strict-mode errors all report False.
        """
        opts = opts or _DEFAULT_OPTIONS
        safe_log(logger.info, format_start("is_visible", self._label(target, opts)))
        try:
            return resolve_target(target).is_visible()
        except PlaywrightError:
            return False

    def wait_for_hidden(self, target: Target, opts: Optional[ActionOptions] = None) -> None:
        """Wait until the element is hidden or detached (loaders, toasts, modals)."""
        self._run("wait_for_hidden", target, opts,
                  lambda loc: loc.wait_for(state="hidden", timeout=self.timeouts.wait_ms),
                  wait=False)
