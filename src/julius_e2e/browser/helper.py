"""Retry and wait wrappers around Playwright actions.

Every page object drives the browser through an ``ActionHelper`` instead of
calling ``page.click`` / ``page.fill`` directly. The helper absorbs the
usual flakiness of a heavy single-page app: elements that render late,
overlays that swallow the first click, inputs that reject ``fill`` until
focused. Each action is tried a few times with a shrinking per-try
timeout; between tries the helper waits for the page to settle.

Targets are either selector strings (CSS, XPath with ``//``, or Playwright
text selectors) or ready-made ``Locator`` objects.
"""

from __future__ import annotations

import logging
from typing import Callable, ContextManager, Union

from playwright.sync_api import (
    Error as PlaywrightError,
    Locator,
    Page,
    Response,
    TimeoutError as PlaywrightTimeout,
    expect,
)

from julius_e2e.settings.config import HelperSettings

logger = logging.getLogger(__name__)

Target = Union[str, Locator]

# Floor for the networkidle wait; a zero timeout means "wait forever" to Playwright.
_MIN_IDLE_TIMEOUT_MS = 1_000


class ActionHelper:
    """Retrying click/fill/wait operations bound to one page.

    Args:
        page: Playwright ``Page`` to operate on.
        settings: Retry tuning. Defaults to ``HelperSettings()``.
    """

    def __init__(self, page: Page, settings: HelperSettings | None = None) -> None:
        cfg = settings or HelperSettings()
        self.page = page
        self.attempts = max(cfg.attempts, 1)
        self.default_timeout_ms = cfg.default_timeout_ms
        self.attempt_timeout_cap_ms = cfg.attempt_timeout_cap_ms
        self.settle_timeout_ms = cfg.settle_timeout_ms
        self.type_delay_ms = cfg.type_delay_ms

    # ------------------------------------------------------------------
    # Page state
    # ------------------------------------------------------------------

    def is_page_open(self) -> bool:
        """Return False once the page (or its context) has been closed."""
        try:
            return not self.page.is_closed()
        except PlaywrightError as exc:
            logger.error("Error checking page validity: %s", exc)
            return False

    def wait_for_navigation(self, timeout_ms: int | None = None) -> None:
        """Wait for the page to settle after an action.

        Tries ``networkidle`` and falls back to ``domcontentloaded`` when the
        app keeps the network busy. Timeouts are expected and swallowed.
        """
        if not self.is_page_open():
            return
        timeout = self._timeout(timeout_ms)
        idle_timeout = max(timeout - self.settle_timeout_ms, _MIN_IDLE_TIMEOUT_MS)

        try:
            try:
                self.page.wait_for_load_state("domcontentloaded", timeout=self.settle_timeout_ms)
            except PlaywrightTimeout:
                pass

            try:
                self.page.wait_for_load_state("networkidle", timeout=idle_timeout)
            except PlaywrightTimeout:
                try:
                    self.page.wait_for_load_state("domcontentloaded", timeout=self.settle_timeout_ms)
                except PlaywrightTimeout:
                    logger.debug("Page did not reach domcontentloaded within %dms", self.settle_timeout_ms)
        except PlaywrightError as exc:
            logger.error("Error waiting for navigation: %s", exc)

    def wait_for_network_idle(self, timeout_ms: int | None = None) -> None:
        """Same as :meth:`wait_for_navigation`; kept for call-site readability."""
        self.wait_for_navigation(timeout_ms)

    def pause(self, ms: int) -> None:
        """Fixed wait for UI animations that have no observable end state."""
        self.page.wait_for_timeout(ms)

    # ------------------------------------------------------------------
    # Element waits
    # ------------------------------------------------------------------

    def wait_for_visible(self, target: Target, timeout_ms: int | None = None) -> None:
        """Wait until *target* is visible, retrying after a settle between tries.

        Raises:
            playwright.sync_api.Error: When the element never becomes visible.
        """
        if not self.is_page_open():
            return
        total = self._timeout(timeout_ms)
        element = self._locator(target)

        attempts_left = self.attempts
        while attempts_left > 0:
            try:
                element.wait_for(state="visible", timeout=self._attempt_timeout(total, attempts_left))
                return
            except PlaywrightError as exc:
                attempts_left -= 1
                if attempts_left == 0:
                    raise
                logger.warning(
                    "Waiting for %s to be visible (%d attempts left): %s",
                    _describe(target),
                    attempts_left,
                    exc,
                )
                self.wait_for_navigation(self.settle_timeout_ms)

    def wait_for_hidden(self, target: Target, timeout_ms: int | None = None) -> None:
        """Wait until *target* is hidden or detached."""
        try:
            self._locator(target).wait_for(state="hidden", timeout=self._timeout(timeout_ms))
        except PlaywrightError as exc:
            logger.error("Error waiting for %s to be hidden: %s", _describe(target), exc)
            raise

    def wait_for_enabled(self, target: Target, timeout_ms: int | None = None) -> None:
        """Wait until *target* is visible and enabled, with one settle-and-retry."""
        total = self._timeout(timeout_ms)
        element = self._locator(target)
        try:
            element.wait_for(state="visible", timeout=min(total, self.attempt_timeout_cap_ms))
            expect(element).to_be_enabled(timeout=max(total - self.attempt_timeout_cap_ms, self.settle_timeout_ms))
        except (PlaywrightError, AssertionError) as exc:
            logger.warning("%s not enabled yet, retrying once: %s", _describe(target), exc)
            self.wait_for_navigation(self.settle_timeout_ms)
            element.wait_for(state="visible", timeout=self.settle_timeout_ms)
            expect(element).to_be_enabled(timeout=self.settle_timeout_ms)

    def expect_response(
        self,
        url_or_predicate: str | Callable[[Response], bool],
        timeout_ms: int = 30_000,
    ) -> ContextManager:
        """Context manager that captures the next matching network response.

        Usage::

            with helper.expect_response(lambda r: "/lists" in r.url) as info:
                helper.click(save_button)
            response = info.value
        """
        return self.page.expect_response(url_or_predicate, timeout=timeout_ms)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def click(self, target: Target, timeout_ms: int | None = None) -> None:
        """Click *target* with retries; the last try forces the click.

        Raises:
            playwright.sync_api.Error: After every attempt has failed.
        """
        if not self.is_page_open():
            return
        total = self._timeout(timeout_ms)

        attempts_left = self.attempts
        while attempts_left > 0:
            per_try = self._attempt_timeout(total, attempts_left)
            force = attempts_left == 1
            try:
                self.wait_for_visible(target, total // attempts_left)
                try:
                    if isinstance(target, str):
                        self.page.click(target, timeout=per_try, force=force)
                    else:
                        target.click(timeout=per_try, force=force)
                except PlaywrightError:
                    element = self._locator(target)
                    try:
                        element.scroll_into_view_if_needed(timeout=self.settle_timeout_ms)
                    except PlaywrightError:
                        pass  # clicking anyway; Playwright scrolls on click too
                    element.click(timeout=per_try, force=force)
                self.wait_for_navigation(self.settle_timeout_ms)
                return
            except PlaywrightError as exc:
                attempts_left -= 1
                if attempts_left == 0:
                    logger.error("Error clicking %s after all attempts: %s", _describe(target), exc)
                    raise
                logger.warning("Error clicking %s (%d attempts left): %s", _describe(target), attempts_left, exc)
                self.wait_for_navigation(self.settle_timeout_ms)

    def fill(self, target: Target, text: str, timeout_ms: int | None = None) -> None:
        """Replace the value of an input with *text*, with retries.

        Falls back to select-all + Backspace + typing when ``fill`` is
        rejected (inputs that only accept keyboard events).
        """
        if not self.is_page_open():
            return
        total = self._timeout(timeout_ms)

        attempts_left = self.attempts
        while attempts_left > 0:
            per_try = self._attempt_timeout(total, attempts_left)
            try:
                self.wait_for_visible(target, total // attempts_left)
                element = self._locator(target)
                try:
                    element.fill("", timeout=per_try)
                    element.fill(text, timeout=per_try)
                except PlaywrightError:
                    element.click(click_count=3, timeout=self.settle_timeout_ms)
                    self.page.keyboard.press("Backspace")
                    element.press_sequentially(text, timeout=per_try)
                return
            except PlaywrightError as exc:
                attempts_left -= 1
                if attempts_left == 0:
                    logger.error("Error filling %s after all attempts: %s", _describe(target), exc)
                    raise
                logger.warning("Error filling %s (%d attempts left): %s", _describe(target), attempts_left, exc)
                self.wait_for_navigation(self.settle_timeout_ms)

    def type_slowly(self, target: Target, text: str, delay_ms: int | None = None) -> None:
        """Clear *target* and type *text* one key at a time.

        Autocomplete widgets in the app debounce on keystrokes and ignore
        a single ``fill``.
        """
        element = self._locator(target)
        element.fill("")
        element.press_sequentially(text, delay=self.type_delay_ms if delay_ms is None else delay_ms)

    def press(self, key: str) -> None:
        """Press a key on the page keyboard (``"Enter"``, ``"Escape"``...)."""
        self.page.keyboard.press(key)

    # ------------------------------------------------------------------
    # Visibility checks
    # ------------------------------------------------------------------

    def is_visible(self, target: Target, timeout_ms: int = 5_000) -> bool:
        """Return True if *target* becomes visible within *timeout_ms*."""
        if not self.is_page_open():
            return False
        try:
            self.wait_for_visible(target, timeout_ms)
            return True
        except PlaywrightError:
            return False

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _locator(self, target: Target) -> Locator:
        if isinstance(target, str):
            return self.page.locator(target)
        return target

    def _timeout(self, timeout_ms: int | None) -> int:
        return self.default_timeout_ms if timeout_ms is None else timeout_ms

    def _attempt_timeout(self, total_ms: int, attempts_left: int) -> int:
        return int(min(total_ms / attempts_left, self.attempt_timeout_cap_ms))


def _describe(target: Target) -> str:
    return target if isinstance(target, str) else repr(target)
