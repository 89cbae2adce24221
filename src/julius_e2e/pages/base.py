"""Base class shared by every page object."""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.browser.navigation import resilient_goto
from julius_e2e.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_POLL_INTERVAL_MS = 250


class BasePage:
    """Holds the page, its ``ActionHelper`` and the active settings.

    Subclasses keep their locator strings as instance attributes so tests
    and unit tests can refer to them.
    """

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.page = page
        self.settings = settings or get_settings()
        self.helper = helper or ActionHelper(page, self.settings.helper)

    @property
    def url(self) -> str:
        return self.page.url

    def title(self) -> str:
        return self.page.title()

    def expected_title(self, name: str) -> str:
        """``"<name> | Julius"``, the title format every app page uses."""
        return self.settings.page_title(name)

    def open(self, path: str) -> None:
        """Navigate to an app-relative *path* and let the page settle."""
        resilient_goto(
            self.page,
            path,
            base_url=self.settings.app.base_url,
            timeout_ms=self.settings.browser.navigation_timeout_ms,
        )
        self.helper.wait_for_navigation()

    def text_of(self, selector: str) -> str:
        """Trimmed text content of the first element matching *selector*."""
        return (self.page.locator(selector).first.text_content() or "").strip()

    def wait_for_any(self, conditions: Iterable[Callable[[], bool]], timeout_ms: int) -> bool:
        """Poll *conditions* until one returns True or *timeout_ms* elapses."""
        checks = list(conditions)
        deadline = time.monotonic() + timeout_ms / 1000
        while True:
            for check in checks:
                try:
                    if check():
                        return True
                except PlaywrightError as exc:
                    logger.debug("Condition check raised: %s", exc)
            if time.monotonic() >= deadline:
                return False
            self.page.wait_for_timeout(_POLL_INTERVAL_MS)
