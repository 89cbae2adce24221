"""Dashboard reached from the header nav."""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.pages.base import BasePage
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)


class DashboardPage(BasePage):
    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.dashboard_nav_link = 'a.header-link:has-text("Dashboard")'

    def navigate(self) -> None:
        try:
            self.helper.click(self.dashboard_nav_link)
            self.helper.wait_for_network_idle()
        except PlaywrightError as exc:
            logger.error("Failed to navigate to dashboard: %s", exc)
            raise

    def verify_title(self) -> bool:
        """Like the campaigns list, the dashboard carries the bare app name."""
        try:
            self.helper.wait_for_network_idle()
            return self.title() == self.settings.app.title_suffix
        except PlaywrightError as exc:
            logger.error("Failed to verify dashboard title: %s", exc)
            return False
