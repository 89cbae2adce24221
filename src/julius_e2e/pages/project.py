"""Projects section of the settings area."""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.pages.base import BasePage
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)


class ProjectPage(BasePage):
    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.project_section = 'span.section-item-title:has-text("Projects")'
        self.add_project_button = 'a[data-action="create-project"]'
        self.name_input = "input#name"
        self.description_input = "input#description"
        self.platform_dropdown = 'select[name="platform"]'
        self.create_button = 'button[type="submit"]:has-text("Create Project")'

    def go_to_project_section(self) -> None:
        self.helper.click(self.project_section)

    def click_add_project(self) -> None:
        self.helper.click(self.add_project_button)

    def fill_project_details(self, name: str, description: str, platform: str | None = None) -> None:
        try:
            self.helper.fill(self.name_input, name)
            self.helper.fill(self.description_input, description)
            if platform:
                self.page.select_option(self.platform_dropdown, platform)
        except PlaywrightError as exc:
            logger.error("ProjectPage.fill_project_details failed: %s", exc)
            raise

    def submit(self) -> None:
        self.helper.click(self.create_button)

    def is_on_project_home_page(self) -> bool:
        try:
            return self.expected_title("Projects") in self.title()
        except PlaywrightError as exc:
            logger.error("ProjectPage.is_on_project_home_page failed: %s", exc)
            return False
