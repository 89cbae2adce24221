"""Lists: create a list and attach it to a project."""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page, TimeoutError as PlaywrightTimeout

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.pages.base import BasePage
from julius_e2e.pages.components import SelectableDropdown
from julius_e2e.settings import Settings
from julius_e2e.testdata.store import LAST_LIST_KEY, TempStore, get_temp_store

logger = logging.getLogger(__name__)


class ListPage(BasePage):
    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
        store: TempStore | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.store = store or get_temp_store()
        self.list_nav_link = 'a.header-link:has-text("Lists")'
        self.new_list_button = "//a[normalize-space()='New List']"
        self.name_input = "//input[@id='name']"
        self.description_input = 'input#description[name="description"]'
        self.save_button = 'button.btn.btn-primary:has-text("Save List")'
        self.success_text = 'text="List created successfully"'
        self.success_message = "div.success-message"
        self.project_dropdown = SelectableDropdown(page, self.helper, "Select a Project")

    def navigate(self) -> None:
        try:
            self.helper.click(self.list_nav_link)
            self.helper.wait_for_network_idle()
            self.helper.wait_for_visible(self.new_list_button, 15_000)
        except PlaywrightError as exc:
            logger.error("Failed to navigate to Lists page: %s", exc)
            raise

    def click_new_list(self) -> None:
        try:
            self.helper.click(self.new_list_button)
            self.helper.wait_for_network_idle()
            self.helper.wait_for_visible(self.name_input, 15_000)
        except PlaywrightError as exc:
            logger.error("Failed to click New List button: %s", exc)
            raise

    def fill_list_details(self, name: str, description: str, project_name: str) -> None:
        self.helper.fill(self.name_input, name)
        self.helper.wait_for_enabled(self.name_input, 300)
        self.helper.fill(self.description_input, description)
        self.helper.wait_for_enabled(self.description_input, 300)
        self.project_dropdown.select(project_name)

    def submit(self, list_name: str) -> None:
        """Save the list and remember its name for later tests.

        The app either redirects to the new list or shows a success message;
        whichever comes first ends the wait.
        """
        try:
            self.helper.wait_for_visible(self.save_button, 5_000)
            clicked = False
            try:
                with self.helper.expect_response(
                    lambda r: "/lists" in r.url and r.status == 200, timeout_ms=10_000
                ):
                    self.helper.click(self.save_button)
                    clicked = True
            except PlaywrightTimeout:
                # only the response wait may time out; a failed click is fatal
                if not clicked:
                    raise
                logger.info("No /lists response seen after saving, continuing")

            self.wait_for_any(
                [
                    lambda: "/lists/" in self.page.url,
                    lambda: self.page.locator(self.success_text).first.is_visible(),
                    lambda: self.page.locator(self.success_message).first.is_visible(),
                ],
                timeout_ms=10_000,
            )
            self.page.wait_for_load_state("domcontentloaded")
            self.store.save(LAST_LIST_KEY, list_name)
        except PlaywrightError as exc:
            logger.error("Failed to submit list: %s", exc)
            raise

    def verify_list_created(self, list_name: str) -> bool:
        try:
            self.helper.wait_for_network_idle()
            # title updates after the redirect settles
            self.helper.pause(1000)
            return self.expected_title(list_name) in self.title()
        except PlaywrightError as exc:
            logger.error("Failed to verify list creation: %s", exc)
            return False
