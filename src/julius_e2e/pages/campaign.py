"""Campaigns: navigation and the create-campaign form."""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.browser.navigation import resilient_reload
from julius_e2e.exceptions import NavigationError, SelectionError, VerificationError
from julius_e2e.pages.base import BasePage
from julius_e2e.pages.components import SelectableDropdown
from julius_e2e.settings import Settings
from julius_e2e.testdata import names
from julius_e2e.testdata.store import LAST_CAMPAIGN_KEY, TempStore, get_temp_store

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "2"


class CampaignPage(BasePage):
    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
        store: TempStore | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.store = store or get_temp_store()
        self.campaign_nav_link = "a.header-link:has-text('Campaigns')"
        self.new_campaign_button = 'a[data-action="create-campaign"]'
        self.name_input = 'input[name="name"]'
        self.status_dropdown = 'select[name="status_id"]'
        self.budget_input = 'input[name="budget"]'
        self.hashtag_input = "ul.form-tags-list input.taggle_input"
        self.create_campaign_button = "button.btn.btn-primary:has-text('Create Campaign')"
        self.project_dropdown = SelectableDropdown(page, self.helper, "Select a Project")

    def navigate(self) -> None:
        try:
            self.helper.click(self.campaign_nav_link)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("Failed to navigate to campaign page: %s", exc)
            raise

    def verify_title(self, expected: str | None = None) -> bool:
        """The campaigns page title is the bare app name."""
        expected = expected or self.settings.app.title_suffix
        try:
            self.helper.wait_for_navigation()
            return self.title() == expected
        except PlaywrightError as exc:
            logger.error("Failed to verify campaign title: %s", exc)
            return False

    def click_new_campaign(self) -> None:
        try:
            self.helper.click(self.new_campaign_button)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("Failed to click new campaign button: %s", exc)
            raise

    def fill_campaign_form(self, name: str, budget: int, hashtag: str) -> None:
        try:
            self.helper.fill(self.name_input, name)
            self.helper.wait_for_network_idle()
            self.page.select_option(self.status_dropdown, ACTIVE_STATUS)
            self.helper.wait_for_network_idle()
            self.helper.fill(self.budget_input, str(budget))
            self.helper.wait_for_network_idle()
            self.helper.fill(self.hashtag_input, hashtag)
            self.helper.press("Enter")
            self.helper.wait_for_network_idle()
        except PlaywrightError as exc:
            logger.error("Failed to fill campaign form: %s", exc)
            raise

    def select_project(self, project_name: str) -> None:
        """Attach the campaign to *project_name*.

        Raises:
            SelectionError: When the dropdown does not show the project afterwards.
        """
        self.project_dropdown.select(project_name)
        if not self.project_dropdown.has_selection(project_name):
            raise SelectionError("campaign project dropdown", project_name)

    def submit(self) -> None:
        try:
            self.helper.click(self.create_campaign_button)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("Failed to submit campaign form: %s", exc)
            raise

    def create_campaign(
        self,
        project_name: str | None = None,
        *,
        budget: int = 1000,
        hashtag: str = "#automation",
        attempts: int = 3,
    ) -> str:
        """Run the whole create flow, retrying from the campaigns list on failure.

        Each attempt uses a fresh campaign name. The name that was created is
        saved as ``lastCampaignName`` and returned.
        """
        attempts_left = attempts
        while True:
            campaign_name = names.campaign_name()
            try:
                self.click_new_campaign()
                self.fill_campaign_form(campaign_name, budget, hashtag)
                if project_name:
                    self.select_project(project_name)
                self.submit()
                if not self.verify_title():
                    raise VerificationError("campaign page title", self.settings.app.title_suffix, self.title())
                self.store.save(LAST_CAMPAIGN_KEY, campaign_name)
                return campaign_name
            except (PlaywrightError, SelectionError, VerificationError) as exc:
                attempts_left -= 1
                if attempts_left == 0:
                    logger.error("Campaign creation failed after all retries: %s", exc)
                    raise
                logger.warning("Retrying campaign creation, %d attempts left: %s", attempts_left, exc)
                self._recover()

    def _recover(self) -> None:
        try:
            resilient_reload(self.page, timeout_ms=self.settings.browser.navigation_timeout_ms)
            self.navigate()
            self.verify_title()
        except (PlaywrightError, NavigationError) as exc:
            logger.warning("Failed to recover page state, retrying anyway: %s", exc)
