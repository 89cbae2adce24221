"""Account settings: Manage Account (profile), Preferences, Security."""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.browser.navigation import resilient_goto
from julius_e2e.exceptions import SelectionError
from julius_e2e.pages.base import BasePage
from julius_e2e.pages.components import SelectableDropdown
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)

SUCCESS_ALERT = "div.form-alert.form-alert-success"


def settings_menu_item(label: str) -> str:
    return f'//span[@class="section-item-title" and normalize-space()="{label}"]'


class ManageAccountPage(BasePage):
    """Profile form reached through the user menu, plus the Amplify upsell."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.avatar_icon = "span.avatar-gravatar"
        self.manage_account_link = '//a[normalize-space()="Manage Account"]'
        self.expected_title_part = "Profile"

        self.amplify_dashboard_link = (
            'a.action-menu-item-link.header-user-actions-item-link[data-amplify-status="amplify_trial_available"]'
        )
        # The upsell modal differs by trial state; the last entry matches any variant.
        self.amplify_modal_links = [
            '#modal-amplify-inactive a[href="https://julius.amplify.ai"][target="_blank"]',
            '#modal-amplify-trialended a[href="https://julius.amplify.ai"][target="_blank"]',
            'a[href="https://julius.amplify.ai"][target="_blank"]',
        ]

        self.first_name_input = "input#first_name"
        self.last_name_input = "input#last_name"
        self.job_title_input = "input#job_title"
        self.update_profile_button = "button.group-form-submit.btn.btn-primary"
        self.success_message = SUCCESS_ALERT

    def open_user_menu(self) -> None:
        self.helper.click(self.avatar_icon)

    def click_manage_account(self) -> None:
        try:
            self.helper.wait_for_visible(self.manage_account_link)
            self.page.locator(self.manage_account_link).scroll_into_view_if_needed()
            self.helper.click(self.manage_account_link)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("Error clicking manage account: %s", exc)
            raise

    def is_on_manage_account_page(self) -> bool:
        try:
            self.helper.wait_for_navigation()
            return "/profile" in self.url and self.expected_title_part in self.title()
        except PlaywrightError as exc:
            logger.error("Error checking manage account page: %s", exc)
            return False

    def update_profile(self, first_name: str, last_name: str, job_title: str) -> None:
        try:
            self.helper.fill(self.first_name_input, first_name)
            self.helper.fill(self.last_name_input, last_name)
            self.helper.fill(self.job_title_input, job_title)
            self.helper.click(self.update_profile_button)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("Error updating profile: %s", exc)
            raise

    def is_profile_update_success_visible(self) -> bool:
        try:
            self.helper.wait_for_visible(self.success_message)
            return self.page.is_visible(self.success_message)
        except PlaywrightError as exc:
            logger.error("Error checking success message: %s", exc)
            return False

    def click_amplify_dashboard(self) -> None:
        try:
            self.helper.wait_for_visible(self.amplify_dashboard_link)
            self.page.locator(self.amplify_dashboard_link).scroll_into_view_if_needed()
            self.helper.click(self.amplify_dashboard_link)
        except PlaywrightError as exc:
            logger.error("Error clicking amplify dashboard: %s", exc)
            raise

    def open_amplify_page(self) -> str:
        """Follow the visible Amplify link in a new tab and return that tab's title.

        Raises:
            SelectionError: When no Amplify link is visible in any modal variant.
        """
        # the modal fades in after the click
        self.helper.pause(2000)

        amplify_url = None
        for selector in self.amplify_modal_links:
            link = self.page.locator(selector).first
            try:
                if link.is_visible():
                    amplify_url = link.get_attribute("href")
                    break
            except PlaywrightError:
                logger.debug("Amplify link %s not found", selector)
        if not amplify_url:
            raise SelectionError("Amplify modal", "https://julius.amplify.ai")

        new_tab = self.page.context.new_page()
        try:
            resilient_goto(new_tab, amplify_url, timeout_ms=self.settings.browser.navigation_timeout_ms)
            ActionHelper(new_tab, self.settings.helper).wait_for_navigation()
            return new_tab.title()
        finally:
            new_tab.close()


class PreferencesPage(BasePage):
    """Default-project preference."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.preferences_menu_item = settings_menu_item("Preferences")
        self.expected_full_title = self.expected_title("Preferences")
        self.project_dropdown = SelectableDropdown(page, self.helper, "Select a Project")
        self.save_button = 'button[type="submit"].btn.btn-primary'
        self.success_toast = SUCCESS_ALERT
        self.expected_toast_text = "Your preferences have been successfully updated."

    def open(self) -> None:  # type: ignore[override]
        """Open Preferences from the settings side menu."""
        try:
            self.helper.click(self.preferences_menu_item)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("PreferencesPage.open failed: %s", exc)
            raise

    def is_on_preferences_page(self) -> bool:
        try:
            return self.title() == self.expected_full_title and "/preferences" in self.url
        except PlaywrightError as exc:
            logger.error("PreferencesPage.is_on_preferences_page failed: %s", exc)
            return False

    def select_project(self, project_name: str) -> None:
        """Pick *project_name* as the default project.

        Raises:
            SelectionError: When the dropdown does not show the project afterwards.
        """
        self.project_dropdown.select(project_name, exact=False)
        if not self.project_dropdown.has_selection(project_name):
            raise SelectionError("preferences project dropdown", project_name)

    def save(self) -> None:
        try:
            self.helper.click(self.save_button)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("PreferencesPage.save failed: %s", exc)
            raise

    def is_success_toast_visible(self) -> bool:
        try:
            self.helper.wait_for_visible(self.success_toast)
            return self.page.is_visible(self.success_toast)
        except PlaywrightError as exc:
            logger.error("PreferencesPage.is_success_toast_visible failed: %s", exc)
            return False

    def success_message(self) -> str:
        try:
            self.helper.wait_for_visible(self.success_toast)
            return self.text_of(self.success_toast)
        except PlaywrightError as exc:
            logger.error("PreferencesPage.success_message failed: %s", exc)
            return ""

    def is_correct_success_message(self) -> bool:
        return self.expected_toast_text in self.success_message()


class SecurityPage(BasePage):
    """Security settings; only reachability is checked."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.security_menu_item = settings_menu_item("Security")
        self.expected_title_part = "Security"
        self.expected_full_title = self.expected_title("Security")

    def open(self) -> None:  # type: ignore[override]
        """Open Security from the settings side menu."""
        try:
            self.helper.click(self.security_menu_item)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("SecurityPage.open failed: %s", exc)
            raise

    def is_on_security_page(self) -> bool:
        try:
            self.helper.wait_for_navigation()
            return self.expected_title_part in self.title() and "/security" in self.url
        except PlaywrightError as exc:
            logger.error("SecurityPage.is_on_security_page failed: %s", exc)
            return False

    def has_correct_title(self) -> bool:
        try:
            return self.title() == self.expected_full_title
        except PlaywrightError as exc:
            logger.error("SecurityPage.has_correct_title failed: %s", exc)
            return False
