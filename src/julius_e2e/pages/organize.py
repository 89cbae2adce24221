"""Groups and custom tags: the account-settings pages for organising influencers.

Both create forms save the created name to the temp store
(``lastCreatedGroup`` / ``lastCreatedTag``).
"""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.exceptions import FormValidationError
from julius_e2e.pages.account import settings_menu_item
from julius_e2e.pages.base import BasePage
from julius_e2e.settings import Settings
from julius_e2e.testdata.store import LAST_GROUP_KEY, LAST_TAG_KEY, TempStore, get_temp_store

logger = logging.getLogger(__name__)

ERROR_ALERT = "div.form-alert.form-alert-error"
FIELD_ERRORS = ".form-field-error, .error-message, .field-error"


class GroupsPage(BasePage):
    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
        store: TempStore | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.store = store or get_temp_store()
        self.groups_menu_item = settings_menu_item("Groups")
        self.create_group_button = 'a[data-action="create-group"]'
        self.name_input = "input#name"
        self.description_input = "input#description"
        self.submit_button = "button.group-form-submit"
        self.error_alert = ERROR_ALERT
        self.field_errors = FIELD_ERRORS
        self.expected_title_part = "Groups"
        self.create_title_part = "Create a New Group"

    def open_groups_page(self) -> None:
        try:
            self.helper.click(self.groups_menu_item)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("GroupsPage.open_groups_page failed: %s", exc)
            raise

    def is_on_groups_page(self) -> bool:
        try:
            return self.expected_title_part in self.title() and "/groups" in self.url
        except PlaywrightError as exc:
            logger.error("GroupsPage.is_on_groups_page failed: %s", exc)
            return False

    def click_create_group(self) -> None:
        try:
            self.helper.click(self.create_group_button)
            self.helper.wait_for_navigation()
            self.helper.pause(1000)
        except PlaywrightError as exc:
            logger.error("GroupsPage.click_create_group failed: %s", exc)
            raise

    def is_on_create_group_page(self) -> bool:
        try:
            self.page.wait_for_load_state("domcontentloaded")
            return self.create_title_part in self.title() and "/groups/create" in self.url
        except PlaywrightError as exc:
            logger.error("GroupsPage.is_on_create_group_page failed: %s", exc)
            return False

    def create_group(self, name: str, description: str) -> None:
        """Fill and submit the group form, then save *name* as ``lastCreatedGroup``.

        The submit ends when the app leaves ``/groups/create`` or shows an
        error, whichever happens first.

        Raises:
            FormValidationError: When the form shows errors before or after submitting.
        """
        try:
            self.helper.fill(self.name_input, name)
            self.helper.fill(self.description_input, description)
            self.check_for_validation_errors()

            self.helper.click(self.submit_button)
            self.wait_for_any(
                [
                    lambda: "/groups/create" not in self.page.url,
                    lambda: self.page.locator(self.error_alert).first.is_visible(),
                ],
                timeout_ms=15_000,
            )
            self.helper.wait_for_navigation()
            self.helper.pause(1000)
            self.check_for_validation_errors()
        except PlaywrightError as exc:
            logger.error("GroupsPage.create_group failed: %s", exc)
            raise
        self.store.save(LAST_GROUP_KEY, name)

    def check_for_validation_errors(self) -> None:
        """Raise ``FormValidationError`` if the form shows an alert or field errors."""
        if self.page.is_visible(self.error_alert):
            raise FormValidationError("group form", [self.text_of(self.error_alert)])
        errors = self.page.locator(self.field_errors)
        if errors.count() > 0:
            raise FormValidationError("group form", [text.strip() for text in errors.all_text_contents()])

    def is_group_created(self) -> bool:
        """Back on the groups area (not the create form) with the Groups title."""
        try:
            self.page.wait_for_load_state("domcontentloaded")
            url = self.url
            return "/groups" in url and "/groups/create" not in url and self.expected_title_part in self.title()
        except PlaywrightError as exc:
            logger.error("GroupsPage.is_group_created failed: %s", exc)
            return False


class CustomTagsPage(BasePage):
    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
        store: TempStore | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.store = store or get_temp_store()
        self.custom_tags_menu_item = settings_menu_item("Custom Tags")
        self.add_tag_button = 'a[data-action="create-tag"][data-trigger="modal"]'
        # Amplify upsell modals can be active at the same time.
        self.tag_modal = (
            ".modal.modal-active:not(#modal-amplify-trial):not(#modal-amplify-inactive):not(#modal-amplify-trialended)"
        )
        self.name_input = "input#display_name"
        self.description_input = "input#description"
        self.create_tag_button = f'{self.tag_modal} button[type="submit"].btn.btn-primary'
        self.expected_title_part = "Tags"

    def open_custom_tags_page(self) -> None:
        try:
            self.helper.click(self.custom_tags_menu_item)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("CustomTagsPage.open_custom_tags_page failed: %s", exc)
            raise

    def is_on_custom_tags_page(self) -> bool:
        try:
            self.page.wait_for_load_state("domcontentloaded")
            return self.expected_title_part in self.title() and "/tags" in self.url
        except PlaywrightError as exc:
            logger.error("CustomTagsPage.is_on_custom_tags_page failed: %s", exc)
            return False

    def click_add_tag(self) -> None:
        try:
            self.helper.click(self.add_tag_button)
            self.helper.wait_for_visible(self.name_input)
        except PlaywrightError as exc:
            logger.error("CustomTagsPage.click_add_tag failed: %s", exc)
            raise

    def is_modal_open(self) -> bool:
        return self.helper.is_visible(self.name_input) and self.helper.is_visible(self.description_input)

    def create_tag(self, name: str, description: str) -> None:
        """Fill the add-tag modal, submit it and save *name* as ``lastCreatedTag``."""
        try:
            self.helper.wait_for_visible(self.name_input)
            self.helper.wait_for_visible(self.description_input)
            self.helper.wait_for_enabled(self.create_tag_button)
            self.helper.fill(self.name_input, name)
            self.helper.fill(self.description_input, description)
            self.helper.click(self.create_tag_button)
            self.helper.wait_for_navigation()
            self.helper.pause(1000)
        except PlaywrightError as exc:
            logger.error("CustomTagsPage.create_tag failed: %s", exc)
            raise
        self.store.save(LAST_TAG_KEY, name)
