"""Header influencer search and the actions on an influencer profile.

The profile action bar (export, compare, add to campaign, add to list) is
reached from a search result, so it lives here with the search itself.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.pages.base import BasePage
from julius_e2e.pages.components import AUTOCOMPLETE_SEARCH_INPUT, SelectableDropdown
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)

INFLUENCER_TYPE = "Influencer"


class SearchResult(NamedTuple):
    """One entry of the header search dropdown."""

    type: str | None
    name: str | None
    platform: str | None


def profile_slug(name: str) -> str:
    """URL slug the app uses for an influencer (``"Selena Gomez"`` -> ``"selena-gomez"``)."""
    return name.strip().lower().replace(" ", "-")


class SearchPage(BasePage):
    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.search_input = 'input.form-search-field.header-search-form-field[type="search"]'
        self.search_result_item = "a.header-search-result"
        self.influencer_search_result = f'a.header-search-result[data-type="{INFLUENCER_TYPE}"]'
        self.result_title = "span.header-search-result-title"
        self.influencer_result_type = "span.header-search-result-type.header-search-result-type-influencer"

        self.export_profile_button = (
            'a[data-trigger="modal"][data-modal-href*="/export"] '
            "span.app-icon.app-icon-boxed-arrow-down.action-bar-item-icon"
        )
        self.csv_option = 'span.form-label-toggle-content:has-text("CSV")'
        self.export_button = 'button.btn.btn-primary.distribution-modal-submit[data-toggle-allows-bubble="true"]'

        self.compare_button = "span.app-icon.app-icon-compare.action-bar-item-icon"
        self.compare_page_heading = "h2.navigation-bar-title"
        self.expected_compare_heading = "Comparing Influencers"

        self.campaign_button = (
            'a[data-action="add-to-campaign"][data-trigger="modal"] '
            "span.app-icon.app-icon-bubble.action-bar-item-icon"
        )
        self.campaign_dropdown_trigger = (
            'span.form-input.form-selectable-content:has(span.form-selectable-placeholder:text("Select a Campaign"))'
        )
        self.campaign_dropdown = SelectableDropdown(
            page,
            self.helper,
            "Select a Campaign",
            search_input=AUTOCOMPLETE_SEARCH_INPUT,
            trigger=self.campaign_dropdown_trigger,
        )
        self.confirm_button = 'button.btn.btn-primary[type="submit"]:has(span.app-icon.app-icon-plus.btn-icon)'
        self.recent_campaign_links = 'a[href*="/campaigns/"]'

        self.list_button = (
            'a[data-action="add-to-list"][data-trigger="modal"] '
            "span.app-icon.app-icon-copy.action-bar-item-icon"
        )
        self.list_dropdown_trigger = (
            'span.form-input.form-selectable-content:has(span.form-selectable-placeholder:text("Select a List"))'
        )
        self.list_dropdown = SelectableDropdown(
            page,
            self.helper,
            "Select a List",
            search_input=AUTOCOMPLETE_SEARCH_INPUT,
            trigger=self.list_dropdown_trigger,
        )
        # Same submit button in both modals.
        self.add_button = self.confirm_button
        self.recent_list_links = 'a[href*="/lists/"]'

    @staticmethod
    def influencer_result(name: str) -> str:
        return f'a.header-search-result[data-name="{name}"][data-type="{INFLUENCER_TYPE}"]'

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def click_search_bar(self) -> None:
        try:
            self.helper.click(self.search_input)
            self.helper.wait_for_visible(self.search_input)
        except PlaywrightError as exc:
            logger.error("SearchPage.click_search_bar failed: %s", exc)
            raise

    def search_for_influencer(self, name: str) -> None:
        try:
            self.click_search_bar()
            self.helper.type_slowly(self.search_input, name)
            self.helper.wait_for_network_idle()
        except PlaywrightError as exc:
            logger.error("SearchPage.search_for_influencer failed: %s", exc)
            raise

    def is_search_dropdown_visible(self) -> bool:
        try:
            self.helper.wait_for_visible(self.influencer_search_result)
            return self.page.is_visible(self.influencer_search_result)
        except PlaywrightError as exc:
            logger.error("SearchPage.is_search_dropdown_visible failed: %s", exc)
            return False

    def is_influencer_result_visible(self, name: str) -> bool:
        selector = self.influencer_result(name)
        try:
            self.helper.wait_for_visible(selector)
            return self.page.is_visible(selector)
        except PlaywrightError as exc:
            logger.error("SearchPage.is_influencer_result_visible failed: %s", exc)
            return False

    def verify_influencer_search_result(self, name: str) -> bool:
        """The result for *name* shows that name as title and "Influencer" as type."""
        selector = self.influencer_result(name)
        try:
            self.helper.wait_for_visible(selector)
            result = self.page.locator(selector)
            if not result.is_visible():
                return False
            title = (result.locator(self.result_title).text_content() or "").strip()
            result_type = (result.locator(self.influencer_result_type).text_content() or "").strip()
            return title == name and result_type == INFLUENCER_TYPE
        except PlaywrightError as exc:
            logger.error("SearchPage.verify_influencer_search_result failed: %s", exc)
            return False

    def search_results_count(self) -> int:
        try:
            self.helper.wait_for_visible(self.influencer_search_result)
            return self.page.locator(self.search_result_item).count()
        except PlaywrightError as exc:
            logger.error("SearchPage.search_results_count failed: %s", exc)
            return 0

    def search_result_types(self) -> list[SearchResult]:
        try:
            self.helper.wait_for_visible(self.influencer_search_result)
            return [
                SearchResult(
                    type=result.get_attribute("data-type"),
                    name=result.get_attribute("data-name"),
                    platform=result.get_attribute("data-platform"),
                )
                for result in self.page.locator(self.search_result_item).all()
            ]
        except PlaywrightError as exc:
            logger.error("SearchPage.search_result_types failed: %s", exc)
            return []

    def influencer_result_href(self, name: str) -> str:
        selector = self.influencer_result(name)
        try:
            self.helper.wait_for_visible(selector)
            return self.page.get_attribute(selector, "href") or ""
        except PlaywrightError as exc:
            logger.error("SearchPage.influencer_result_href failed: %s", exc)
            return ""

    def click_influencer_result(self, name: str) -> None:
        selector = self.influencer_result(name)
        try:
            self.helper.wait_for_visible(selector)
            self.helper.click(selector)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("SearchPage.click_influencer_result failed: %s", exc)
            raise

    def is_on_influencer_profile_page(self, name: str) -> bool:
        """Title is ``"<name> | Julius"`` and the URL carries the profile slug."""
        if not self.helper.is_page_open():
            logger.error("Page closed, cannot verify profile page")
            return False
        try:
            self.page.wait_for_load_state("domcontentloaded")
            return self.title() == self.expected_title(name) and f"/{profile_slug(name)}" in self.url
        except PlaywrightError as exc:
            logger.error("SearchPage.is_on_influencer_profile_page failed: %s", exc)
            return False

    def current_title(self) -> str:
        if not self.helper.is_page_open():
            return ""
        try:
            return self.title()
        except PlaywrightError as exc:
            logger.error("SearchPage.current_title failed: %s", exc)
            return ""

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def click_export_profile(self) -> None:
        try:
            self.helper.wait_for_visible(self.export_profile_button)
            self.helper.click(self.export_profile_button)
            self.helper.wait_for_visible(self.csv_option)
        except PlaywrightError as exc:
            logger.error("SearchPage.click_export_profile failed: %s", exc)
            raise

    def select_csv_option(self) -> None:
        try:
            self.helper.wait_for_visible(self.csv_option)
            self.helper.click(self.csv_option)
        except PlaywrightError as exc:
            logger.error("SearchPage.select_csv_option failed: %s", exc)
            raise

    def click_export_button(self) -> None:
        try:
            self.helper.wait_for_visible(self.export_button)
            self.helper.click(self.export_button)
            self.helper.wait_for_network_idle()
        except PlaywrightError as exc:
            logger.error("SearchPage.click_export_button failed: %s", exc)
            raise

    def is_export_modal_visible(self) -> bool:
        # the CSV toggle is unique to the export modal
        return self.helper.is_visible(self.csv_option)

    def is_csv_option_visible(self) -> bool:
        return self.helper.is_visible(self.csv_option)

    def is_export_button_visible(self) -> bool:
        return self.helper.is_visible(self.export_button)

    # ------------------------------------------------------------------
    # Compare
    # ------------------------------------------------------------------

    def click_compare_button(self) -> None:
        try:
            self.helper.wait_for_visible(self.compare_button)
            self.helper.click(self.compare_button)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("SearchPage.click_compare_button failed: %s", exc)
            raise

    def is_compare_button_visible(self) -> bool:
        return self.helper.is_visible(self.compare_button)

    def verify_compare_heading(self) -> bool:
        try:
            self.helper.wait_for_visible(self.compare_page_heading)
            return self.text_of(self.compare_page_heading) == self.expected_compare_heading
        except PlaywrightError as exc:
            logger.error("SearchPage.verify_compare_heading failed: %s", exc)
            return False

    def is_on_compare_page(self) -> bool:
        return "/compare" in self.url and self.verify_compare_heading()

    # ------------------------------------------------------------------
    # Add to campaign
    # ------------------------------------------------------------------

    def click_campaign_button(self) -> None:
        try:
            self.helper.wait_for_visible(self.campaign_button)
            self.helper.click(self.campaign_button)
            self.helper.wait_for_visible(self.campaign_dropdown_trigger)
        except PlaywrightError as exc:
            logger.error("SearchPage.click_campaign_button failed: %s", exc)
            raise

    def click_select_campaign_dropdown(self) -> None:
        try:
            self.helper.wait_for_visible(self.campaign_dropdown_trigger)
            self.campaign_dropdown.open()
        except PlaywrightError as exc:
            logger.error("SearchPage.click_select_campaign_dropdown failed: %s", exc)
            raise

    def search_and_select_campaign(self, campaign_name: str) -> bool:
        """Search the open campaign dropdown; the name only has to be contained."""
        return self._search_and_pick(self.campaign_dropdown, campaign_name, exact=False)

    def click_confirm_button(self) -> None:
        try:
            self.helper.wait_for_visible(self.confirm_button)
            self.helper.click(self.confirm_button)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("SearchPage.click_confirm_button failed: %s", exc)
            raise

    def verify_campaign_in_recent_activity(self, campaign_name: str) -> bool:
        # recent activity refreshes asynchronously
        self.helper.pause(2000)
        return self._has_link_text(self.recent_campaign_links, campaign_name)

    def is_campaign_button_visible(self) -> bool:
        return self.helper.is_visible(self.campaign_button)

    def is_campaign_dropdown_visible(self) -> bool:
        return self.helper.is_visible(self.campaign_dropdown_trigger)

    def is_campaign_search_input_visible(self) -> bool:
        return self.helper.is_visible(self.campaign_dropdown.search_input)

    def is_confirm_button_visible(self) -> bool:
        return self.helper.is_visible(self.confirm_button)

    # ------------------------------------------------------------------
    # Add to list
    # ------------------------------------------------------------------

    def click_list_button(self) -> None:
        try:
            self.helper.wait_for_visible(self.list_button)
            self.helper.click(self.list_button)
            self.helper.wait_for_visible(self.list_dropdown_trigger)
        except PlaywrightError as exc:
            logger.error("SearchPage.click_list_button failed: %s", exc)
            raise

    def click_select_list_dropdown(self) -> None:
        try:
            self.helper.wait_for_visible(self.list_dropdown_trigger)
            self.list_dropdown.open()
        except PlaywrightError as exc:
            logger.error("SearchPage.click_select_list_dropdown failed: %s", exc)
            raise

    def search_and_select_list(self, list_name: str) -> bool:
        """Search the open list dropdown for an exact (case-insensitive) name."""
        return self._search_and_pick(self.list_dropdown, list_name, exact=True)

    def click_add_button(self) -> None:
        """Submit the add-to-list modal; the app may re-render the profile."""
        try:
            self.helper.wait_for_visible(self.add_button)
            self.helper.click(self.add_button)
            self.page.wait_for_load_state("domcontentloaded")
            self.helper.wait_for_network_idle()
        except PlaywrightError as exc:
            logger.error("SearchPage.click_add_button failed: %s", exc)
            raise

    def verify_list_in_recent_activity(self, list_name: str) -> bool:
        if not self.helper.is_page_open():
            logger.error("Page closed, cannot verify recent activity")
            return False
        self.helper.pause(3000)
        return self._has_link_text(self.recent_list_links, list_name)

    def is_list_button_visible(self) -> bool:
        return self.helper.is_visible(self.list_button)

    def is_list_dropdown_visible(self) -> bool:
        return self.helper.is_visible(self.list_dropdown_trigger)

    def is_list_search_input_visible(self) -> bool:
        return self.helper.is_visible(self.list_dropdown.search_input)

    def is_add_button_visible(self) -> bool:
        return self.helper.is_visible(self.add_button)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _search_and_pick(self, dropdown: SelectableDropdown, text: str, *, exact: bool) -> bool:
        try:
            self.helper.wait_for_visible(dropdown.search_input)
            self.helper.wait_for_enabled(dropdown.search_input)
            dropdown.search(text)
            dropdown.wait_for_results()
            matched = dropdown.pick(text, exact=exact)
            self.helper.pause(500)
            self.helper.wait_for_network_idle()
            return matched
        except PlaywrightError as exc:
            logger.error("SearchPage search and select %r failed: %s", text, exc)
            raise

    def _has_link_text(self, selector: str, text: str) -> bool:
        try:
            links = self.page.locator(selector)
            for i in range(links.count()):
                if (links.nth(i).text_content() or "").strip() == text:
                    return True
            return False
        except PlaywrightError as exc:
            logger.error("SearchPage recent activity lookup for %r failed: %s", text, exc)
            return False
