"""Home-page search filters: Platform, Interest, Overall reach/engagement, Sort by.

Strict ``verify_*`` methods raise ``VerificationError`` with the expected
and actual text so a failing test reports what the filter showed.
"""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.exceptions import SelectionError, VerificationError
from julius_e2e.pages.base import BasePage
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)

SAVE_BUTTON = ".btn.btn-primary.search-filter-action-save"
CANCEL_BUTTON = ".btn.btn-cancel.search-filter-action-cancel"

INSTAGRAM_VALUE = "ZGVtb2dyYXBoaWNzLnBsYXRmb3JtLmluc3RhZ3JhbXxAfEluc3RhZ3JhbQ=="
FASHION_VALUE = "aW50ZXJlc3QuZmFzaGlvbnxAfEZhc2hpb24="


class _FilterPage(BasePage):
    """Shared save / close / value-check behaviour of the filter popovers."""

    save_button = SAVE_BUTTON
    cancel_button = CANCEL_BUTTON

    def save(self, settle_ms: int = 2000) -> None:
        try:
            self.helper.wait_for_visible(self.save_button)
            self.helper.click(self.save_button)
            self.helper.pause(settle_ms)
            self.close_dropdown()
        except PlaywrightError as exc:
            logger.error("%s.save failed: %s", type(self).__name__, exc)
            raise

    def close_dropdown(self) -> None:
        """Dismiss a popover that stays open after saving."""
        try:
            self.page.keyboard.press("Escape")
            self.helper.pause(500)
            self.page.click("body", position={"x": 50, "y": 50})
            self.helper.pause(500)
        except PlaywrightError as exc:
            logger.info("Could not close filter dropdown, continuing: %s", exc)

    def _read_value(self, selector: str) -> str:
        try:
            self.helper.wait_for_visible(selector)
            return self.text_of(selector)
        except PlaywrightError as exc:
            logger.error("%s could not read %s: %s", type(self).__name__, selector, exc)
            return ""

    def _verify_value(self, what: str, selector: str, expected: str) -> bool:
        self.helper.wait_for_visible(selector)
        # value text updates after the filter request returns
        self.helper.pause(2000)
        actual = self.text_of(selector)
        if actual != expected:
            raise VerificationError(what, expected, actual)
        return True

    def _set_checked(self, label: str, checkbox: str, enable: bool, what: str) -> None:
        self.helper.wait_for_visible(label)
        if self.page.is_checked(checkbox) != enable:
            self.helper.click(label)
            self.helper.pause(500)
        if self.page.is_checked(checkbox) != enable:
            raise SelectionError(what, "on" if enable else "off")

    def _set_number(self, selector: str, value: int, what: str) -> None:
        self.helper.wait_for_visible(selector)
        self.helper.type_slowly(selector, str(value), delay_ms=0)
        actual = self.page.input_value(selector)
        if actual != str(value):
            raise VerificationError(what, str(value), actual)


class AudienceFilterPage(_FilterPage):
    """Audience > Platform filter."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.platform_filter_button = "//span[normalize-space()='Platform']"
        self.platform_filter_value = (
            "//span[normalize-space()='Platform']/following-sibling::span[@class='search-demographic-filter-value']"
        )
        self.filter_options = (
            "//span[normalize-space()='Platform']/following-sibling::span[@class='search-demographic-filter-options']"
        )
        self.instagram_checkbox = f'input[value="{INSTAGRAM_VALUE}"]'
        self.instagram_label = f'label[data-value="{INSTAGRAM_VALUE}"]'

    def open_platform_filter(self) -> None:
        try:
            self.helper.wait_for_visible(self.platform_filter_button)
            self.helper.click(self.platform_filter_button)
            self.helper.wait_for_visible(self.filter_options)
        except PlaywrightError as exc:
            logger.error("Error clicking platform filter: %s", exc)
            raise

    def select_instagram(self) -> None:
        """Tick Instagram.

        Raises:
            SelectionError: When the checkbox is still unchecked afterwards.
        """
        self.helper.wait_for_visible(self.instagram_label)
        self.helper.click(self.instagram_label)
        self.helper.pause(1000)
        if not self.page.is_checked(self.instagram_checkbox):
            raise SelectionError("platform filter", "Instagram")

    def platform_value(self) -> str:
        return self._read_value(self.platform_filter_value)

    def verify_platform_value(self, expected: str) -> bool:
        return self._verify_value("platform filter value", self.platform_filter_value, expected)

    def is_platform_filter_visible(self) -> bool:
        return self.helper.is_visible(self.platform_filter_button)


class InterestFilterPage(_FilterPage):
    """Search bar > Interest filter."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.interest_dropdown = '.search-bar-filter-label:has-text("Interest")'
        self.interest_value_selector = (
            '.search-bar-filter:has(.search-bar-filter-label:has-text("Interest")) .search-bar-filter-value'
        )
        self.fashion_checkbox = f'input[value="{FASHION_VALUE}"]'
        # Tried in order; the value-based label is missing on some builds.
        self.fashion_label_candidates = [
            f'label.form-toggle.form-toggle-checkbox:has(input[value="{FASHION_VALUE}"])',
            "text=Fashion",
            'label:has-text("Fashion")',
        ]

    def open_interest_dropdown(self) -> None:
        try:
            self.helper.wait_for_visible(self.interest_dropdown)
            self.helper.click(self.interest_dropdown)
            self.helper.pause(2000)
        except PlaywrightError as exc:
            logger.error("Error clicking Interest dropdown: %s", exc)
            raise

    def select_fashion(self) -> None:
        """Tick Fashion using the first label candidate that is visible.

        Raises:
            SelectionError: When no candidate is visible.
        """
        for selector in self.fashion_label_candidates:
            if self.helper.is_visible(selector):
                self.helper.click(selector)
                self.helper.pause(1000)
                return
            logger.info("Fashion label %s not visible, trying next", selector)
        raise SelectionError("interest filter", "Fashion")

    def interest_value(self) -> str:
        return self._read_value(self.interest_value_selector)

    def verify_interest_value(self, expected: str) -> bool:
        return self._verify_value("interest filter value", self.interest_value_selector, expected)

    def is_interest_dropdown_visible(self) -> bool:
        return self.helper.is_visible(self.interest_dropdown)

    def is_fashion_checkbox_visible(self) -> bool:
        return any(self.helper.is_visible(selector) for selector in self.fashion_label_candidates)


class ReachEngagementFilterPage(_FilterPage):
    """Social > Overall filter (minimum reach and average engagement)."""

    _OVERALL = '#search-refine .search-demographic-filter:has(.search-demographic-filter-title:text("Overall"))'

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.overall_filter_button = '#search-refine .search-demographic-filter-title:text("Overall")'
        self.overall_filter_value = f"{self._OVERALL} .search-demographic-filter-value"
        self.filter_options = f"{self._OVERALL} .search-demographic-filter-options"

        switch = "label.form-toggle.form-toggle-switch.search-filter-pricing-switch"
        self.reach_toggle_label = f'{switch}:has(input[name="reach.active"])'
        self.reach_toggle_input = 'input[name="reach.active"]'
        self.reach_min_input = 'input[name="reach.min"]'
        self.engagement_toggle_label = f'{switch}:has(input[name="engagement.active"])'
        self.engagement_toggle_input = 'input[name="engagement.active"]'
        self.engagement_min_input = 'input[name="engagement.min"]'

    @staticmethod
    def expected_overall_value(reach_min: int, engagement_min: int) -> str:
        return f"Reach {reach_min}+ & Avg. Eng {engagement_min}+"

    def open_overall_filter(self) -> None:
        try:
            self.helper.wait_for_visible(self.overall_filter_button)
            self.helper.click(self.overall_filter_button)
            self.helper.wait_for_visible(self.filter_options)
        except PlaywrightError as exc:
            logger.error("Error clicking Overall filter: %s", exc)
            raise

    def toggle_reach(self, enable: bool = True) -> None:
        self._set_checked(self.reach_toggle_label, self.reach_toggle_input, enable, "reach toggle")

    def set_reach_min(self, value: int) -> None:
        self._set_number(self.reach_min_input, value, "reach min value")

    def toggle_engagement(self, enable: bool = True) -> None:
        self._set_checked(self.engagement_toggle_label, self.engagement_toggle_input, enable, "engagement toggle")

    def set_engagement_min(self, value: int) -> None:
        self._set_number(self.engagement_min_input, value, "engagement min value")

    def save(self, settle_ms: int = 3000) -> None:
        super().save(settle_ms)

    def overall_value(self) -> str:
        return self._read_value(self.overall_filter_value)

    def verify_overall_value(self, reach_min: int, engagement_min: int) -> bool:
        expected = self.expected_overall_value(reach_min, engagement_min)
        return self._verify_value("overall filter value", self.overall_filter_value, expected)

    def is_overall_filter_visible(self) -> bool:
        return self.helper.is_visible(self.overall_filter_button)


class SortingPage(_FilterPage):
    """The "Sort by" dropdown above the results."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.sort_by_dropdown = '.subheader-dropdown-label:has-text("Sort by")'
        self.sort_by_value = '.subheader-dropdown-label:has-text("Sort by") .subheader-dropdown-label-value'

    @staticmethod
    def option(name: str) -> str:
        return f'.subheader-dropdown-item-title:text("{name}")'

    def open_sort_dropdown(self) -> None:
        try:
            self.helper.wait_for_visible(self.sort_by_dropdown)
            self.helper.click(self.sort_by_dropdown)
            self.helper.pause(1000)
        except PlaywrightError as exc:
            logger.error("Error clicking Sort by dropdown: %s", exc)
            raise

    def select_option(self, name: str) -> None:
        option = self.option(name)
        try:
            self.helper.wait_for_visible(option)
            self.helper.click(option)
            self.helper.pause(2000)
        except PlaywrightError as exc:
            logger.error("Error selecting sort option %s: %s", name, exc)
            raise

    def sort_value(self) -> str:
        return self._read_value(self.sort_by_value)

    def verify_sort_value(self, expected: str) -> bool:
        return self._verify_value("sort by value", self.sort_by_value, expected)

    def is_sort_dropdown_visible(self) -> bool:
        return self.helper.is_visible(self.sort_by_dropdown)

    def is_option_visible(self, name: str) -> bool:
        return self.helper.is_visible(self.option(name))
