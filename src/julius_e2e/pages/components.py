"""The app's "form-selectable" dropdown widget.

Lists, campaigns, preferences and the profile add-to-list / add-to-campaign
modals all use the same searchable dropdown: a placeholder span that opens
a popover with a search input, a list of result items, and a remove icon
once something is selected.
"""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper

logger = logging.getLogger(__name__)

POPOVER_SEARCH_INPUT = (
    "//span[@class='form-selectable-popover popover']//input[@placeholder='Type here to search...']"
)
AUTOCOMPLETE_SEARCH_INPUT = 'input.form-search-field[placeholder="Type here to search..."][data-trigger="autocomplete"]'
RESULT_ITEMS = ".form-selectable-results-item"
REMOVE_BUTTON = "span.app-icon.app-icon-times.form-selectable-remove[data-trigger='remove']"
SELECTED_DISPLAY = "span.form-selectable-selected"
CONTENT = "span.form-selectable-content"

# Result item offered when nothing matches; never a real selection.
_CREATE_SUGGESTION = "would you like to create"


class SelectableDropdown:
    """Drive one form-selectable dropdown.

    Args:
        page: Playwright page.
        helper: Action helper bound to *page*.
        placeholder: Placeholder text shown while empty (``"Select a Project"``).
        search_input: Selector of the search box inside the open popover.
        trigger: Element to click to open the popover. Defaults to the placeholder.
    """

    def __init__(
        self,
        page: Page,
        helper: ActionHelper,
        placeholder: str,
        *,
        search_input: str = POPOVER_SEARCH_INPUT,
        trigger: str | None = None,
    ) -> None:
        self.page = page
        self.helper = helper
        self.placeholder_text = placeholder
        self.placeholder = f'span.form-selectable-placeholder:has-text("{placeholder}")'
        self.trigger = trigger or self.placeholder
        self.search_input = search_input
        self.results = RESULT_ITEMS
        self.remove_button = REMOVE_BUTTON

    def is_placeholder_visible(self) -> bool:
        try:
            return self.page.locator(self.placeholder).first.is_visible()
        except PlaywrightError:
            return False

    def clear_selection(self) -> bool:
        """Remove a pre-selected value. Returns True if one was removed."""
        if self.is_placeholder_visible():
            return False
        remove = self.page.locator(self.remove_button).first
        try:
            if not remove.is_visible():
                return False
        except PlaywrightError:
            return False
        self.helper.click(remove)
        self.helper.pause(500)
        return True

    def open(self) -> None:
        self.helper.click(self.trigger)
        self.helper.wait_for_visible(self.search_input)

    def search(self, text: str) -> None:
        self.helper.type_slowly(self.search_input, text)
        # results refresh after the debounce
        self.helper.pause(1500)

    def wait_for_results(self, timeout_ms: int = 10_000) -> None:
        self.page.locator(self.results).first.wait_for(state="attached", timeout=timeout_ms)

    def pick(self, text: str, *, exact: bool = True) -> bool:
        """Click the result matching *text*.

        Exact matching compares trimmed, case-insensitive text; otherwise
        *text* only has to be contained in the item. When no item matches,
        the first result is taken with ArrowDown + Enter and False is
        returned.
        """
        wanted = text.strip().lower()
        items = self.page.locator(self.results)
        for i in range(items.count()):
            item = items.nth(i)
            label = item.inner_text().strip().lower()
            if _CREATE_SUGGESTION in label:
                continue
            if (label == wanted) if exact else (wanted in label):
                item.click()
                logger.info("Selected %r in %s dropdown", text, self.placeholder_text)
                return True

        logger.warning("No result matched %r in %s dropdown, using keyboard selection", text, self.placeholder_text)
        self.page.keyboard.press("ArrowDown")
        self.helper.pause(300)
        self.page.keyboard.press("Enter")
        return False

    def select(self, text: str, *, exact: bool = True) -> bool:
        """Clear, open, search for *text* and pick it."""
        try:
            self.clear_selection()
            self.open()
            self.search(text)
            self.wait_for_results()
            matched = self.pick(text, exact=exact)
            self.helper.pause(500)
            self.helper.wait_for_network_idle()
            return matched
        except PlaywrightError as exc:
            logger.error("Selecting %r in %s dropdown failed: %s", text, self.placeholder_text, exc)
            raise

    def selected_text(self) -> str:
        """Text of the current selection, or ``""``."""
        try:
            selected = self.page.locator(SELECTED_DISPLAY).first
            if selected.is_visible():
                return (selected.text_content() or "").strip()
            return (self.page.locator(CONTENT).first.text_content() or "").strip()
        except PlaywrightError as exc:
            logger.warning("Could not read %s dropdown selection: %s", self.placeholder_text, exc)
            return ""

    def has_selection(self, text: str) -> bool:
        return text.strip().lower() in self.selected_text().lower()
