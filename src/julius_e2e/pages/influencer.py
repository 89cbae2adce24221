"""Influencer profile tabs.

Every tab of a profile follows the same pattern: a tab link in the section
bar, a URL path segment, and one heading or element that proves the tab
content rendered. ``PROFILE_TABS`` describes them all.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from playwright.sync_api import Error as PlaywrightError, Locator, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.pages.base import BasePage
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)

_TAB_LINK = "a.section-bar-item-link.influencer-header-section-bar-item-link"

# Sort/toggle glyphs the app renders inside some headings.
_HEADING_GLYPHS = re.compile(r"[⇆↵]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ProfileTab:
    name: str
    link: str
    url_fragment: str
    content: str
    expected_text: str


def _tab(name: str, content: str, expected_text: str, *, link: str | None = None) -> ProfileTab:
    return ProfileTab(
        name=name,
        link=link or f'{_TAB_LINK}[data-tab="{name}"]',
        url_fragment=f"/{name}",
        content=content,
        expected_text=expected_text,
    )


PROFILE_TABS: dict[str, ProfileTab] = {
    tab.name: tab
    for tab in (
        _tab("about", 'span.block.influencer-component-container:has-text("Real Name")', "Real Name"),
        _tab("activity", 'span:has-text("All Activity")', "All Activity"),
        _tab("posts", "div.posts-search-input-placeholder", "Search for posts…"),
        _tab("engagement", 'h3:has-text("Organic")', "Most Engaging Organic Posts"),
        _tab("reach", "h3.influencer-reach-header", "Total Reach"),
        _tab("audience", 'span:has-text("Demographics")', "Demographics"),
        _tab("health", 'h3:has-text("Audience Health")', "Audience Health"),
        _tab("brands", 'span.sorter[data-sort-by="brand"]', "Brand"),
        _tab("related", 'h3:has-text("Similar Influencers")', "Similar Influencers", link=f'{_TAB_LINK}[href*="/related"]'),
    )
}


def normalize_text(text: str) -> str:
    return _WHITESPACE.sub(" ", _HEADING_GLYPHS.sub("", text)).strip()


class InfluencerProfilePage(BasePage):
    """Navigate between profile tabs and check their content."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.info_container = "span.block.influencer-component-container"
        self.name_value = "span.influencer-component-container-row-value"

    @staticmethod
    def tab(name: str) -> ProfileTab:
        """Look up a tab by name; unknown names raise ``KeyError``."""
        return PROFILE_TABS[name]

    def open_tab(self, name: str) -> None:
        tab = self.tab(name)
        try:
            self.helper.wait_for_visible(tab.link)
            self.helper.click(tab.link)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("InfluencerProfilePage.open_tab(%s) failed: %s", name, exc)
            raise

    def is_on_tab(self, name: str) -> bool:
        tab = self.tab(name)
        try:
            self.helper.wait_for_navigation()
            return tab.url_fragment in self.url
        except PlaywrightError as exc:
            logger.error("InfluencerProfilePage.is_on_tab(%s) failed: %s", name, exc)
            return False

    def tab_heading_text(self, name: str) -> str:
        """Normalized text of the tab's content marker, or ``""``."""
        tab = self.tab(name)
        element = self._content_locator(tab)
        try:
            self.helper.wait_for_visible(element)
            return normalize_text(element.text_content() or "")
        except PlaywrightError as exc:
            logger.error("InfluencerProfilePage.tab_heading_text(%s) failed: %s", name, exc)
            return ""

    def verify_tab_content(self, name: str) -> bool:
        return self.tab(name).expected_text in self.tab_heading_text(name)

    # ------------------------------------------------------------------
    # About tab
    # ------------------------------------------------------------------

    def is_general_information_visible(self) -> bool:
        content = self.tab("about").content
        try:
            self.helper.wait_for_visible(content)
            return self.page.is_visible(content)
        except PlaywrightError as exc:
            logger.error("InfluencerProfilePage.is_general_information_visible failed: %s", exc)
            return False

    def influencer_name_on_page(self, name: str) -> str:
        element = self._exact_name(name)
        try:
            self.helper.wait_for_visible(element)
            return (element.text_content() or "").strip()
        except PlaywrightError as exc:
            logger.error("InfluencerProfilePage.influencer_name_on_page failed: %s", exc)
            return ""

    def is_influencer_name_visible(self, name: str) -> bool:
        try:
            return self._exact_name(name).is_visible()
        except PlaywrightError as exc:
            logger.error("InfluencerProfilePage.is_influencer_name_visible failed: %s", exc)
            return False

    def verify_influencer_name(self, name: str) -> bool:
        return self.influencer_name_on_page(name) == name

    def is_first_information_container_visible(self) -> bool:
        try:
            containers = self.page.locator(self.info_container)
            return containers.count() > 0 and containers.first.is_visible()
        except PlaywrightError as exc:
            logger.error("InfluencerProfilePage.is_first_information_container_visible failed: %s", exc)
            return False

    def _exact_name(self, name: str) -> Locator:
        # exact match; other rows can contain the name as a substring
        return self.page.locator(self.name_value).filter(has_text=re.compile(rf"^{re.escape(name)}$"))

    def _content_locator(self, tab: ProfileTab) -> Locator:
        return self.page.locator(tab.content).filter(has_text=tab.expected_text).first
