"""A single campaign: its overview page and the sections in its sidebar.

Opening a campaign from the campaigns table lands on the overview, whose
sidebar lists nine sections. Messages, Contracts, Deliverables, Documents,
Notes and Reporting are all reached the same way: click the sidebar item,
wait for the route to change, then wait for something section-specific to
render. ``CAMPAIGN_SECTIONS`` describes each one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from playwright.sync_api import Error as PlaywrightError, Page, expect

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.browser.navigation import wait_for_path
from julius_e2e.pages.base import BasePage
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)

SIDEBAR_ITEM = "span.section-item-title"
SIDEBAR_SECTION_COUNT = 9
_MARKER_TIMEOUT_MS = 2_000


def _breadcrumb(label: str) -> str:
    return f'span.breadcrumb-item-text:has-text("{label}")'


@dataclass(frozen=True)
class CampaignSection:
    name: str
    label: str
    # None: the section is confirmed by its breadcrumb instead of the URL.
    url_fragment: str | None
    markers: tuple[str, ...]
    page_title: str | None = None
    settle_ms: int = 0

    @property
    def sidebar_link(self) -> str:
        return f'{SIDEBAR_ITEM}:has-text("{self.label}")'

    @property
    def breadcrumb(self) -> str:
        return _breadcrumb(self.label)


def _section(
    label: str,
    singular: str,
    *,
    breadcrumb: bool = True,
    by_url: bool = True,
    page_title: str | None = None,
    settle_ms: int = 0,
) -> CampaignSection:
    name = label.lower()
    markers = (
        f'[data-testid*="{singular}"]',
        f'h1:has-text("{label}")',
        f".{name}-container",
        f".{singular}-list",
        f".{name}-page",
        ".page-title",
    )
    return CampaignSection(
        name=name,
        label=label,
        url_fragment=f"/{name}" if by_url else None,
        markers=(_breadcrumb(label), *markers) if breadcrumb else markers,
        page_title=page_title,
        settle_ms=settle_ms,
    )


CAMPAIGN_SECTIONS: dict[str, CampaignSection] = {
    section.name: section
    for section in (
        _section("Messages", "message", by_url=False, settle_ms=2000),
        _section("Contracts", "contract", settle_ms=2000),
        _section("Deliverables", "deliverable"),
        _section("Documents", "document"),
        _section("Notes", "note"),
        # Reporting opens the Marketer Hub view, which has no breadcrumb.
        _section("Reporting", "report", breadcrumb=False, page_title="Marketer Hub"),
    )
}


class CampaignOverviewPage(BasePage):
    """Open a campaign from the campaigns table and check its overview."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.overview_section = f'{SIDEBAR_ITEM}:has-text("Overview")'
        self.sidebar_items = SIDEBAR_ITEM

    @staticmethod
    def campaign_link(name: str) -> str:
        return f'a.table-link:has-text("{name}")'

    def open_campaign(self, name: str) -> None:
        link = self.campaign_link(name)
        try:
            self.helper.wait_for_visible(link)
            self.helper.click(link)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("CampaignOverviewPage.open_campaign(%s) failed: %s", name, exc)
            raise

    def verify_title(self, name: str) -> bool:
        """The overview title is ``"<campaign name> | Julius"``."""
        try:
            self.helper.wait_for_navigation()
            return self.title() == self.expected_title(name)
        except PlaywrightError as exc:
            logger.error("CampaignOverviewPage.verify_title failed: %s", exc)
            return False

    def is_overview_loaded(self, section_count: int = SIDEBAR_SECTION_COUNT) -> bool:
        """Overview item visible and the whole sidebar rendered."""
        try:
            self.helper.wait_for_visible(self.overview_section, 20_000)
            expect(self.page.locator(self.sidebar_items)).to_have_count(section_count, timeout=10_000)
            return True
        except (PlaywrightError, AssertionError) as exc:
            logger.error("Campaign overview did not finish loading: %s", exc)
            return False


class CampaignSectionPage(BasePage):
    """Move between the sidebar sections of an open campaign."""

    @staticmethod
    def section(name: str) -> CampaignSection:
        """Look up a section by name; unknown names raise ``KeyError``."""
        return CAMPAIGN_SECTIONS[name]

    def open_section(self, name: str) -> None:
        """Click the sidebar item for *name* and wait for the section route.

        A route that never changes is logged, not raised; ``is_section_loaded``
        reports it.
        """
        section = self.section(name)
        try:
            if section.url_fragment is None:
                self.helper.wait_for_navigation(10_000)
            self.helper.wait_for_visible(section.sidebar_link, 20_000)
            if section.settle_ms:
                self.helper.pause(section.settle_ms)
            self.helper.click(section.sidebar_link)
            if section.url_fragment is None:
                self.helper.wait_for_visible(section.breadcrumb, 20_000)
                return
        except PlaywrightError as exc:
            logger.error("CampaignSectionPage.open_section(%s) failed at %s: %s", name, self.page.url, exc)
            raise

        if not wait_for_path(self.page, section.url_fragment, timeout_ms=5_000):
            logger.warning("Clicked %s but the URL is still %s", section.label, self.page.url)

    def is_section_loaded(self, name: str) -> bool:
        """True once the section route is active and its content has had time to render."""
        section = self.section(name)
        if not self.helper.is_page_open():
            return False
        if section.url_fragment is None:
            return self.helper.is_visible(section.breadcrumb, 10_000)

        try:
            if section.url_fragment not in self.url:
                logger.info("Not on %s: URL is %s", section.label, self.url)
                return False
            if section.page_title and self.title() == section.page_title:
                return True
        except PlaywrightError as exc:
            logger.error("CampaignSectionPage.is_section_loaded(%s) failed: %s", name, exc)
            return False

        for marker in section.markers:
            try:
                self.page.locator(marker).first.wait_for(state="visible", timeout=_MARKER_TIMEOUT_MS)
                return True
            except PlaywrightError:
                continue
        logger.info("No %s content marker rendered; accepting the route alone", section.label)
        return True

    def has_expected_title(self, name: str) -> bool:
        """Title check for sections with their own page title (Reporting)."""
        section = self.section(name)
        expected = section.page_title or self.expected_title(section.label)
        try:
            return self.title() == expected
        except PlaywrightError as exc:
            logger.error("CampaignSectionPage.has_expected_title(%s) failed: %s", name, exc)
            return False
