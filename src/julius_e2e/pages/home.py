"""Home page (influencer discovery): footer links and pagination."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple

from playwright.sync_api import Error as PlaywrightError, Page, TimeoutError as PlaywrightTimeout

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.pages.base import BasePage
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FooterLink:
    name: str
    href: str
    expected_title: str

    @property
    def selector(self) -> str:
        return f'a[href="{self.href}"][target="_blank"]'


FOOTER_LINKS: dict[str, FooterLink] = {
    link.name: link
    for link in (
        FooterLink("help", "http://get.julius.help/", "Help Center"),
        FooterLink(
            "careers",
            "https://www.juliusworks.com/careers",
            "Influencer Marketing Experts | Learn More About Our Team | Julius",
        ),
        FooterLink("blog", "https://juliusworks.com/blog/", "Influencer Marketing Blog | Julius"),
        FooterLink("privacy", "https://juliusworks.com/privacy-policy", "Privacy Policy - JuliusWorks"),
    )
}


class ExternalPage(NamedTuple):
    title: str
    url: str


class HomePage(BasePage):
    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.logo = 'span.logo-img.logo-by-triller.logo-img-header[title="Julius"]'
        self.pagination_dropdown = "span.app-icon.app-icon-triangle-down"
        self.dropdown_label = "span.subheader-dropdown-label"

    @staticmethod
    def page_size_option(size: int) -> str:
        return f'span[data-item-name="{size}"][data-item-title="{size}"][data-dropdown-type="page-size"]'

    def goto(self) -> None:
        try:
            self.open("/")
            self.helper.wait_for_visible(self.logo)
            self.helper.wait_for_network_idle()
        except PlaywrightError as exc:
            logger.error("Error navigating to home page: %s", exc)
            raise

    def is_on_home_page(self) -> bool:
        return self.helper.is_visible(self.logo)

    # ------------------------------------------------------------------
    # Footer links
    # ------------------------------------------------------------------

    def is_footer_link_visible(self, name: str) -> bool:
        return self.helper.is_visible(FOOTER_LINKS[name].selector)

    def open_footer_link(self, name: str) -> Page:
        """Click a footer link and return the tab it opens, once loaded."""
        link = FOOTER_LINKS[name]
        try:
            self.helper.wait_for_visible(link.selector)
            with self.page.context.expect_page() as page_info:
                self.helper.click(link.selector)
            new_page = page_info.value
            new_page.wait_for_load_state("load")
            new_page.wait_for_load_state("domcontentloaded")
            self._wait_for_idle(new_page)
            return new_page
        except PlaywrightError as exc:
            logger.error("Error opening %s link: %s", name, exc)
            raise

    def external_page_info(self, page: Page) -> ExternalPage:
        self._wait_for_idle(page)
        page.wait_for_timeout(2000)
        return ExternalPage(title=page.title(), url=page.url)

    def is_app_redirect(self, info: ExternalPage) -> bool:
        """External help links sometimes bounce back into the app."""
        return "app.julius" in info.url or info.title == self.settings.app.title_suffix

    @staticmethod
    def _wait_for_idle(page: Page) -> None:
        try:
            page.wait_for_load_state("networkidle")
        except PlaywrightTimeout:
            logger.debug("External page %s never went network-idle", page.url)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def is_pagination_dropdown_visible(self) -> bool:
        try:
            return self.page.locator(self.pagination_dropdown).first.is_visible()
        except PlaywrightError as exc:
            logger.error("Error checking pagination dropdown visibility: %s", exc)
            return False

    def open_page_size_dropdown(self, size: int = 100) -> None:
        """Open the page-size dropdown (the first triangle icon on the page)."""
        try:
            dropdown = self.page.locator(self.pagination_dropdown).first
            dropdown.wait_for(state="visible")
            dropdown.click()
            self.helper.wait_for_visible(self.page_size_option(size))
            self.helper.pause(1000)
        except PlaywrightError as exc:
            logger.error("Error clicking pagination dropdown: %s", exc)
            raise

    def select_page_size(self, size: int = 100) -> None:
        option = self.page_size_option(size)
        try:
            self.helper.wait_for_visible(option)
            self.helper.pause(500)
            self.helper.click(option)
            self.helper.wait_for_network_idle()
            self.helper.pause(2000)
        except PlaywrightError as exc:
            logger.error("Error selecting %d from pagination dropdown: %s", size, exc)
            raise

    def page_size_label(self) -> str:
        label = self.page.locator(self.dropdown_label).first
        label.wait_for(state="visible")
        return (label.text_content() or "").strip()

    def wait_for_label(self, expected: str, max_wait_s: int = 15) -> bool:
        """Poll the page-size label every 500 ms until it reads *expected*."""
        try:
            for _ in range(max_wait_s * 2):
                if self.page_size_label() == expected:
                    return True
                self.page.wait_for_timeout(500)
            return False
        except PlaywrightError as exc:
            logger.error("Error waiting for label to update: %s", exc)
            return False

    def verify_page_size_label(self, expected: str) -> bool:
        if self.wait_for_label(expected):
            return True
        try:
            actual = self.page_size_label()
        except PlaywrightError:
            actual = ""
        logger.error('Label did not update to "%s". Current text: "%s"', expected, actual)
        return False
