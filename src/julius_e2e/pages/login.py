"""Login page and the header user menu."""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError, Page

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.pages.base import BasePage
from julius_e2e.settings import Settings

logger = logging.getLogger(__name__)


class LoginPage(BasePage):
    """Sign in, sign out, and check which side of the login wall we are on."""

    def __init__(
        self,
        page: Page,
        helper: ActionHelper | None = None,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(page, helper, settings)
        self.email_input = 'input[name="email"].auth-field'
        self.password_input = 'input[name="password"].auth-field'
        self.login_button = 'input[type="submit"][value="Sign In"]'
        self.logo = 'span.logo-img.logo-by-triller.logo-img-header[title="Julius"]'
        self.error_message = ".auth-error-message, .error-message"

        self.avatar_icon = "span.avatar-gravatar"
        logout_href = self.settings.app.base_url.rstrip("/") + "/logout"
        self.logout_link = f'a.action-menu-item-link.header-user-actions-item-link[href="{logout_href}"]'

    def goto(self) -> None:
        """Open the login page and wait for the form."""
        try:
            self.open(self.settings.app.login_path)
            self.helper.wait_for_visible(self.email_input)
            self.helper.wait_for_network_idle()
        except PlaywrightError as exc:
            logger.error("Error navigating to login page: %s", exc)
            raise

    def login(self, email: str, password: str) -> None:
        try:
            self.helper.fill(self.email_input, email)
            self.helper.fill(self.password_input, password)
            self.helper.click(self.login_button)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("Error during login: %s", exc)
            raise

    def open_user_menu(self) -> None:
        try:
            self.helper.wait_for_visible(self.avatar_icon)
            self.helper.click(self.avatar_icon)
        except PlaywrightError as exc:
            logger.error("Error opening user menu: %s", exc)
            raise

    def logout(self) -> None:
        """Sign out through the user menu; the app redirects to ``/login``."""
        try:
            self.open_user_menu()
            self.helper.wait_for_visible(self.logout_link)
            self.helper.click(self.logout_link)
            self.helper.wait_for_navigation()
        except PlaywrightError as exc:
            logger.error("Error during logout: %s", exc)
            raise

    def is_logo_visible(self) -> bool:
        try:
            self.helper.wait_for_visible(self.logo)
            return self.page.is_visible(self.logo)
        except PlaywrightError as exc:
            logger.error("Error checking logo visibility: %s", exc)
            return False

    def is_error_visible(self) -> bool:
        try:
            self.helper.wait_for_visible(self.error_message)
            return self.page.is_visible(self.error_message)
        except PlaywrightError as exc:
            logger.error("Error checking error message visibility: %s", exc)
            return False

    def is_logged_in(self) -> bool:
        return self.is_logo_visible()

    def is_on_login_page(self) -> bool:
        return self.settings.app.login_path in self.url
