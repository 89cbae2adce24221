"""Login and logout journeys."""

from __future__ import annotations

import re

import pytest
from playwright.sync_api import expect

pytestmark = pytest.mark.e2e


def test_login_with_valid_credentials(login_page, credentials, page):
    login_page.goto()
    login_page.login(credentials.email, credentials.password)

    expect(page.locator(login_page.logo)).to_be_visible()


def test_logout_returns_to_login_page(signed_in, page):
    signed_in.logout()

    expect(page).to_have_url(re.compile(r"/login"))
    expect(page.locator(signed_in.email_input)).to_be_visible()


def test_login_with_invalid_credentials_is_rejected(login_page, bad_credentials):
    login_page.goto()
    login_page.login(bad_credentials.email, bad_credentials.password)

    assert login_page.is_error_visible()
    assert login_page.is_on_login_page()
