"""Dashboard title check."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.e2e


def test_dashboard_page_title(signed_in, dashboard_page):
    dashboard_page.navigate()

    assert dashboard_page.verify_title()
