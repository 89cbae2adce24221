"""Contracts section of the last created campaign."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.e2e


def test_campaign_contracts(on_campaign_overview, campaign_sections):
    campaign_sections.open_section("contracts")

    assert campaign_sections.is_section_loaded("contracts")
