"""Fixtures for the real-browser journeys.

The whole directory is skipped unless ``run.enabled`` is true
(``JULIUS_E2E_RUN__ENABLED=true``, which ``julius-e2e run`` sets). Tests
run single-worker in file order; later tests read values that earlier
ones saved to the temp store.
"""

from __future__ import annotations

import logging

import pytest
from playwright.sync_api import sync_playwright

from julius_e2e.browser.helper import ActionHelper
from julius_e2e.browser.session import configure_expect, launch_browser, new_context
from julius_e2e.exceptions import CredentialsError
from julius_e2e.pages import (
    AudienceFilterPage,
    CampaignOverviewPage,
    CampaignPage,
    CampaignSectionPage,
    CustomTagsPage,
    DashboardPage,
    GroupsPage,
    HomePage,
    InfluencerProfilePage,
    InterestFilterPage,
    ListPage,
    LoginPage,
    ManageAccountPage,
    PreferencesPage,
    ProjectPage,
    ReachEngagementFilterPage,
    SearchPage,
    SecurityPage,
    SortingPage,
)
from julius_e2e.reporting import capture_failure_screenshot, reset_directory, save_trace
from julius_e2e.settings import get_settings
from julius_e2e.testdata.credentials import invalid_user, valid_user
from julius_e2e.testdata.models import (
    load_filter_data,
    load_group_data,
    load_personal_data,
    load_search_data,
    load_tag_data,
)
from julius_e2e.testdata.store import LAST_CAMPAIGN_KEY, get_temp_store

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Failure reporting hook
# ---------------------------------------------------------------------------


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report as ``item.rep_<phase>`` for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def _failed(request: pytest.FixtureRequest) -> bool:
    report = getattr(request.node, "rep_call", None)
    return bool(report and report.failed)


# ---------------------------------------------------------------------------
# Browser
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def e2e_settings():
    settings = get_settings()
    if not settings.run.enabled:
        pytest.skip("e2e suite disabled; set JULIUS_E2E_RUN__ENABLED=true or use `julius-e2e run`")
    return settings


@pytest.fixture(scope="session", autouse=True)
def _screenshot_dir(request):
    """Start every session with an empty screenshot directory."""
    settings = get_settings()
    if settings.run.enabled:
        reset_directory(settings.results.screenshot_dir)


@pytest.fixture(scope="session")
def browser(e2e_settings):
    configure_expect(e2e_settings)
    with sync_playwright() as playwright:
        browser = launch_browser(playwright, e2e_settings)
        try:
            yield browser
        finally:
            browser.close()


@pytest.fixture()
def context(browser, e2e_settings, request):
    """Fresh context per test; ``@pytest.mark.slow`` stretches its timeouts."""
    slow = request.node.get_closest_marker("slow") is not None
    context = new_context(browser, e2e_settings, slow=slow)
    tracing = e2e_settings.browser.trace_on_failure
    if tracing:
        context.tracing.start(screenshots=True, snapshots=True)
    try:
        yield context
    finally:
        if tracing:
            if _failed(request):
                save_trace(context, request.node.name, e2e_settings.results.trace_dir)
            else:
                context.tracing.stop()
        context.close()


@pytest.fixture()
def page(context, e2e_settings, request):
    page = context.new_page()
    yield page
    if _failed(request) and not page.is_closed():
        try:
            capture_failure_screenshot(page, request.node.name, e2e_settings.results.screenshot_dir)
        except Exception as exc:
            logger.warning("Could not capture failure screenshot for %s: %s", request.node.name, exc)


@pytest.fixture()
def helper(page, e2e_settings) -> ActionHelper:
    return ActionHelper(page, e2e_settings.helper)


# ---------------------------------------------------------------------------
# Test data
# ---------------------------------------------------------------------------


@pytest.fixture()
def temp_store():
    return get_temp_store()


@pytest.fixture(scope="session")
def credentials(e2e_settings):
    try:
        return valid_user()
    except CredentialsError as exc:
        pytest.fail(str(exc))


@pytest.fixture(scope="session")
def bad_credentials():
    return invalid_user()


@pytest.fixture(scope="session")
def search_query(e2e_settings):
    return load_search_data().search_queries


@pytest.fixture(scope="session")
def profile_details(e2e_settings):
    return load_personal_data().profile_details


@pytest.fixture(scope="session")
def reach_engagement(e2e_settings):
    return load_filter_data().reach_engagement


@pytest.fixture(scope="session")
def group_details(e2e_settings):
    return load_group_data().group_details


@pytest.fixture(scope="session")
def tag_details(e2e_settings):
    return load_tag_data().tag_details


# ---------------------------------------------------------------------------
# Page objects
# ---------------------------------------------------------------------------


@pytest.fixture()
def login_page(page, helper, e2e_settings) -> LoginPage:
    return LoginPage(page, helper, e2e_settings)


@pytest.fixture()
def signed_in(login_page, credentials) -> LoginPage:
    """Log in with the valid user and wait for the header logo."""
    login_page.goto()
    login_page.login(credentials.email, credentials.password)
    assert login_page.is_logo_visible(), "logo not visible after login"
    return login_page


@pytest.fixture()
def manage_account_page(page, helper, e2e_settings) -> ManageAccountPage:
    return ManageAccountPage(page, helper, e2e_settings)


@pytest.fixture()
def account_settings(signed_in, manage_account_page) -> ManageAccountPage:
    """Signed in and on the Manage Account page."""
    manage_account_page.open_user_menu()
    manage_account_page.click_manage_account()
    assert manage_account_page.is_on_manage_account_page()
    return manage_account_page


@pytest.fixture()
def project_page(page, helper, e2e_settings) -> ProjectPage:
    return ProjectPage(page, helper, e2e_settings)


@pytest.fixture()
def list_page(page, helper, e2e_settings, temp_store) -> ListPage:
    return ListPage(page, helper, e2e_settings, store=temp_store)


@pytest.fixture()
def campaign_page(page, helper, e2e_settings, temp_store) -> CampaignPage:
    return CampaignPage(page, helper, e2e_settings, store=temp_store)


@pytest.fixture()
def preferences_page(page, helper, e2e_settings) -> PreferencesPage:
    return PreferencesPage(page, helper, e2e_settings)


@pytest.fixture()
def security_page(page, helper, e2e_settings) -> SecurityPage:
    return SecurityPage(page, helper, e2e_settings)


@pytest.fixture()
def search_page(page, helper, e2e_settings) -> SearchPage:
    return SearchPage(page, helper, e2e_settings)


@pytest.fixture()
def profile_page(page, helper, e2e_settings) -> InfluencerProfilePage:
    return InfluencerProfilePage(page, helper, e2e_settings)


@pytest.fixture()
def on_profile(signed_in, search_page, search_query) -> SearchPage:
    """Signed in and on the searched influencer's profile page."""
    name = search_query.influencer_name
    search_page.search_for_influencer(name)
    assert search_page.is_search_dropdown_visible()
    assert search_page.is_influencer_result_visible(name)
    search_page.click_influencer_result(name)
    assert search_page.is_on_influencer_profile_page(name)
    return search_page


@pytest.fixture()
def home_page(page, helper, e2e_settings) -> HomePage:
    return HomePage(page, helper, e2e_settings)


@pytest.fixture()
def audience_filter(page, helper, e2e_settings) -> AudienceFilterPage:
    return AudienceFilterPage(page, helper, e2e_settings)


@pytest.fixture()
def interest_filter(page, helper, e2e_settings) -> InterestFilterPage:
    return InterestFilterPage(page, helper, e2e_settings)


@pytest.fixture()
def reach_engagement_filter(page, helper, e2e_settings) -> ReachEngagementFilterPage:
    return ReachEngagementFilterPage(page, helper, e2e_settings)


@pytest.fixture()
def sorting(page, helper, e2e_settings) -> SortingPage:
    return SortingPage(page, helper, e2e_settings)


@pytest.fixture()
def dashboard_page(page, helper, e2e_settings) -> DashboardPage:
    return DashboardPage(page, helper, e2e_settings)


@pytest.fixture()
def groups_page(page, helper, e2e_settings, temp_store) -> GroupsPage:
    return GroupsPage(page, helper, e2e_settings, store=temp_store)


@pytest.fixture()
def custom_tags_page(page, helper, e2e_settings, temp_store) -> CustomTagsPage:
    return CustomTagsPage(page, helper, e2e_settings, store=temp_store)


@pytest.fixture()
def campaign_overview(page, helper, e2e_settings) -> CampaignOverviewPage:
    return CampaignOverviewPage(page, helper, e2e_settings)


@pytest.fixture()
def campaign_sections(page, helper, e2e_settings) -> CampaignSectionPage:
    return CampaignSectionPage(page, helper, e2e_settings)


@pytest.fixture()
def on_campaign_overview(signed_in, campaign_page, campaign_overview, temp_store) -> str:
    """Signed in and on the overview of the last created campaign; returns its name."""
    campaign_name = temp_store.require(LAST_CAMPAIGN_KEY)
    campaign_page.navigate()
    campaign_overview.open_campaign(campaign_name)
    assert campaign_overview.is_overview_loaded(), f"overview of {campaign_name} did not load"
    return campaign_name
