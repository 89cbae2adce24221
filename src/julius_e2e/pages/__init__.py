"""Page objects for the Julius web app."""

from julius_e2e.pages.account import ManageAccountPage, PreferencesPage, SecurityPage
from julius_e2e.pages.base import BasePage
from julius_e2e.pages.campaign import CampaignPage
from julius_e2e.pages.campaign_sections import (
    CAMPAIGN_SECTIONS,
    CampaignOverviewPage,
    CampaignSection,
    CampaignSectionPage,
)
from julius_e2e.pages.components import SelectableDropdown
from julius_e2e.pages.dashboard import DashboardPage
from julius_e2e.pages.home import FOOTER_LINKS, ExternalPage, HomePage
from julius_e2e.pages.home_filters import (
    AudienceFilterPage,
    InterestFilterPage,
    ReachEngagementFilterPage,
    SortingPage,
)
from julius_e2e.pages.influencer import PROFILE_TABS, InfluencerProfilePage, ProfileTab
from julius_e2e.pages.lists import ListPage
from julius_e2e.pages.login import LoginPage
from julius_e2e.pages.organize import CustomTagsPage, GroupsPage
from julius_e2e.pages.project import ProjectPage
from julius_e2e.pages.search import SearchPage, SearchResult

__all__ = [
    "CAMPAIGN_SECTIONS",
    "FOOTER_LINKS",
    "PROFILE_TABS",
    "AudienceFilterPage",
    "BasePage",
    "CampaignOverviewPage",
    "CampaignPage",
    "CampaignSection",
    "CampaignSectionPage",
    "CustomTagsPage",
    "DashboardPage",
    "ExternalPage",
    "GroupsPage",
    "HomePage",
    "InfluencerProfilePage",
    "InterestFilterPage",
    "ListPage",
    "LoginPage",
    "ManageAccountPage",
    "PreferencesPage",
    "ProfileTab",
    "ProjectPage",
    "ReachEngagementFilterPage",
    "SearchPage",
    "SearchResult",
    "SecurityPage",
    "SelectableDropdown",
    "SortingPage",
]
