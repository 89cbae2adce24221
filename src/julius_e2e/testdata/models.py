"""Typed records for the JSON files under ``data/``.

The files use camelCase keys; the models expose snake_case attributes and
accept either form.
"""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from julius_e2e.settings import get_settings

_M = TypeVar("_M", bound=BaseModel)


class _DataModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCredentials(_DataModel):
    email: str
    password: str


class LoginData(_DataModel):
    valid_user: UserCredentials | None = None
    invalid_user: UserCredentials | None = None


class ProfileDetails(_DataModel):
    first_name: str
    last_name: str
    job_title: str


class PersonalData(_DataModel):
    profile_details: ProfileDetails


class SearchQueries(_DataModel):
    influencer_name: str
    expected_href: str = ""


class SearchData(_DataModel):
    search_queries: SearchQueries


class ReachEngagement(_DataModel):
    reach_min: int
    engagement_min: int


class FilterData(_DataModel):
    reach_engagement: ReachEngagement


class GroupDetails(_DataModel):
    name: str
    description: str


class GroupData(_DataModel):
    group_details: GroupDetails


class TagDetails(_DataModel):
    description: str


class TagData(_DataModel):
    tag_details: TagDetails


def data_path(filename: str, data_dir: str | Path | None = None) -> Path:
    """Resolve *filename* inside the configured data directory."""
    return Path(data_dir or get_settings().data.data_dir) / filename


def load_json(path: str | Path, model: type[_M]) -> _M:
    """Parse and validate a JSON data file into *model*."""
    return model.model_validate_json(Path(path).read_text(encoding="utf-8"))


def load_login_data(data_dir: str | Path | None = None) -> LoginData:
    return load_json(data_path("login.json", data_dir), LoginData)


def load_personal_data(data_dir: str | Path | None = None) -> PersonalData:
    return load_json(data_path("personal.json", data_dir), PersonalData)


def load_search_data(data_dir: str | Path | None = None) -> SearchData:
    return load_json(data_path("search.json", data_dir), SearchData)


def load_filter_data(data_dir: str | Path | None = None) -> FilterData:
    return load_json(data_path("filters.json", data_dir), FilterData)


def load_group_data(data_dir: str | Path | None = None) -> GroupData:
    return load_json(data_path("groups.json", data_dir), GroupData)


def load_tag_data(data_dir: str | Path | None = None) -> TagData:
    return load_json(data_path("tags.json", data_dir), TagData)
