"""Unique names for entities the suite creates, plus fake profile details."""

from __future__ import annotations

import random
import string
import time

from faker import Faker

from julius_e2e.testdata.models import ProfileDetails

_ALPHANUMERIC = string.ascii_letters + string.digits


def random_string(length: int = 5) -> str:
    return "".join(random.choices(_ALPHANUMERIC, k=length))


def _five_digits() -> int:
    return random.randint(10_000, 99_999)


def project_name() -> str:
    return f"Project_Automation_{_five_digits()}"


def handle_name() -> str:
    return f"@Project_{_five_digits()}"


def list_name() -> str:
    return f"List_Automation_{_five_digits()}"


def campaign_name() -> str:
    """``Campaign_<5 chars>_<epoch ms>``; unique across retries of the same run."""
    return f"Campaign_{random_string(5)}_{int(time.time() * 1000)}"


def group_name(prefix: str = "Automation Group") -> str:
    """``<prefix> <epoch ms>``; group names may contain spaces."""
    return f"{prefix} {int(time.time() * 1000)}"


def tag_name() -> str:
    return f"Automation_tag_{random_string(5)}"


def fake_profile_details(locale: str = "en_US") -> ProfileDetails:
    """Generate a plausible first name, last name and job title."""
    fake = Faker(locale)
    return ProfileDetails(
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        job_title=fake.job(),
    )
