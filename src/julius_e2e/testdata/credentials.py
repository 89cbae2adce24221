"""Login credentials for the suite.

The valid user comes from ``LOGIN_EMAIL`` / ``LOGIN_PASSWORD`` (CI secrets)
and falls back to ``data/login.json``. The invalid user only needs to be
rejected by the app, so a fixed pair backs up the data file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from julius_e2e.exceptions import CredentialsError
from julius_e2e.testdata.models import LoginData, UserCredentials, data_path, load_json

logger = logging.getLogger(__name__)

EMAIL_ENV = "LOGIN_EMAIL"
PASSWORD_ENV = "LOGIN_PASSWORD"

_FALLBACK_INVALID_USER = UserCredentials(email="invalid@triller.co", password="wrongpassword")


def _login_file(data_dir: str | Path | None) -> LoginData | None:
    path = data_path("login.json", data_dir)
    if not path.is_file():
        return None
    try:
        return load_json(path, LoginData)
    except (OSError, ValidationError) as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return None


def valid_user(data_dir: str | Path | None = None) -> UserCredentials:
    """Credentials of the account the suite signs in with.

    Raises:
        CredentialsError: When neither the env vars nor the data file provide them.
    """
    email = os.getenv(EMAIL_ENV, "").strip()
    password = os.getenv(PASSWORD_ENV, "")
    if email and password:
        return UserCredentials(email=email, password=password)

    data = _login_file(data_dir)
    if data and data.valid_user:
        return data.valid_user

    raise CredentialsError(
        f"No login credentials: set {EMAIL_ENV} and {PASSWORD_ENV}, or add validUser to data/login.json"
    )


def invalid_user(data_dir: str | Path | None = None) -> UserCredentials:
    """Credentials the app must reject."""
    data = _login_file(data_dir)
    if data and data.invalid_user:
        return data.invalid_user
    return _FALLBACK_INVALID_USER
