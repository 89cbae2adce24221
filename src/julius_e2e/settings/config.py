"""Configuration loader for the Julius e2e suite using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (JULIUS_E2E_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("JULIUS_E2E_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "JULIUS_E2E_ENV"
DEFAULT_ENV = "local"
CI_ENV = "ci"

_LOCAL_LAUNCH_ARGS = [
    "--disable-dev-shm-usage",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-web-security",
    "--disable-features=IsolateOrigins,site-per-process",
]


def _resolve_env() -> str:
    explicit = (os.getenv(ENV_VAR_NAME) or "").strip()
    if explicit:
        return explicit
    return CI_ENV if os.getenv("CI") else DEFAULT_ENV


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class AppSettings(BaseSettings):
    """Application under test."""

    model_config = SettingsConfigDict(env_prefix="JULIUS_E2E_APP__")

    base_url: str = "https://app.juliusdev.net"
    login_path: str = "/login"
    title_suffix: str = "Julius"


class BrowserSettings(BaseSettings):
    """Playwright browser and context settings."""

    model_config = SettingsConfigDict(env_prefix="JULIUS_E2E_BROWSER__")

    name: str = "chromium"  # chromium | firefox | webkit
    headless: bool = True
    slow_mo_ms: int = 0
    viewport_width: int = 1280
    viewport_height: int = 720
    action_timeout_ms: int = 30_000
    navigation_timeout_ms: int = 30_000
    expect_timeout_ms: int = 15_000
    launch_args: list[str] = Field(default_factory=lambda: list(_LOCAL_LAUNCH_ARGS))
    record_video: bool = False
    trace_on_failure: bool = True
    slow_factor: int = 3


class HelperSettings(BaseSettings):
    """Retry and wait tuning for ``ActionHelper``."""

    model_config = SettingsConfigDict(env_prefix="JULIUS_E2E_HELPER__")

    attempts: int = 3
    default_timeout_ms: int = 45_000
    attempt_timeout_cap_ms: int = 15_000
    settle_timeout_ms: int = 5_000
    type_delay_ms: int = 100


class DataSettings(BaseSettings):
    """Test data files and the cross-test temp store."""

    model_config = SettingsConfigDict(env_prefix="JULIUS_E2E_DATA__")

    data_dir: str = "data"
    temp_file: str = "data/temp_data.json"


class ResultSettings(BaseSettings):
    """Where failure artifacts are written."""

    model_config = SettingsConfigDict(env_prefix="JULIUS_E2E_RESULTS__")

    output_dir: str = "result"
    screenshot_dir: str = "result/failed-screenshots"
    trace_dir: str = "result/traces"
    video_dir: str = "result/videos"


class RunSettings(BaseSettings):
    """Suite execution."""

    model_config = SettingsConfigDict(env_prefix="JULIUS_E2E_RUN__")

    enabled: bool = False
    retries: int = 1
    test_dir: str = "tests/e2e"


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="JULIUS_E2E_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)
    debug: bool = False
    log_json: bool = False

    app: AppSettings = Field(default_factory=AppSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    helper: HelperSettings = Field(default_factory=HelperSettings)
    data: DataSettings = Field(default_factory=DataSettings)
    results: ResultSettings = Field(default_factory=ResultSettings)
    run: RunSettings = Field(default_factory=RunSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or _resolve_env()).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        merged.setdefault("env", env_name)
        return merged

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Normalize relative paths against project_root."""
        root = self.project_root
        for section, attrs in (
            (self.data, ("data_dir", "temp_file")),
            (self.results, ("output_dir", "screenshot_dir", "trace_dir", "video_dir")),
            (self.run, ("test_dir",)),
        ):
            for attr in attrs:
                value = getattr(section, attr)
                if not Path(value).is_absolute():
                    setattr(section, attr, str(root / value))
        return self

    def login_url(self) -> str:
        """Absolute URL of the login page."""
        return self.app.base_url.rstrip("/") + self.app.login_path

    def page_title(self, name: str) -> str:
        """Browser title the app renders for a named page (``"My Lists | Julius"``)."""
        return f"{name} | {self.app.title_suffix}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
