"""Browser and context construction from settings.

Usage::

    from playwright.sync_api import sync_playwright
    from julius_e2e.browser.session import launch_browser, new_context

    with sync_playwright() as pw:
        browser = launch_browser(pw, settings)
        context = new_context(browser, settings)
        page = context.new_page()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from playwright.sync_api import Browser, BrowserContext, Playwright, expect

from julius_e2e.settings.config import Settings

logger = logging.getLogger(__name__)

_BROWSER_NAMES = ("chromium", "firefox", "webkit")


@dataclass
class BrowserProfile:
    """All Playwright launch + context arguments for a test session."""

    # Arguments for pw.<browser>.launch()
    launch_args: dict[str, Any] = field(default_factory=dict)

    # Arguments for browser.new_context()
    context_args: dict[str, Any] = field(default_factory=dict)


def build_browser_profile(settings: Settings) -> BrowserProfile:
    """Build a ``BrowserProfile`` from the ``browser`` and ``app`` sections."""
    cfg = settings.browser
    profile = BrowserProfile()

    profile.launch_args["headless"] = cfg.headless
    if cfg.slow_mo_ms:
        profile.launch_args["slow_mo"] = cfg.slow_mo_ms
    # Chromium-only flags; firefox and webkit reject them.
    if cfg.launch_args and cfg.name.lower() == "chromium":
        profile.launch_args["args"] = list(cfg.launch_args)

    ctx = profile.context_args
    ctx["base_url"] = settings.app.base_url
    ctx["viewport"] = {"width": cfg.viewport_width, "height": cfg.viewport_height}
    if cfg.record_video:
        ctx["record_video_dir"] = settings.results.video_dir

    return profile


def launch_browser(playwright: Playwright, settings: Settings) -> Browser:
    """Launch the browser named by ``settings.browser.name``.

    Raises:
        ValueError: For a name other than chromium, firefox or webkit.
    """
    name = settings.browser.name.lower()
    if name not in _BROWSER_NAMES:
        raise ValueError(f"Unknown browser '{settings.browser.name}'. Expected one of: {', '.join(_BROWSER_NAMES)}")

    profile = build_browser_profile(settings)
    logger.info("Launching %s (headless=%s)", name, profile.launch_args["headless"])
    return getattr(playwright, name).launch(**profile.launch_args)


def new_context(browser: Browser, settings: Settings, *, slow: bool = False) -> BrowserContext:
    """Open a fresh context with the configured default timeouts.

    Slow tests get every timeout multiplied by ``browser.slow_factor``.
    """
    cfg = settings.browser
    factor = cfg.slow_factor if slow else 1

    context = browser.new_context(**build_browser_profile(settings).context_args)
    context.set_default_timeout(cfg.action_timeout_ms * factor)
    context.set_default_navigation_timeout(cfg.navigation_timeout_ms * factor)
    return context


def configure_expect(settings: Settings) -> None:
    """Apply the assertion timeout to Playwright's ``expect``."""
    expect.set_options(timeout=settings.browser.expect_timeout_ms)
