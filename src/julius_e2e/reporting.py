"""Failure artifacts: full-page screenshots and Playwright traces."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from playwright.sync_api import BrowserContext, Page

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def safe_filename(title: str) -> str:
    """Replace characters that are invalid in file names with ``_``."""
    return _UNSAFE_CHARS.sub("_", title)


def reset_directory(path: str | Path) -> Path:
    """Delete *path* if it exists and recreate it empty."""
    directory = Path(path)
    if directory.exists():
        shutil.rmtree(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def capture_failure_screenshot(page: Page, test_name: str, directory: str | Path) -> Path:
    """Save a full-page PNG named after the failing test."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    screenshot_path = directory / f"{safe_filename(test_name)}.png"
    page.screenshot(path=str(screenshot_path), full_page=True)
    logger.info("Screenshot saved: %s", screenshot_path)
    return screenshot_path


def save_trace(context: BrowserContext, test_name: str, directory: str | Path) -> Path:
    """Stop tracing on *context* and write the trace zip for *test_name*."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    trace_path = directory / f"{safe_filename(test_name)}.zip"
    context.tracing.stop(path=str(trace_path))
    logger.info("Trace saved: %s", trace_path)
    return trace_path
