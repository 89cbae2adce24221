"""Loading app pages.

The Julius app never really goes quiet: analytics beacons and live-update
polling keep connections open, so a ``networkidle`` load can time out on a
page that is perfectly usable. Loads here start from the strongest wait
state and step down through weaker ones on timeout. Connection-level
failures (DNS, refused, TLS) raise ``NavigationError`` straight away since
another attempt would fail the same way.

Page objects address the app by path (``"/lists"``); :func:`app_url` joins
those onto the configured ``base_url``.
"""

from __future__ import annotations

import logging
from typing import Callable, Literal
from urllib.parse import urljoin, urlsplit

from playwright.sync_api import Error as PlaywrightError, Page, Response, TimeoutError as PlaywrightTimeout

from julius_e2e.exceptions import NavigationError

logger = logging.getLogger(__name__)

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]

# Strongest first; a timeout moves on to the next entry.
LOAD_STATES: tuple[WaitUntil, ...] = ("networkidle", "load", "domcontentloaded")

# Browser error text -> NavigationError reason. Chromium reports net::ERR_*,
# Firefox NS_ERROR_*, WebKit plain sentences.
_UNREACHABLE: dict[str, str] = {
    "ERR_NAME_NOT_RESOLVED": "name not resolved",
    "NS_ERROR_UNKNOWN_HOST": "name not resolved",
    "server with the specified hostname could not be found": "name not resolved",
    "ERR_CONNECTION_REFUSED": "connection refused",
    "NS_ERROR_CONNECTION_REFUSED": "connection refused",
    "Could not connect to server": "connection refused",
    "ERR_CONNECTION_RESET": "connection reset",
    "NS_ERROR_NET_RESET": "connection reset",
    "ERR_CONNECTION_CLOSED": "connection closed",
    "ERR_ADDRESS_UNREACHABLE": "address unreachable",
    "ERR_INTERNET_DISCONNECTED": "internet disconnected",
    "NS_ERROR_OFFLINE": "internet disconnected",
    "ERR_SSL_PROTOCOL_ERROR": "ssl protocol error",
    "ERR_CERT_AUTHORITY_INVALID": "cert authority invalid",
    "ERR_CERT_COMMON_NAME_INVALID": "cert common name invalid",
    "SSL_ERROR_BAD_CERT_DOMAIN": "cert common name invalid",
}


def app_url(path: str, base_url: str | None = None) -> str:
    """Absolute URL for an app *path*.

    Absolute URLs, and any path when *base_url* is empty, pass through
    unchanged. Otherwise exactly one slash separates *base_url* and *path*,
    and a path prefix on *base_url* is kept.
    """
    if not base_url or urlsplit(path).scheme:
        return path
    return urljoin(base_url.rstrip("/") + "/", path.lstrip("/"))


def load_states(preferred: WaitUntil) -> list[WaitUntil]:
    """Wait states to try, in order, for a load that asks for *preferred*.

    ``commit`` sits outside the chain; it is tried first and followed by
    the whole chain.
    """
    if preferred in LOAD_STATES:
        return list(LOAD_STATES[LOAD_STATES.index(preferred):])
    return [preferred, *LOAD_STATES]


def unreachable_reason(message: str) -> str | None:
    """The ``NavigationError`` reason for a browser error *message*, if it is fatal."""
    for marker, reason in _UNREACHABLE.items():
        if marker in message:
            return reason
    return None


def resilient_goto(
    page: Page,
    url: str,
    *,
    base_url: str | None = None,
    timeout_ms: int = 30_000,
    wait_until: WaitUntil = "networkidle",
) -> Response | None:
    """Load *url*, weakening the wait state each time a load times out.

    Args:
        page: Page to navigate.
        url: Absolute URL or app path. Paths are resolved with :func:`app_url`
            when *base_url* is given and left to the context ``base_url``
            otherwise.
        base_url: App root the path is relative to.
        timeout_ms: Timeout for each load attempt.
        wait_until: Wait state of the first attempt.

    Returns:
        The main-frame ``Response``, or ``None`` for same-document navigations.

    Raises:
        NavigationError: The host cannot be reached at all.
        PlaywrightTimeout: Every wait state timed out.
    """
    target = app_url(url, base_url)
    return _load(target, lambda state: page.goto(target, wait_until=state, timeout=timeout_ms), wait_until)


def resilient_reload(
    page: Page,
    *,
    timeout_ms: int = 15_000,
    wait_until: WaitUntil = "networkidle",
) -> Response | None:
    """Reload the current page; timeouts and failures as in :func:`resilient_goto`."""
    return _load(page.url, lambda state: page.reload(wait_until=state, timeout=timeout_ms), wait_until)


def wait_for_path(page: Page, fragment: str, *, timeout_ms: int = 5_000) -> bool:
    """Wait until the page URL contains *fragment*.

    Client-side route changes count, so this confirms in-app links that
    never trigger a document load. Returns False on timeout.
    """
    try:
        page.wait_for_url(lambda url: fragment in url, timeout=timeout_ms, wait_until="commit")
        return True
    except PlaywrightTimeout:
        logger.info("URL is still %s after %dms, expected %r in it", page.url, timeout_ms, fragment)
        return False


def _load(
    target: str,
    navigate: Callable[[WaitUntil], Response | None],
    wait_until: WaitUntil,
) -> Response | None:
    timeout: PlaywrightTimeout | None = None
    for state in load_states(wait_until):
        try:
            logger.debug("Loading %s (wait_until=%s)", target, state)
            return navigate(state)
        except PlaywrightTimeout as exc:
            logger.warning("%s did not reach %s, trying a weaker wait state", target, state)
            timeout = exc
        except PlaywrightError as exc:
            reason = unreachable_reason(str(exc))
            if reason is None:
                raise
            logger.warning("%s is unreachable: %s", target, reason)
            raise NavigationError(target, reason) from exc
    raise timeout  # type: ignore[misc]
