"""Julius end-to-end suite: page objects and browser helpers for the Julius web app."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("julius-e2e")
except Exception:
    __version__ = "0.0.0"
