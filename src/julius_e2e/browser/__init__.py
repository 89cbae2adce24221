"""Browser automation layer (Playwright sync API).

``session`` builds browsers and contexts from settings, ``navigation``
wraps ``goto``/``reload`` with wait-strategy fallback, and ``helper``
provides the retrying ``ActionHelper`` every page object acts through.
"""
