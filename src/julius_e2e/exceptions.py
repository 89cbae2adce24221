"""Exception hierarchy for the Julius e2e suite."""

from __future__ import annotations


class JuliusE2EError(Exception):
    """Base exception for all suite-specific errors."""


class NavigationError(JuliusE2EError):
    """Raised when a page cannot be reached for a reason retrying will not fix.

    Attributes:
        url: The URL that failed to load.
        reason: Short human-readable cause (``"name not resolved"`` etc.).
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class CredentialsError(JuliusE2EError):
    """Raised when no login credentials can be found."""


class TempValueMissingError(JuliusE2EError):
    """Raised when a test needs a value an earlier test should have saved."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"'{key}' not found in temp data. Run the test that creates it first."
        )


class SelectionError(JuliusE2EError):
    """Raised when a dropdown or modal selection cannot be made or confirmed."""

    def __init__(self, widget: str, value: str) -> None:
        self.widget = widget
        self.value = value
        super().__init__(f"Could not select '{value}' in {widget}")


class VerificationError(JuliusE2EError):
    """Raised by strict verify_* methods when the page shows the wrong text."""

    def __init__(self, what: str, expected: str, actual: str) -> None:
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f'Expected {what}: "{expected}", but got: "{actual}"')


class FormValidationError(JuliusE2EError):
    """Raised when a submitted form shows an error alert or field errors.

    Attributes:
        form: Which form was submitted.
        messages: The error texts the form displayed.
    """

    def __init__(self, form: str, messages: list[str]) -> None:
        self.form = form
        self.messages = messages
        super().__init__(f"{form} rejected: {', '.join(messages) or 'unknown error'}")
