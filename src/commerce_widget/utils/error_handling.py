"""Custom exceptions and helpers for consistent user-facing error messages."""

from typing import Iterable, Optional


class AppError(Exception):
    """Base class for application errors."""

    user_message = "An unexpected error occurred. Please try again later."

    def __init__(self, message: Optional[str] = None, status_code: int = 400):
        super().__init__(message or self.user_message)
        self.status_code = status_code


class ConfigurationMissing(AppError):
    """Raised when one or more WooCommerce credentials are not configured."""

    user_message = (
        "WooCommerce settings are not configured. "
        "Please set them in the WooCommerce Settings page."
    )

    def __init__(self, missing: Iterable[str] = ()):
        self.missing = tuple(missing)
        detail = ", ".join(self.missing) or "credentials"
        super().__init__(f"Missing WooCommerce settings: {detail}", status_code=503)


class ParseError(AppError):
    """Raised when a string host message is not valid JSON."""

    user_message = "Failed to process Chatwoot data. Please try again."

    def __init__(self, message: str = "Host message is not valid JSON"):
        super().__init__(message, status_code=422)


class FormatError(AppError):
    """Raised when a host message is neither a string nor an object."""

    user_message = "Failed to process Chatwoot data. Please try again."

    def __init__(self, message: str = "Invalid data format"):
        super().__init__(message, status_code=422)


class ContextTimeout(AppError):
    """Raised when the host does not answer a context request in time."""

    user_message = "No response received from Chatwoot. Please try again."

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"No host context within {timeout_seconds:g}s", status_code=504
        )


class HostRequestFailed(AppError):
    """Raised when the outbound context request cannot be posted."""

    user_message = "Failed to request Chatwoot data. Please try again."

    def __init__(self, message: str = "Could not post context request"):
        super().__init__(message, status_code=502)


class NotFound(AppError):
    """Raised when a search for an email yields no customers."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No customers match {query!r}", status_code=404)

    @property
    def user_message(self) -> str:
        return (
            f"No users found for email: {self.query}. "
            "Please check the email address and try again."
        )


class HttpError(AppError):
    """Raised when the commerce API answers with an error status."""

    def __init__(self, status: int, reason: str = ""):
        self.status = status
        self.reason = reason
        super().__init__(f"Commerce API returned {status} {reason}".strip(), status_code=status)

    @property
    def user_message(self) -> str:
        return (
            f"Error fetching users: {self.status} - {self.reason}. "
            "Please check your WooCommerce settings and try again."
        )


class UnknownError(AppError):
    """Raised when a commerce API call fails without an HTTP status."""

    user_message = (
        "An unexpected error occurred while fetching users. Please try again later."
    )

    def __init__(self, message: str = "Commerce API request failed"):
        super().__init__(message, status_code=500)


class SearchFailed(AppError):
    """Raised when the customer or order lookup of a detail resolution fails."""

    user_message = (
        "Failed to search WooCommerce data. "
        "Please check your settings and try again."
    )

    def __init__(self, message: str = "Customer lookup failed"):
        super().__init__(message, status_code=502)


def to_user_message(error: BaseException) -> str:
    """Convert any exception into the text shown to the agent."""
    if isinstance(error, AppError):
        return error.user_message
    return UnknownError.user_message
