"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class SpotifetchError(Exception):
    """Base exception for all application-specific errors."""


class InvalidInputError(SpotifetchError):
    """Raised when the submitted text is empty or not text at all."""


class ValidationFailedError(SpotifetchError):
    """Raised when a well-formed link does not point to a single Spotify track."""


class TrackLookupError(SpotifetchError):
    """
    Base class for failures reported by the lookup service.

    These are returned as values by the lookup client rather than raised out of it.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(TrackLookupError):
    """Raised when the lookup service answers with something that is not JSON."""

    def __init__(self, status_code: int):
        super().__init__(
            f"The API returned an unexpected response (Status: {status_code}). "
            "Please try again later.",
            status_code=status_code,
        )


class ServiceError(TrackLookupError):
    """Raised when the lookup service reports an HTTP failure or is unreachable."""


class NotResolvableError(TrackLookupError):
    """Raised when the service answered but could not produce a download link."""


class ClipboardUnavailableError(SpotifetchError):
    """Raised when the system clipboard cannot be read."""


class ConfigurationError(SpotifetchError):
    """Raised for issues related to configuration loading or validation."""
