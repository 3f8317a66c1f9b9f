"""Custom exceptions for BVG departure lookups."""


class DepartureSearchError(Exception):
    """Base exception for departure lookup errors."""

    pass


class NetworkError(DepartureSearchError):
    """Raised when fetching a page or reading its body fails."""

    pass


class ExtractionError(DepartureSearchError):
    """Raised when a page no longer has the expected HTML shape."""

    pass


class ValidationError(DepartureSearchError):
    """Raised when input validation fails."""

    pass
