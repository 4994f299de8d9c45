"""
Custom Exception Classes for the Site Backend

This module defines custom exceptions for better error handling and
categorization of failures across the application: configuration problems,
invalid input, per-platform publishing failures and database errors.
"""

from typing import Optional


PLATFORM_LABELS = {
    "substack": "Substack",
    "medium": "Medium",
    "twitter": "Twitter",
    "linkedin": "LinkedIn",
    "resend": "Resend",
}


class SiteBackendError(Exception):
    """Base exception for all site backend errors."""
    pass


# =============================================================================
# Configuration and Input Errors
# =============================================================================

class ConfigurationError(SiteBackendError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


class ValidationError(SiteBackendError):
    """Raised when an operation receives input it cannot act on."""
    pass


# =============================================================================
# Publishing Errors
# =============================================================================

class PublishingError(SiteBackendError):
    """Base exception for failures while publishing to an external platform."""

    def __init__(self, message: str, platform: Optional[str] = None):
        super().__init__(message)
        self.platform = platform


class TransportError(PublishingError):
    """Raised when a request cannot be built or the network call fails."""
    pass


class PlatformError(PublishingError):
    """Raised when a platform answers with a non-success status code."""

    def __init__(self, platform: str, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(
            f"{PLATFORM_LABELS.get(platform, platform)} API error (status {status_code}): {reason}",
            platform=platform,
        )


class SerializationError(PublishingError):
    """Raised when a platform response does not have the expected shape."""
    pass


# =============================================================================
# Database Errors
# =============================================================================

class DatabaseError(SiteBackendError):
    """Base exception for database-related errors."""
    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when database connection fails."""
    pass


class QueryError(DatabaseError):
    """Raised when a database query fails."""
    pass
