"""Custom exceptions for the funding sheet reporter."""


class ReportError(Exception):
    """Base exception for all reporter errors."""


class ConfigurationError(ReportError):
    """Raised when a required secret or credential is missing.

    Always raised before any network call is made.
    """
