"""
Custom exceptions for QBox auth library.
"""


class QBoxAuthError(Exception):
    """Base exception for QBox auth errors."""
    pass


class BodyReadError(QBoxAuthError):
    """Raised when a request body cannot be read without consuming it."""
    pass


class ConfigurationError(QBoxAuthError):
    """Raised when signer configuration is invalid."""
    pass
