"""Custom exceptions for the session-data client."""

from __future__ import annotations


class F1SessionsError(Exception):
    """Base exception for all f1sessions errors."""


class ProviderConnectionError(F1SessionsError):
    """Raised when a provider cannot be reached after all retries."""


class ProviderTimeoutError(F1SessionsError):
    """Raised when a provider keeps timing out after all retries."""


class ProviderAPIError(F1SessionsError):
    """Raised when a provider keeps rate limiting (HTTP 429) after all retries."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class ProviderValidationError(F1SessionsError):
    """Raised when provider response data fails model validation."""
