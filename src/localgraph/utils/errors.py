"""
Custom exception classes for Local Graph.
"""

from typing import Any


class LocalGraphError(Exception):
    """Base exception for all Local Graph errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None
    ):
        """Initialize the error with enhanced information.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            suggestions: List of suggested remediation steps
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.error_code = error_code or self.__class__.__name__.upper()
        self.suggestions = suggestions or []
        self.context = context or {}


class ConfigurationError(LocalGraphError):
    """Raised when there is an issue with the application configuration."""
    pass


class ValidationError(LocalGraphError):
    """Raised when input data fails validation."""
    pass


class ServiceError(LocalGraphError):
    """Base exception for errors occurring in service layers."""
    pass


class DocumentNotFoundError(ServiceError):
    """Raised when a note name cannot be resolved to a document in the vault."""
    pass
