"""
Domain-specific exceptions for the alert template service.

These exceptions represent input and rendering failures and are mapped
to appropriate HTTP status codes in the API layer.
"""

from typing import Any


class AlertBicepError(Exception):
    """Base exception for all alert template domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AlertBicepError):
    """
    Raised when alert input fails validation.

    Examples:
    - Malformed subscription ID
    - Alert name too short or containing forbidden characters
    - No event type selected

    HTTP Status: 400 Bad Request
    """

    pass


class NotFoundError(AlertBicepError):
    """
    Raised when a requested resource does not exist.

    Examples:
    - Unknown option list kind

    HTTP Status: 404 Not Found
    """

    pass


class OptionDataError(AlertBicepError):
    """
    Raised when an option data file is missing or malformed.

    Examples:
    - services.json not present in the data directory
    - File content is not a non-empty array of {value, label} objects

    HTTP Status: 500 Internal Server Error
    """

    pass


class RenderError(AlertBicepError):
    """
    Raised when a value or request cannot be rendered as Bicep.

    Examples:
    - Value of a type outside the Bicep literal domain
    - Existing action mode without an action group reference

    HTTP Status: 422 Unprocessable Entity
    """

    pass


# HTTP Status Code Mapping
ERROR_STATUS_MAP = {
    ValidationError: 400,
    NotFoundError: 404,
    OptionDataError: 500,
    RenderError: 422,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    return ERROR_STATUS_MAP.get(type(error), 500)
