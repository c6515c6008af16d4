"""
Domain errors raised by the LinkHub services.

Every error carries the HTTP status it maps to, so the API layer can
render any of them with a single exception handler.
"""

from fastapi import status


class LinkHubError(Exception):
    """Base class for all LinkHub errors"""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LinkHubError):
    """Malformed URL, missing field or alias too short. Nothing was changed."""


class ConflictError(LinkHubError):
    """Alias or generated code already taken. Nothing was changed."""


class NotFoundError(LinkHubError):
    """Unknown code, or a code that belongs to another owner"""

    status_code = status.HTTP_404_NOT_FOUND


class ExpiredError(NotFoundError):
    """
    The mapping expired and was deactivated while being resolved.

    Callers see it as a plain NotFoundError.
    """


class OperationError(LinkHubError):
    """Unrecognized bulk operation name"""


class ExhaustedError(LinkHubError):
    """No free short code found within the allowed number of attempts"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
