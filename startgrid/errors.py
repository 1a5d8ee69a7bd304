"""
Error taxonomy shared by the grid session, the builders and the API client.
"""

from typing import Optional


class StartGridError(Exception):
    """Base class for all StartGrid errors."""


class ValidationError(StartGridError):
    """A required field is empty or malformed; the dependent action is blocked."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NetworkError(StartGridError):
    """A search or save request failed."""

    def __init__(self, message: str, endpoint: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class ContentParseError(StartGridError):
    """Embedded cell content is not a valid link or dynamic content object."""
