"""
Domain exceptions raised by the service and storage layers.

The ``exceptions_views`` blueprint turns them into JSON error responses.
"""

from http import HTTPStatus
from typing import Dict, List, Optional


class FilmorateException(Exception):
    """
    Base exception for every error the API reports to a client.

    Attributes:
        message: human-readable description
        status_code: HTTP status returned to the client
    """

    def __init__(
        self, message: str, status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    ):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict:
        return {"error": self.message}


class NotFoundException(FilmorateException):
    """A referenced entity (or sort key) does not exist."""

    def __init__(self, message: str):
        super().__init__(message, HTTPStatus.NOT_FOUND)


class ValidationFailure(FilmorateException):
    """Malformed input caught before a service method runs."""

    def __init__(
        self,
        errors: Dict[str, List[str]],
        message: Optional[str] = None,
    ):
        self.errors = errors
        super().__init__(message or "Validation failed", HTTPStatus.BAD_REQUEST)

    def to_dict(self) -> Dict:
        return {"error": self.message, "errors": self.errors}
