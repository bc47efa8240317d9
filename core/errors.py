"""
Error types for calls to the collection endpoint and banner text helpers.
"""
from typing import Optional

# Banner prefixes, one per operation
LOAD_FAILED = "Error loading users"
CREATE_FAILED = "Error creating user"
UPDATE_FAILED = "Error updating user"
DELETE_FAILED = "Error deleting user"


class UserApiError(Exception):
    """Non-success status or transport failure talking to the collection endpoint."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.operation = operation
        self.message = message
        self.status_code = status_code

    def __str__(self):
        return self.message


def describe_failure(prefix: str, exc: Exception) -> str:
    """Human-readable banner text, e.g. 'Error loading users: HTTP error! status: 500'."""
    message = str(exc) or exc.__class__.__name__
    return f"{prefix}: {message}"
