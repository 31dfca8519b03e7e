"""Custom exceptions for snap organizer."""

from typing import List, Optional


class SnapOrganizerError(Exception):
    """Base exception for snap organizer errors."""
    pass


class ConfigurationError(SnapOrganizerError):
    """Raised when an organizer configuration fails validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class HostError(SnapOrganizerError):
    """Raised when the host project rejects an operation in a way the run cannot recover from."""
    pass


class MoveRejectedError(HostError):
    """Raised when the host refuses to move a single item."""
    pass


class NoActiveProjectError(HostError):
    """Raised when there is no open project to organize."""
    pass
