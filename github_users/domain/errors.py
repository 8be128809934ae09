"""Error taxonomy shared by the ports and the view-models.

Adapters translate library exceptions into these so that callers can branch
on ``kind`` instead of parsing messages.
"""
from enum import Enum


class ErrorKind(Enum):
    """Category of a failure surfaced to the presentation layer."""
    TRANSPORT = "transport"
    DECODING = "decoding"
    STORAGE = "storage"


class GitHubUsersError(Exception):
    """Base class for every error raised by the ports."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(GitHubUsersError):
    """Network or service failure, including invalid URL construction."""
    kind = ErrorKind.TRANSPORT


class DecodingError(GitHubUsersError):
    """Payload did not match the expected shape."""
    kind = ErrorKind.DECODING


class StorageError(GitHubUsersError):
    """Local repository read or write failure."""
    kind = ErrorKind.STORAGE
