"""Repository interface (port) for the local user cache.

This is the port in hexagonal architecture that the infrastructure layer implements.
Implementations must be safe to call from several threads; they own the
serialization of writes to their backing store.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from github_users.domain.models import UserDetail, UserSummary


class IUserRepository(ABC):
    """Abstract interface for cached user storage."""

    @abstractmethod
    def save_users(self, users: List[UserSummary]) -> None:
        """Save or update user summaries.

        Summaries are keyed by id. Re-saving an id updates the record in
        place without changing its position in the persisted order.

        Raises:
            StorageError: When the write fails
        """
        pass

    @abstractmethod
    def fetch_users(self) -> List[UserSummary]:
        """Get every cached summary in persisted (first insertion) order.

        Records with missing or malformed fields are skipped.

        Raises:
            StorageError: When the read fails
        """
        pass

    @abstractmethod
    def save_user_detail(self, detail: UserDetail) -> None:
        """Save or replace the detail record for ``detail.login``.

        Raises:
            StorageError: When the write fails
        """
        pass

    @abstractmethod
    def fetch_user_detail(self, login: str) -> Optional[UserDetail]:
        """Get the cached detail for a login, or None if absent or malformed.

        Raises:
            StorageError: When the read fails
        """
        pass

    @abstractmethod
    def clear_all_data(self) -> None:
        """Delete every cached summary and detail record."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close any open connections."""
        pass
