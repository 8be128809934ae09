"""GitHub API interface (port) for fetching user data.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from typing import List
from github_users.domain.models import UserDetail, UserSummary


class IGitHubUserService(ABC):
    """Abstract interface for GitHub user API operations."""

    @abstractmethod
    async def list_users(self, page_size: int, since: int) -> List[UserSummary]:
        """Fetch one page of users.

        Args:
            page_size: Maximum number of users in the page
            since: Only users with an id greater than this are returned

        Returns:
            Users in the order the API listed them (possibly empty)

        Raises:
            TransportError: When the request fails
            DecodingError: When the response cannot be decoded
        """
        pass

    @abstractmethod
    async def get_user_detail(self, login: str) -> UserDetail:
        """Fetch the profile of a single user.

        Raises:
            TransportError: When the request fails
            DecodingError: When the response cannot be decoded
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
