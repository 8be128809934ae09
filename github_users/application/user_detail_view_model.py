"""View-model for a single user's profile."""
import asyncio
import logging
from typing import Callable, Optional
from github_users.domain.errors import GitHubUsersError, StorageError
from github_users.domain.github_interface import IGitHubUserService
from github_users.domain.repository_interface import IUserRepository
from github_users.domain.models import UserDetail


logger = logging.getLogger(__name__)


class UserDetailViewModel:
    """Cache-first loader for one user's detail.

    A cached record is authoritative: once a login is cached it is never
    requested from the network again.
    """

    def __init__(
        self,
        service: IGitHubUserService,
        repository: IUserRepository,
        *,
        on_user_detail_updated: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[str], None]] = None
    ):
        self._service = service
        self._repository = repository
        self.on_user_detail_updated = on_user_detail_updated
        self.on_error = on_error
        self._current_detail: Optional[UserDetail] = None
        self._last_error: Optional[GitHubUsersError] = None

    @property
    def current_detail(self) -> Optional[UserDetail]:
        return self._current_detail

    @property
    def last_error(self) -> Optional[GitHubUsersError]:
        return self._last_error

    async def fetch_user_detail(self, login: str) -> None:
        """Load the detail for ``login`` from the cache, else the network.

        On network failure the previous detail is kept and on_error fires.
        """
        try:
            cached = await asyncio.to_thread(self._repository.fetch_user_detail, login)
        except StorageError as e:
            logger.warning(f"Cache lookup for {login} failed, using network: {e}")
            cached = None

        if cached is not None:
            logger.info(f"Serving detail for {login} from cache")
            self._current_detail = cached
            self._notify_updated()
            return

        try:
            detail = await self._service.get_user_detail(login)
        except GitHubUsersError as e:
            logger.error(f"Error fetching detail for {login}: {e}")
            self._last_error = e
            if self.on_error:
                self.on_error(str(e))
            return

        self._current_detail = detail
        try:
            await asyncio.to_thread(self._repository.save_user_detail, detail)
        except StorageError as e:
            logger.error(f"Failed to cache detail for {login}: {e}")
            self._last_error = e
            if self.on_error:
                self.on_error("Failed to save user detail to cache")
        self._notify_updated()

    @property
    def login(self) -> str:
        return self._current_detail.login if self._current_detail else ""

    @property
    def avatar_url(self) -> Optional[str]:
        return self._current_detail.avatar_url if self._current_detail else None

    @property
    def profile_url(self) -> Optional[str]:
        return self._current_detail.profile_url if self._current_detail else None

    @property
    def location(self) -> str:
        if self._current_detail and self._current_detail.location is not None:
            return self._current_detail.location
        return "N/A"

    @property
    def followers(self) -> int:
        return self._current_detail.followers if self._current_detail else 0

    @property
    def following(self) -> int:
        return self._current_detail.following if self._current_detail else 0

    def _notify_updated(self) -> None:
        if self.on_user_detail_updated:
            self.on_user_detail_updated()
