"""View-model for the paginated, searchable user list."""
import asyncio
import logging
from typing import Callable, List, Optional, Tuple
from github_users.domain.errors import GitHubUsersError, StorageError
from github_users.domain.github_interface import IGitHubUserService
from github_users.domain.repository_interface import IUserRepository
from github_users.domain.models import UserSummary


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


class UserListViewModel:
    """Owns the user list shown to the presentation layer.

    Merges the local cache with network pages, keeps a search filter over
    the merged list, and allows a single list request in flight at a time.

    All methods must be called from the event loop that drives the
    view-model; that loop is the only writer of the list state. Cache
    writes run in a worker thread so the loop never blocks on storage.

    The presentation layer registers ``on_users_updated`` (re-read the
    accessors) and ``on_error`` (human-readable message). The typed error
    behind the latest message is kept in ``last_error``.
    """

    def __init__(
        self,
        service: IGitHubUserService,
        repository: IUserRepository,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_users_updated: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[str], None]] = None
    ):
        """Initialize the view-model and hydrate it from the cache.

        No network request is made here; call fetch_users() to load the
        first page.

        Args:
            service: Remote user service
            repository: Local user cache
            page_size: Number of users requested per page
            on_users_updated: Called after every state change
            on_error: Called with a message when an operation fails
        """
        self._service = service
        self._repository = repository
        self._page_size = page_size
        self.on_users_updated = on_users_updated
        self.on_error = on_error

        self._users: List[UserSummary] = []
        self._filtered_users: List[UserSummary] = []
        self._search_text = ""
        self._is_fetching = False
        self._cursor = 0
        self._last_error: Optional[GitHubUsersError] = None

        self._load_cached_users()

    @property
    def users(self) -> Tuple[UserSummary, ...]:
        return tuple(self._users)

    @property
    def filtered_users(self) -> Tuple[UserSummary, ...]:
        return tuple(self._filtered_users)

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def is_fetching(self) -> bool:
        return self._is_fetching

    @property
    def cursor(self) -> int:
        """Id of the last user appended; the ``since`` of the next page."""
        return self._cursor

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def last_error(self) -> Optional[GitHubUsersError]:
        return self._last_error

    def count(self) -> int:
        """Number of rows to display under the current search."""
        return len(self._visible_users())

    def user_at(self, index: int) -> UserSummary:
        """Return the row at ``index`` of the displayed sequence.

        Raises:
            IndexError: When index is outside 0 <= index < count()
        """
        visible = self._visible_users()
        if not 0 <= index < len(visible):
            raise IndexError(
                f"User index {index} out of range for {len(visible)} users"
            )
        return visible[index]

    async def fetch_users(self) -> None:
        """Fetch the next page and append it to the list.

        Returns immediately, without notifying, while another fetch is
        in flight.
        """
        if self._is_fetching:
            logger.debug("Fetch already in flight, ignoring request")
            return
        self._is_fetching = True

        since = self._cursor
        try:
            new_users = await self._service.list_users(self._page_size, since)
        except GitHubUsersError as e:
            # Released before notifying so the error handler may retry
            self._is_fetching = False
            logger.error(f"Error fetching users since {since}: {e}")
            self._notify_error(e)
            return
        finally:
            self._is_fetching = False

        self._users.extend(new_users)
        if new_users:
            self._cursor = new_users[-1].id
        else:
            logger.info(f"Empty page since id {since}, cursor unchanged")
        self._apply_filter()

        if new_users:
            await self._cache_users(new_users)

        logger.info(
            f"Appended {len(new_users)} users, total {len(self._users)}, "
            f"cursor {self._cursor}"
        )
        self._notify_updated()

    async def load_more_users(self) -> None:
        """Infinite-scroll trigger; same as fetch_users()."""
        await self.fetch_users()

    def set_search_text(self, text: str) -> None:
        self._search_text = text
        self._apply_filter()
        self._notify_updated()

    def _visible_users(self) -> List[UserSummary]:
        return self._filtered_users if self._search_text else self._users

    def _apply_filter(self) -> None:
        needle = self._search_text.casefold()
        if not needle:
            self._filtered_users = list(self._users)
            return
        self._filtered_users = [
            user for user in self._users if needle in user.login.casefold()
        ]

    def _load_cached_users(self) -> None:
        try:
            cached = self._repository.fetch_users()
        except StorageError as e:
            logger.error(f"Failed to load cached users: {e}")
            self._last_error = e
            if self.on_error:
                self.on_error("Failed to load cached users")
            return

        logger.info(f"Loaded {len(cached)} cached users")
        if not cached:
            return

        self._users = list(cached)
        self._cursor = cached[-1].id
        self._apply_filter()
        self._notify_updated()

    async def _cache_users(self, users: List[UserSummary]) -> None:
        # In-memory state is kept even if the write fails
        try:
            await asyncio.to_thread(self._repository.save_users, users)
        except StorageError as e:
            logger.error(f"Failed to cache {len(users)} users: {e}")
            self._last_error = e
            if self.on_error:
                self.on_error("Failed to save users to cache")

    def _notify_updated(self) -> None:
        if self.on_users_updated:
            self.on_users_updated()

    def _notify_error(self, error: GitHubUsersError) -> None:
        self._last_error = error
        if self.on_error:
            self.on_error(str(error))
