"""In-memory repository implementation for tests and throwaway sessions."""
import logging
import threading
from typing import Dict, List, Optional
from github_users.domain.repository_interface import IUserRepository
from github_users.domain.models import UserDetail, UserSummary


logger = logging.getLogger(__name__)


class InMemoryUserRepository(IUserRepository):
    """Dictionary-backed user cache with the same keying as the SQL store.

    Summaries are keyed by id; dict insertion order gives the persisted
    order, and updating an existing key keeps its position.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[int, UserSummary] = {}
        self._details: Dict[str, UserDetail] = {}

    def save_users(self, users: List[UserSummary]) -> None:
        with self._lock:
            for user in users:
                self._users[user.id] = user
        logger.debug(f"Saved {len(users)} users in memory")

    def fetch_users(self) -> List[UserSummary]:
        with self._lock:
            return list(self._users.values())

    def save_user_detail(self, detail: UserDetail) -> None:
        with self._lock:
            self._details[detail.login] = detail

    def fetch_user_detail(self, login: str) -> Optional[UserDetail]:
        with self._lock:
            return self._details.get(login)

    def clear_all_data(self) -> None:
        with self._lock:
            self._users.clear()
            self._details.clear()

    def close(self) -> None:
        pass
