"""Fakes shared by the view-model tests."""
import asyncio
import threading
from typing import Dict, List, Optional
from github_users.domain.errors import StorageError
from github_users.domain.github_interface import IGitHubUserService
from github_users.domain.models import UserDetail, UserSummary
from github_users.infrastructure.memory_repository import InMemoryUserRepository


def make_user(user_id: int, login: str) -> UserSummary:
    return UserSummary(
        id=user_id,
        login=login,
        avatar_url=f"https://avatars.githubusercontent.com/u/{user_id}",
        profile_url=f"https://github.com/{login}",
    )


def make_detail(login: str, location: Optional[str] = "Berlin") -> UserDetail:
    return UserDetail(
        login=login,
        avatar_url=f"https://avatars.githubusercontent.com/{login}",
        profile_url=f"https://github.com/{login}",
        location=location,
        followers=10,
        following=3,
    )


class FakeGitHubService(IGitHubUserService):
    """Scripted remote service.

    ``pages`` is consumed in order; an entry that is an exception is raised.
    When ``gate`` is set, list_users waits for it before answering.
    """

    def __init__(self):
        self.pages: List = []
        self.details: Dict[str, UserDetail] = {}
        self.detail_error: Optional[Exception] = None
        self.list_calls: List[tuple] = []
        self.detail_calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None

    async def list_users(self, page_size, since):
        self.list_calls.append((page_size, since))
        if self.gate is not None:
            await self.gate.wait()
        result = self.pages.pop(0) if self.pages else []
        if isinstance(result, Exception):
            raise result
        return list(result)

    async def get_user_detail(self, login):
        self.detail_calls.append(login)
        if self.detail_error is not None:
            raise self.detail_error
        return self.details[login]

    async def close(self):
        pass


class RecordingRepository(InMemoryUserRepository):
    """In-memory cache that records writes and can be told to fail."""

    def __init__(self):
        super().__init__()
        self.saved_batches: List[List[UserSummary]] = []
        self.saved_details: List[UserDetail] = []
        self.fail_reads = False
        self.fail_writes = False
        self.detail_read_threads: List[int] = []

    def save_users(self, users):
        self.saved_batches.append(list(users))
        if self.fail_writes:
            raise StorageError("disk full")
        super().save_users(users)

    def fetch_users(self):
        if self.fail_reads:
            raise StorageError("database is locked")
        return super().fetch_users()

    def save_user_detail(self, detail):
        self.saved_details.append(detail)
        if self.fail_writes:
            raise StorageError("disk full")
        super().save_user_detail(detail)

    def fetch_user_detail(self, login):
        self.detail_read_threads.append(threading.get_ident())
        if self.fail_reads:
            raise StorageError("database is locked")
        return super().fetch_user_detail(login)


class Events:
    """Collects view-model notifications."""

    def __init__(self):
        self.updates = 0
        self.errors: List[str] = []

    def updated(self):
        self.updates += 1

    def error(self, message):
        self.errors.append(message)
