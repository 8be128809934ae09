"""GitHub REST API client implementation for the user endpoints."""
import asyncio
import json
import logging
from typing import Any, List, Optional

import aiohttp

from github_users.domain.errors import DecodingError, TransportError
from github_users.domain.github_interface import IGitHubUserService
from github_users.domain.models import UserDetail, UserSummary


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"

_INVALID_LOGIN_CHARS = set("/?#")


class GitHubRestClient(IGitHubUserService):
    """GitHub REST API client for listing users and reading profiles.

    Implements the IGitHubUserService port. Library exceptions never leave
    this class: they are translated to TransportError or DecodingError.
    """

    HEADERS = {
        "Content-Type": "application/json;charset=utf-8",
        "Accept": "application/vnd.github+json",
    }

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize GitHub client.

        Args:
            base_url: API root, without trailing slash
            session: Existing aiohttp session to reuse. When omitted the
                client creates one lazily and closes it in close().
        """
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession(headers=self.HEADERS)
            self._owns_session = True
        return self._session

    def users_url(self) -> str:
        return f"{self._base_url}/users"

    def user_url(self, login: str) -> str:
        """Build the profile URL for a login.

        Raises:
            TransportError: When the login cannot form a valid URL path
        """
        if (
            not login
            or any(ch in _INVALID_LOGIN_CHARS for ch in login)
            or any(ch.isspace() for ch in login)
        ):
            raise TransportError(f"Invalid URL: cannot request user {login!r}")
        return f"{self._base_url}/users/{login}"

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        """Issue a GET request and decode its JSON body.

        Raises:
            TransportError: Connection failure or non-2xx status
            DecodingError: Body is not valid UTF-8 JSON
        """
        session = await self._init_session()

        try:
            async with session.get(url, params=params, headers=self.HEADERS) as response:
                if response.status >= 400:
                    raise TransportError(
                        f"GET {url} failed with status {response.status}: {response.reason}"
                    )
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error requesting {url}: {e!r}")
            raise TransportError(f"GET {url} failed: {e}") from e

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise DecodingError(f"Invalid JSON from {url}: {e}") from e

    async def list_users(self, page_size: int, since: int) -> List[UserSummary]:
        """Fetch one page of users after the given id.

        Args:
            page_size: Value of the per_page query parameter
            since: Last user id already seen

        Returns:
            UserSummary entities in API order
        """
        url = self.users_url()
        payload = await self._get_json(
            url, params={"per_page": str(page_size), "since": str(since)}
        )

        if not isinstance(payload, list):
            raise DecodingError(
                f"Expected a JSON array from {url}, got {type(payload).__name__}"
            )

        users = [UserSummary.from_api(item) for item in payload]
        logger.info(f"Fetched {len(users)} users since id {since}")
        return users

    async def get_user_detail(self, login: str) -> UserDetail:
        """Fetch the profile of a single user."""
        url = self.user_url(login)
        payload = await self._get_json(url)
        detail = UserDetail.from_api(payload)
        logger.info(f"Fetched detail for user {detail.login}")
        return detail

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None
