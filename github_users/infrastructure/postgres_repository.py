"""PostgreSQL repository implementation for the local user cache."""
import logging
import threading
from typing import List, Optional
import psycopg2
from psycopg2.extras import execute_values
from github_users.domain.errors import DecodingError, StorageError
from github_users.domain.repository_interface import IUserRepository
from github_users.domain.models import UserDetail, UserSummary


logger = logging.getLogger(__name__)


class PostgresUserRepository(IUserRepository):
    """PostgreSQL implementation of the user cache.

    Uses UPSERT operations so re-saving a user never duplicates a row.
    ``cached_users.seq`` records first insertion and defines the persisted
    order. A single connection is shared, so every statement runs under a
    lock; the view-models call in from worker threads.
    """

    def __init__(self, connection_string: str):
        """Initialize PostgreSQL connection.

        Args:
            connection_string: PostgreSQL connection string

        Raises:
            StorageError: When the database is unreachable
        """
        self._connection_string = connection_string
        self._lock = threading.Lock()
        try:
            self._conn = psycopg2.connect(connection_string)
        except psycopg2.Error as e:
            logger.error(f"Error connecting to PostgreSQL: {e}")
            raise StorageError(f"Could not connect to the user cache: {e}") from e
        self._conn.autocommit = False
        logger.info("Connected to PostgreSQL database")

    def save_users(self, users: List[UserSummary]) -> None:
        """Save or update user summaries using a single bulk UPSERT.

        Args:
            users: UserSummary entities to persist
        """
        if not users:
            return

        # ON CONFLICT cannot touch the same row twice in one statement
        unique = {user.id: user for user in users}
        # Column names follow the wire names
        rows = [user.to_api() for user in unique.values()]
        values = [
            (row["id"], row["login"], row["avatar_url"], row["html_url"])
            for row in rows
        ]

        query = """
            INSERT INTO cached_users (user_id, login, avatar_url, html_url, cached_at)
            VALUES %s
            ON CONFLICT (user_id)
            DO UPDATE SET
                login = EXCLUDED.login,
                avatar_url = EXCLUDED.avatar_url,
                html_url = EXCLUDED.html_url,
                cached_at = CURRENT_TIMESTAMP
        """

        with self._lock:
            cursor = self._conn.cursor()
            try:
                execute_values(
                    cursor,
                    query,
                    values,
                    template="(%s, %s, %s, %s, CURRENT_TIMESTAMP)"
                )
                self._conn.commit()
                logger.info(f"Saved {len(values)} users to cache")
            except psycopg2.Error as e:
                self._conn.rollback()
                logger.error(f"Error saving users: {e}")
                raise StorageError(f"Failed to save users: {e}") from e
            finally:
                cursor.close()

    def fetch_users(self) -> List[UserSummary]:
        """Get every cached user in insertion order.

        Returns:
            UserSummary entities; malformed rows are skipped
        """
        with self._lock:
            cursor = self._conn.cursor()
            try:
                cursor.execute(
                    "SELECT user_id, login, avatar_url, html_url "
                    "FROM cached_users ORDER BY seq"
                )
                rows = cursor.fetchall()
                self._conn.commit()
            except psycopg2.Error as e:
                self._conn.rollback()
                logger.error(f"Error fetching cached users: {e}")
                raise StorageError(f"Failed to fetch cached users: {e}") from e
            finally:
                cursor.close()

        users = []
        for user_id, login, avatar_url, html_url in rows:
            try:
                users.append(UserSummary.from_api({
                    "id": user_id,
                    "login": login,
                    "avatar_url": avatar_url,
                    "html_url": html_url,
                }))
            except DecodingError as e:
                logger.warning(f"Skipping malformed cached user {user_id}: {e}")
        return users

    def save_user_detail(self, detail: UserDetail) -> None:
        """Save or replace the cached detail for a login."""
        query = """
            INSERT INTO cached_user_details
                (login, avatar_url, html_url, location, followers, following, cached_at)
            VALUES (%(login)s, %(avatar_url)s, %(html_url)s, %(location)s,
                    %(followers)s, %(following)s, CURRENT_TIMESTAMP)
            ON CONFLICT (login)
            DO UPDATE SET
                avatar_url = EXCLUDED.avatar_url,
                html_url = EXCLUDED.html_url,
                location = EXCLUDED.location,
                followers = EXCLUDED.followers,
                following = EXCLUDED.following,
                cached_at = CURRENT_TIMESTAMP
        """

        with self._lock:
            cursor = self._conn.cursor()
            try:
                cursor.execute(query, detail.to_api())
                self._conn.commit()
                logger.info(f"Saved detail for user {detail.login} to cache")
            except psycopg2.Error as e:
                self._conn.rollback()
                logger.error(f"Error saving detail for {detail.login}: {e}")
                raise StorageError(f"Failed to save user detail: {e}") from e
            finally:
                cursor.close()

    def fetch_user_detail(self, login: str) -> Optional[UserDetail]:
        """Get the cached detail for a login.

        Returns:
            The detail, or None when absent or malformed
        """
        with self._lock:
            cursor = self._conn.cursor()
            try:
                cursor.execute(
                    "SELECT login, avatar_url, html_url, location, followers, following "
                    "FROM cached_user_details WHERE login = %s",
                    (login,)
                )
                row = cursor.fetchone()
                self._conn.commit()
            except psycopg2.Error as e:
                self._conn.rollback()
                logger.error(f"Error fetching cached detail for {login}: {e}")
                raise StorageError(f"Failed to fetch user detail: {e}") from e
            finally:
                cursor.close()

        if row is None:
            return None

        login, avatar_url, html_url, location, followers, following = row
        try:
            return UserDetail.from_api({
                "login": login,
                "avatar_url": avatar_url,
                "html_url": html_url,
                "location": location,
                "followers": followers,
                "following": following,
            })
        except DecodingError as e:
            logger.warning(f"Ignoring malformed cached detail for {login}: {e}")
            return None

    def clear_all_data(self) -> None:
        """Delete every cached user and detail record."""
        with self._lock:
            cursor = self._conn.cursor()
            try:
                cursor.execute("DELETE FROM cached_users")
                cursor.execute("DELETE FROM cached_user_details")
                self._conn.commit()
                logger.info("Cleared user cache")
            except psycopg2.Error as e:
                self._conn.rollback()
                logger.error(f"Error clearing cache: {e}")
                raise StorageError(f"Failed to clear cache: {e}") from e
            finally:
                cursor.close()

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            logger.info("Closed PostgreSQL connection")
