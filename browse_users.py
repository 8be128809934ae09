"""Main entry point for browsing GitHub users from the command line.

Wires the REST client and the PostgreSQL cache into the view-models and
logs what a list screen and a detail screen would display.
"""
import asyncio
import os
import sys
import logging
from github_users.config import int_env, load_config
from github_users.infrastructure.github_client import GitHubRestClient
from github_users.infrastructure.postgres_repository import PostgresUserRepository
from github_users.application.user_list_view_model import UserListViewModel
from github_users.application.user_detail_view_model import UserDetailViewModel


logger = logging.getLogger(__name__)


def _env_truthy(value) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


async def main():
    """Fetch and display users."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config()
        pages = int_env("BROWSE_PAGES", 1)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)
    search_text = os.getenv("SEARCH_TEXT", "")
    detail_login = os.getenv("DETAIL_LOGIN")

    repository = PostgresUserRepository(config.connection_string)
    client = GitHubRestClient(config.github_api_url)

    try:
        if _env_truthy(os.getenv("CLEAR_CACHE")):
            repository.clear_all_data()

        list_vm = UserListViewModel(
            client,
            repository,
            page_size=config.page_size,
            on_users_updated=lambda: logger.info("User list updated"),
            on_error=lambda message: logger.error(f"User list error: {message}"),
        )
        logger.info(f"Starting with {list_vm.count()} cached users, cursor {list_vm.cursor}")

        for _ in range(pages):
            await list_vm.load_more_users()

        if search_text:
            list_vm.set_search_text(search_text)

        logger.info("=" * 50)
        logger.info(f"Users ({list_vm.count()} shown):")
        for index in range(list_vm.count()):
            user = list_vm.user_at(index)
            logger.info(f"  #{user.id:<8} {user.login:<30} {user.profile_url}")
        logger.info("=" * 50)

        if detail_login:
            detail_vm = UserDetailViewModel(
                client,
                repository,
                on_error=lambda message: logger.error(f"User detail error: {message}"),
            )
            await detail_vm.fetch_user_detail(detail_login)
            if detail_vm.current_detail is not None:
                logger.info(f"Login: {detail_vm.login}")
                logger.info(f"  Location: {detail_vm.location}")
                logger.info(f"  Followers: {detail_vm.followers}")
                logger.info(f"  Following: {detail_vm.following}")
                logger.info(f"  Profile: {detail_vm.profile_url}")

    except Exception as e:
        logger.error(f"Browsing failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        await client.close()
        repository.close()


if __name__ == "__main__":
    asyncio.run(main())
