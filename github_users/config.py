"""Runtime configuration read from environment variables."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv


@dataclass(frozen=True)
class AppConfig:
    """Settings for the API client, the cache database and logging."""
    github_api_url: str = "https://api.github.com"
    page_size: int = 20
    log_level: str = "INFO"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "github_users"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Build PostgreSQL connection string."""
        return (
            f"host={self.postgres_host} port={self.postgres_port} "
            f"dbname={self.postgres_db} user={self.postgres_user} "
            f"password={self.postgres_password}"
        )


def int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config(load_env_file: bool = True) -> AppConfig:
    """Collect configuration from the environment.

    Args:
        load_env_file: Load a .env (or env) file first, without overriding
            variables that are already set

    Raises:
        ValueError: When a numeric variable is not a valid integer or the
            page size is outside 1..100
    """
    if load_env_file:
        load_dotenv('.env') or load_dotenv('env')

    page_size = int_env("USERS_PAGE_SIZE", 20)
    if not 1 <= page_size <= 100:  # GitHub max is 100
        raise ValueError(f"USERS_PAGE_SIZE must be between 1 and 100, got {page_size}")

    return AppConfig(
        github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
        page_size=page_size,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        postgres_host=os.getenv("POSTGRES_HOST", "localhost"),
        postgres_port=int_env("POSTGRES_PORT", 5432),
        postgres_db=os.getenv("POSTGRES_DB", "github_users"),
        postgres_user=os.getenv("POSTGRES_USER", "postgres"),
        postgres_password=os.getenv("POSTGRES_PASSWORD", "postgres"),
    )
