"""Database initialization script.

Creates the tables backing the local user cache.
"""
import sys
import psycopg2
import logging
from github_users.config import load_config


logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def create_schema(conn) -> None:
    """Create database schema.

    Schema design considerations:
    - cached_users keeps one row per GitHub user id; seq records first
      insertion and is the order the list is restored in
    - cached_user_details keeps one row per login
    - cached_at tracks the last write of each row
    - Every statement is idempotent so the script can be re-run
    """
    cursor = conn.cursor()

    try:
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS cached_users (
                seq SERIAL PRIMARY KEY,
                user_id BIGINT NOT NULL,
                login VARCHAR(255) NOT NULL,
                avatar_url TEXT NOT NULL,
                html_url TEXT NOT NULL,
                cached_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                CONSTRAINT cached_users_user_id_unique UNIQUE (user_id)
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS cached_user_details (
                login VARCHAR(255) PRIMARY KEY,
                avatar_url TEXT NOT NULL,
                html_url TEXT NOT NULL,
                location TEXT,
                followers INTEGER NOT NULL DEFAULT 0,
                following INTEGER NOT NULL DEFAULT 0,
                cached_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
        """)

        conn.commit()
        logger.info("Database schema created successfully")

    except psycopg2.Error as e:
        conn.rollback()
        logger.error(f"Error creating schema: {e}")
        raise
    finally:
        cursor.close()


def main():
    """Initialize the database."""
    try:
        config = load_config()
        logger.info(f"Connecting to database {config.postgres_db}...")

        conn = psycopg2.connect(config.connection_string)
        conn.autocommit = False

        create_schema(conn)

        conn.close()
        logger.info("Database initialization completed successfully")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
