"""Tests for the cache schema script."""
from unittest.mock import MagicMock
import psycopg2
import pytest
from setup_postgres import create_schema


def test_create_schema_creates_cache_tables():
    """Test that only the two cache tables are created, then committed."""
    conn = MagicMock()
    cursor = conn.cursor.return_value

    create_schema(conn)

    statements = [c[0][0] for c in cursor.execute.call_args_list]
    assert len(statements) == 2
    assert "CREATE TABLE IF NOT EXISTS cached_users" in statements[0]
    assert "CREATE TABLE IF NOT EXISTS cached_user_details" in statements[1]
    assert not any("CREATE INDEX" in s for s in statements)
    conn.commit.assert_called_once()
    cursor.close.assert_called_once()


def test_create_schema_rolls_back_on_failure():
    """Test that a failing statement rolls the schema back."""
    conn = MagicMock()
    conn.cursor.return_value.execute.side_effect = psycopg2.ProgrammingError("permission denied")

    with pytest.raises(psycopg2.ProgrammingError):
        create_schema(conn)

    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()
