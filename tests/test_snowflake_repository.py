# tests/test_snowflake_repository.py

"""
Snowflake Store Tests - SQL and transaction handling against a mocked connection
"""

from unittest.mock import MagicMock, patch

import pytest
from snowflake.connector.errors import InterfaceError, ProgrammingError

from app.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
)
from app.models.celebrity import CelebrityCreate
from app.repositories.snowflake_repository import SnowflakeCelebrityRepository

ROBIN_ROW = {
    "ID": "robin",
    "NAME": "Robin",
    "SCORE": 0.6,
    "VOTE_COUNT": 3,
    "REASON": "Mostly good",
    "IMAGE_URL": None,
}


@pytest.fixture
def connection():
    conn = MagicMock()
    cursor = MagicMock()
    cursor.connection = conn
    conn.cursor.return_value = cursor
    with patch(
        "app.repositories.snowflake_repository.get_snowflake_connection",
        return_value=conn,
    ):
        yield conn


@pytest.fixture
def cursor(connection):
    return connection.cursor.return_value


@pytest.fixture
def repo():
    return SnowflakeCelebrityRepository()


class TestReads:

    def test_list_lowercases_columns(self, repo, cursor, connection):
        cursor.fetchall.return_value = [ROBIN_ROW]
        records = repo.list_entities()
        assert len(records) == 1
        assert records[0].id == "robin"
        assert records[0].count == 3
        cursor.close.assert_called_once()
        connection.close.assert_called_once()

    def test_get_by_id_not_found(self, repo, cursor):
        cursor.fetchone.return_value = None
        assert repo.get_by_id("ghost") is None
        sql, params = cursor.execute.call_args.args
        assert "WHERE ID = %s" in sql
        assert params == ("ghost",)


class TestApplyVote:

    def test_single_update_in_transaction(self, repo, cursor, connection):
        cursor.rowcount = 1
        cursor.fetchone.return_value = ROBIN_ROW

        record = repo.apply_vote("robin", 1.0)

        assert record.score == pytest.approx(0.6)
        assert record.count == 3
        statements = [c.args[0].strip() for c in cursor.execute.call_args_list]
        assert statements[0] == "BEGIN"
        assert statements[1].startswith("UPDATE CELEBRITIES")
        assert "VOTE_COUNT = VOTE_COUNT + 1" in statements[1]
        assert cursor.execute.call_args_list[1].args[1] == (1.0, "robin")
        connection.commit.assert_called_once()
        connection.rollback.assert_not_called()

    def test_missing_row_rolls_back(self, repo, cursor, connection):
        cursor.rowcount = 0
        with pytest.raises(EntityNotFoundException):
            repo.apply_vote("ghost", 0.5)
        connection.rollback.assert_called_once()
        connection.commit.assert_not_called()


class TestErrors:

    def test_connect_failure(self, repo):
        with patch(
            "app.repositories.snowflake_repository.get_snowflake_connection",
            side_effect=InterfaceError(msg="network down"),
        ):
            with pytest.raises(DatabaseConnectionException):
                repo.list_entities()

    def test_duplicate_insert(self, repo, cursor):
        cursor.execute.side_effect = ProgrammingError(msg="Duplicate key value violates UNIQUE constraint")
        with pytest.raises(DuplicateEntityException):
            repo.insert(CelebrityCreate(id="robin", name="Robin"))

    def test_health_check_reports_failure(self, repo):
        with patch(
            "app.repositories.snowflake_repository.get_snowflake_connection",
            side_effect=InterfaceError(msg="network down"),
        ):
            assert repo.health_check().startswith("unhealthy")
