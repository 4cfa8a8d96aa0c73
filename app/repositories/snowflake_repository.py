"""
Snowflake Celebrity Repository - Celebrity Timeline
app/repositories/snowflake_repository.py

Celebrity store on Snowflake. A vote is a single UPDATE whose SET expressions
read the pre-update row, so the increment and the average change together.

Table: CELEBRITIES
Columns:
- ID: VARCHAR(36) PRIMARY KEY
- NAME: VARCHAR(255) NOT NULL
- SCORE: FLOAT NOT NULL
- VOTE_COUNT: INT NOT NULL DEFAULT 0
- REASON: VARCHAR(2000)
- IMAGE_URL: VARCHAR(1000)
"""

from contextlib import contextmanager
from typing import Any, Generator, List, Optional

import snowflake.connector
from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, ProgrammingError

from app.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
    RepositoryException,
)
from app.models.celebrity import CelebrityCreate, CelebrityRecord
from app.repositories.base import CelebrityStore
from app.services.snowflake import get_snowflake_connection

_SELECT_COLUMNS = "ID, NAME, SCORE, VOTE_COUNT, REASON, IMAGE_URL"


class SnowflakeCelebrityRepository(CelebrityStore):
    """Repository for celebrity reads and votes on Snowflake."""

    TABLE_NAME = "CELEBRITIES"

    @contextmanager
    def get_connection(self) -> Generator[snowflake.connector.SnowflakeConnection, None, None]:
        """Context manager for Snowflake connections."""
        conn = None
        try:
            conn = get_snowflake_connection()
            yield conn
        except InterfaceError as e:
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}")
        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self, dict_cursor: bool = True) -> Generator[Any, None, None]:
        """Context manager for Snowflake cursors with automatic connection cleanup."""
        with self.get_connection() as conn:
            cursor = conn.cursor(DictCursor) if dict_cursor else conn.cursor()
            try:
                yield cursor
            except ProgrammingError as e:
                error_msg = str(e).upper()
                if "UNIQUE" in error_msg or "DUPLICATE" in error_msg:
                    raise DuplicateEntityException(str(e))
                raise RepositoryException(f"Query error: {e}")
            except DatabaseError as e:
                raise RepositoryException(f"Database error: {e}")
            finally:
                cursor.close()

    def list_entities(self) -> List[CelebrityRecord]:
        sql = f"SELECT {_SELECT_COLUMNS} FROM CELEBRITIES"
        with self.get_cursor() as cursor:
            cursor.execute(sql)
            rows = cursor.fetchall() or []
        return [self.row_to_record(row) for row in rows]

    def get_by_id(self, celebrity_id: str) -> Optional[CelebrityRecord]:
        sql = f"SELECT {_SELECT_COLUMNS} FROM CELEBRITIES WHERE ID = %s"
        with self.get_cursor() as cursor:
            cursor.execute(sql, (celebrity_id,))
            row = cursor.fetchone()
        return self.row_to_record(row) if row else None

    def apply_vote(self, celebrity_id: str, score: float) -> CelebrityRecord:
        """
        Single-statement running-average update inside an explicit transaction;
        the row is read back before COMMIT so the result is this vote's state.
        """
        update_sql = """
            UPDATE CELEBRITIES
            SET SCORE = (SCORE * VOTE_COUNT + %s) / (VOTE_COUNT + 1),
                VOTE_COUNT = VOTE_COUNT + 1
            WHERE ID = %s
        """
        select_sql = f"SELECT {_SELECT_COLUMNS} FROM CELEBRITIES WHERE ID = %s"

        with self.get_cursor() as cursor:
            conn = cursor.connection
            cursor.execute("BEGIN")
            try:
                cursor.execute(update_sql, (score, celebrity_id))
                if cursor.rowcount == 0:
                    raise EntityNotFoundException(self.ENTITY_TYPE, celebrity_id)
                cursor.execute(select_sql, (celebrity_id,))
                row = cursor.fetchone()
            except BaseException:
                conn.rollback()
                raise
            conn.commit()

        return self.row_to_record(row)

    def insert(self, celebrity: CelebrityCreate) -> str:
        sql = """
            INSERT INTO CELEBRITIES (ID, NAME, SCORE, VOTE_COUNT, REASON, IMAGE_URL)
            VALUES (%s, %s, %s, %s, %s, %s)
        """
        with self.get_cursor() as cursor:
            cursor.execute(
                sql,
                (
                    celebrity.id,
                    celebrity.name,
                    celebrity.score,
                    celebrity.count,
                    celebrity.reason,
                    celebrity.image_url,
                ),
            )
            cursor.connection.commit()
        return celebrity.id
