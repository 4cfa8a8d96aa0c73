"""
SQLite Celebrity Repository - Celebrity Timeline
app/repositories/sqlite_repository.py

Local/default store. Each vote runs in a BEGIN IMMEDIATE transaction, which
takes the database write lock before the read so concurrent votes serialize.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, List, Optional

from app.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
    RepositoryException,
)
from app.models.celebrity import CelebrityCreate, CelebrityRecord
from app.repositories.base import CelebrityStore
from app.scoring.aggregation import fold_vote
from app.scoring.utils import MIDPOINT_SCORE, is_numeric

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, score, vote_count, reason, image_url"


class SQLiteCelebrityRepository(CelebrityStore):
    """Celebrity store backed by a SQLite file."""

    TABLE_NAME = "celebrities"

    def __init__(self, db_path: str = "data/celebrities.db", timeout: float = 30.0):
        self.db_path = db_path
        self.timeout = timeout
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Create the schema on first use."""
        with self.get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS celebrities (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    score REAL NOT NULL,
                    vote_count INTEGER NOT NULL DEFAULT 0 CHECK (vote_count >= 0),
                    reason TEXT NOT NULL DEFAULT '',
                    image_url TEXT
                )
            """)
        logger.info(f"SQLite store ready: {self.db_path}")

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Autocommit connection; callers open explicit transactions with
        transaction().
        """
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.timeout, isolation_level=None)
            conn.row_factory = sqlite3.Row
        except sqlite3.Error as e:
            raise DatabaseConnectionException(f"Failed to open SQLite store: {e}")
        try:
            yield conn
        except sqlite3.IntegrityError as e:
            raise DuplicateEntityException(str(e))
        except sqlite3.OperationalError as e:
            # "database is locked" after the busy timeout
            raise DatabaseConnectionException(f"SQLite store unavailable: {e}")
        except sqlite3.Error as e:
            raise RepositoryException(f"Database error: {e}")
        finally:
            conn.close()

    @contextmanager
    def transaction(self, conn: sqlite3.Connection, immediate: bool = False):
        """BEGIN (IMMEDIATE) ... COMMIT, rolling back on any error."""
        conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")

    def list_entities(self) -> List[CelebrityRecord]:
        with self.get_connection() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM celebrities").fetchall()
        return [self.row_to_record(row) for row in rows]

    def get_by_id(self, celebrity_id: str) -> Optional[CelebrityRecord]:
        with self.get_connection() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM celebrities WHERE id = ?",
                (celebrity_id,),
            ).fetchone()
        return self.row_to_record(row) if row else None

    def apply_vote(self, celebrity_id: str, score: float) -> CelebrityRecord:
        with self.get_connection() as conn:
            with self.transaction(conn, immediate=True):
                row = conn.execute(
                    "SELECT score, vote_count FROM celebrities WHERE id = ?",
                    (celebrity_id,),
                ).fetchone()
                if row is None:
                    raise EntityNotFoundException(self.ENTITY_TYPE, celebrity_id)

                # a malformed stored score folds from the midpoint, as layout shows it
                stored = row["score"]
                previous = float(stored) if is_numeric(stored) else MIDPOINT_SCORE
                new_score, new_count = fold_vote(previous, row["vote_count"], score)
                conn.execute(
                    "UPDATE celebrities SET score = ?, vote_count = ? WHERE id = ?",
                    (new_score, new_count, celebrity_id),
                )
                updated = conn.execute(
                    f"SELECT {_COLUMNS} FROM celebrities WHERE id = ?",
                    (celebrity_id,),
                ).fetchone()

        return self.row_to_record(updated)

    def insert(self, celebrity: CelebrityCreate) -> str:
        with self.get_connection() as conn:
            with self.transaction(conn):
                conn.execute(
                    f"INSERT INTO celebrities ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        celebrity.id,
                        celebrity.name,
                        celebrity.score,
                        celebrity.count,
                        celebrity.reason,
                        celebrity.image_url,
                    ),
                )
        return celebrity.id
