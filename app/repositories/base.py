"""
Base Repository - Celebrity Timeline
app/repositories/base.py

Store contract shared by every celebrity backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.models.celebrity import CelebrityCreate, CelebrityRecord


class CelebrityStore(ABC):
    """
    One record per celebrity and a single mutating operation.

    apply_vote must be atomic per celebrity: concurrent votes each add exactly
    one to count and one term to the running average. The store does not
    range-check the vote.
    """

    ENTITY_TYPE = "Celebrity"

    @abstractmethod
    def list_entities(self) -> List[CelebrityRecord]:
        """Return every celebrity. No ordering guarantee."""

    @abstractmethod
    def get_by_id(self, celebrity_id: str) -> Optional[CelebrityRecord]:
        """Return one celebrity or None."""

    @abstractmethod
    def apply_vote(self, celebrity_id: str, score: float) -> CelebrityRecord:
        """
        Fold score into the running average and return the post-vote record.

        Raises:
            EntityNotFoundException: celebrity_id does not resolve.
        """

    @abstractmethod
    def insert(self, celebrity: CelebrityCreate) -> str:
        """Create a celebrity (seed data only). Returns its id."""

    def health_check(self) -> str:
        """Short status string for /health."""
        try:
            count = len(self.list_entities())
        except Exception as e:
            error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
            return f"unhealthy: {error_msg}"
        return f"healthy ({count} celebrities)"

    def row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a driver row (possibly uppercase keys) to a lowercase dict."""
        if row is None:
            return {}
        return {k.lower(): v for k, v in dict(row).items()}

    def row_to_record(self, row: Dict[str, Any]) -> CelebrityRecord:
        return CelebrityRecord.from_row(self.row_to_dict(row))
