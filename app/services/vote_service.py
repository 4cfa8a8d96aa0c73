"""
Vote Service - Celebrity Timeline
app/services/vote_service.py

Caller side of the vote contract: validates and normalizes the visitor's
percentage, then hands a [0, 1] score to the store. The store trusts its
input, so nothing out of range may get past submit_vote.
"""

import logging
import math
from typing import Any, List

from app.core.exceptions import InvalidVoteException
from app.models.celebrity import CelebrityRecord
from app.repositories.base import CelebrityStore
from app.scoring.utils import is_numeric, percent_to_score
from app.services.cache import invalidate_celebrity_cache

logger = logging.getLogger(__name__)


def validate_vote_percent(percent: Any) -> float:
    """
    Reject non-numeric, infinite or out-of-range votes.

    Returns:
        The vote as a float in [0, 100].
    """
    if not is_numeric(percent) or math.isinf(float(percent)):
        raise InvalidVoteException(percent)
    value = float(percent)
    if not 0.0 <= value <= 100.0:
        raise InvalidVoteException(percent)
    return value


class VoteService:
    """Validated access to the celebrity store."""

    def __init__(self, store: CelebrityStore):
        self.store = store

    def list_entities(self) -> List[CelebrityRecord]:
        return self.store.list_entities()

    def submit_vote(self, celebrity_id: str, percent: Any) -> CelebrityRecord:
        """
        Fold a 0-100 vote into the celebrity's running score.

        Raises:
            InvalidVoteException: percent is not a number in [0, 100].
            EntityNotFoundException: the celebrity does not exist.
            RepositoryException: any store failure; nothing was written.
        """
        score = percent_to_score(validate_vote_percent(percent))
        try:
            record = self.store.apply_vote(celebrity_id, score)
        except Exception as e:
            logger.warning(f"Vote on {celebrity_id} failed: {e}")
            raise

        invalidate_celebrity_cache(celebrity_id)
        logger.info(
            f"Vote applied to {celebrity_id}: vote={score:.4f} "
            f"score={record.score:.4f} count={record.count}"
        )
        return record
