# app/scoring/aggregation.py
"""
Running-Average Vote Aggregation
---------------------------------
Folds one vote into a celebrity's running score without keeping vote history.

Formula:
    new_count = count + 1
    new_score = (score × count + vote) / new_count

The seed (score, count) pair counts as `count` prior votes, so the result is
always the mean of every vote ever applied.
"""
import structlog
from typing import Tuple

logger = structlog.get_logger(__name__)


def fold_vote(score: float, count: int, vote: float) -> Tuple[float, int]:
    """
    Args:
        score: Current running average.
        count: Votes already folded into score (>= 0).
        vote:  New vote on the same scale as score. Not range-checked here.

    Returns:
        (new_score, new_count)
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    new_count = count + 1
    new_score = (score * count + vote) / new_count

    logger.debug(
        "vote_folded",
        previous_score=score,
        previous_count=count,
        vote=vote,
        new_score=new_score,
        new_count=new_count,
    )
    return new_score, new_count
