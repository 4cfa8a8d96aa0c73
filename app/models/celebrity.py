import math
from pydantic import BaseModel, Field, field_validator
from uuid import uuid4
from typing import Any, Optional

from app.config import (
    DEFAULT_CELEBRITY_NAME,
    DEFAULT_CELEBRITY_REASON,
    DEFAULT_IMAGE_URL,
)


class CelebrityBase(BaseModel):
    """
    Base Pydantic model for a Celebrity.

    score is the running average of every vote (0 = good pole, 1 = evil pole).
    It is stored as-is; layout clamps it when positioning.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display label"
    )

    score: float = Field(
        default=0.5,
        description="Running average score, conceptually in [0, 1]"
    )

    count: int = Field(
        default=1,
        ge=0,
        description="Number of votes folded into score (seed vote included)"
    )

    reason: str = Field(
        default=DEFAULT_CELEBRITY_REASON,
        description="Caption shown on hover"
    )

    image_url: str = Field(
        default=DEFAULT_IMAGE_URL,
        description="Avatar image URL"
    )


class CelebrityCreate(CelebrityBase):
    """
    Model for seeding a new celebrity (out-of-band creation only).
    """

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        min_length=1,
        description="Opaque identifier"
    )

    @field_validator("score")
    @classmethod
    def seed_score_in_range(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("Seed score must be between 0 and 1")
        return value


class CelebrityRecord(CelebrityBase):
    """
    Stored celebrity as returned by the store.
    """

    id: str
    score: Optional[float] = Field(
        default=None,
        description="Running average score; None when the stored value is missing or non-numeric"
    )

    class Config:
        from_attributes = True

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "CelebrityRecord":
        """
        Build a record from a lower-cased store row, filling display defaults
        for missing or malformed fields.
        """
        reason = row.get("reason")
        return cls(
            id=str(row["id"]),
            name=row.get("name") or DEFAULT_CELEBRITY_NAME,
            score=_as_float(row.get("score")),
            count=int(row.get("vote_count", row.get("count")) or 0),
            reason=reason if isinstance(reason, str) else DEFAULT_CELEBRITY_REASON,
            image_url=row.get("image_url") or DEFAULT_IMAGE_URL,
        )


def _as_float(value: Any) -> Optional[float]:
    """Stored scores may come back as Decimal; missing ones are left for layout to default."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(result) else result


class VoteRequest(BaseModel):
    """
    Vote submitted by a visitor as a percentage (0 = good, 100 = evil).
    """

    percent: float = Field(
        ...,
        ge=0,
        le=100,
        allow_inf_nan=False,
        description="Vote as a percentage between 0 and 100"
    )


class VoteResponse(BaseModel):
    """
    Post-vote state of the celebrity.
    """

    id: str
    name: str
    score: float
    count: int
    applied_score: float = Field(..., description="The vote folded in, normalized to [0, 1]")


class CelebrityListResponse(BaseModel):
    items: list[CelebrityRecord]
    total: int
    cache: Optional["CacheInfo"] = None


class CacheInfo(BaseModel):
    """Cache metadata for debugging - shows if Redis is working."""
    hit: bool                          # True = data from cache, False = data from store
    source: str                        # "redis" or "store"
    key: str                           # Redis key used
    latency_ms: float                  # Time taken in milliseconds
    ttl_seconds: int                   # Cache TTL setting
    message: str                       # Human-readable status


CelebrityListResponse.model_rebuild()
