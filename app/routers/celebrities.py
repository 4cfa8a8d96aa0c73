"""
Celebrity Router - Celebrity Timeline
app/routers/celebrities.py

Celebrity listing and voting with Redis caching.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.core.dependencies import get_celebrity_repository, get_vote_service
from app.core.exceptions import (
    DatabaseConnectionException,
    EntityNotFoundException,
    InvalidVoteException,
    RepositoryException,
)
from app.models.celebrity import (
    CacheInfo,
    CelebrityListResponse,
    CelebrityRecord,
    VoteRequest,
    VoteResponse,
)
from app.repositories.base import CelebrityStore
from app.scoring.utils import percent_to_score
from app.services.cache import (
    CACHE_KEY_CELEBRITY_LIST,
    TTL_CELEBRITIES,
    get_cache,
    get_celebrity_cache_key,
)
from app.services.vote_service import VoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Celebrities"])



#  Validation Error Messages


FIELD_MESSAGES = {
    "percent": {
        "missing": "Vote percent is required",
        "less_than_equal": "Vote percent must be between 0 and 100",
        "greater_than_equal": "Vote percent must be between 0 and 100",
        "finite_number": "Vote percent must be a finite number",
        "float_type": "Vote percent must be a number",
        "float_parsing": "Vote percent must be a valid number",
    },
    "viewport_height": {
        "greater_than": "Viewport height must be positive",
        "float_parsing": "Viewport height must be a valid number",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "greater_than": "Field '{field}' is below minimum allowed value",
    "finite_number": "Field '{field}' must be a finite number",
    "string_type": "Field '{field}' must be a string",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "bool_type": "Field '{field}' must be a boolean",
    "bool_parsing": "Field '{field}' must be a valid boolean",
    "json_invalid": "Malformed JSON request body",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str) -> str:
    if field in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[field]:
            if key in error_type:
                return FIELD_MESSAGES[field][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error_code": "INVALID_REQUEST",
                "message": "Malformed JSON request body",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    field = ".".join(str(l) for l in loc if l not in ("body", "query", "path"))
    message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": message,
            "details": {"field": field, "type": error_type} if field else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )



#  Schemas


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CelebrityResponse(CelebrityRecord):
    cache: Optional[CacheInfo] = None  # Cache info for debugging



#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str, details: Optional[dict] = None):
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error_code=error_code, message=message, details=details).model_dump(mode="json"),
    )


def raise_celebrity_not_found():
    raise_error(status.HTTP_404_NOT_FOUND, "CELEBRITY_NOT_FOUND", "Celebrity not found")


def raise_store_unavailable():
    raise_error(status.HTTP_503_SERVICE_UNAVAILABLE, "STORE_UNAVAILABLE", "Celebrity store is unavailable")


def raise_internal_error():
    raise_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", "Unexpected server error")


def raise_store_error(exc: RepositoryException):
    """Map store failures to HTTP errors."""
    if isinstance(exc, EntityNotFoundException):
        raise_celebrity_not_found()
    if isinstance(exc, DatabaseConnectionException):
        raise_store_unavailable()
    raise_internal_error()



#  Cache Helpers


def create_cache_info(hit: bool, key: str, latency_ms: float, ttl: int) -> CacheInfo:
    """Create CacheInfo object with human-readable message."""
    if hit:
        return CacheInfo(
            hit=True,
            source="redis",
            key=key,
            latency_ms=round(latency_ms, 3),
            ttl_seconds=ttl,
            message=f"Cache HIT - served from Redis in {latency_ms:.3f}ms",
        )
    return CacheInfo(
        hit=False,
        source="store",
        key=key,
        latency_ms=round(latency_ms, 3),
        ttl_seconds=ttl,
        message=f"Cache MISS - fetched from store in {latency_ms:.3f}ms, now cached for {ttl}s",
    )


def load_celebrities(store: CelebrityStore) -> CelebrityListResponse:
    """
    List all celebrities, read-through the Redis cache.

    Cache Strategy:
    - Key: "celebrity:list"
    - TTL: CACHE_TTL_CELEBRITIES
    - Invalidation: on every successful vote
    """
    cache = get_cache()
    start_time = time.time()

    # 1. Try cache first
    if cache:
        try:
            cached = cache.get(CACHE_KEY_CELEBRITY_LIST, CelebrityListResponse)
            if cached:
                latency = (time.time() - start_time) * 1000
                cached.cache = create_cache_info(True, CACHE_KEY_CELEBRITY_LIST, latency, TTL_CELEBRITIES)
                return cached
        except Exception as e:
            logger.warning(f"Cache read failed for {CACHE_KEY_CELEBRITY_LIST}: {e}")

    # 2. Cache miss - fetch from the store
    try:
        items = store.list_entities()
    except RepositoryException as e:
        logger.error(f"Listing celebrities failed: {e}")
        raise_store_error(e)

    latency = (time.time() - start_time) * 1000
    response = CelebrityListResponse(
        items=items,
        total=len(items),
        cache=create_cache_info(False, CACHE_KEY_CELEBRITY_LIST, latency, TTL_CELEBRITIES),
    )

    # 3. Store in cache
    if cache:
        try:
            cache.set(CACHE_KEY_CELEBRITY_LIST, response, TTL_CELEBRITIES)
        except Exception as e:
            logger.warning(f"Cache write failed for {CACHE_KEY_CELEBRITY_LIST}: {e}")

    return response



#  Routes


@router.get(
    "/celebrities",
    response_model=CelebrityListResponse,
    responses={
        503: {"model": ErrorResponse, "description": "Celebrity store unavailable"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="List celebrities",
    description="Returns every celebrity with its running score. Cached in Redis.",
)
def list_celebrities(
    store: CelebrityStore = Depends(get_celebrity_repository),
) -> CelebrityListResponse:
    return load_celebrities(store)


@router.get(
    "/celebrities/{id}",
    response_model=CelebrityResponse,
    responses={
        404: {
            "model": ErrorResponse,
            "description": "Celebrity not found",
            "content": {
                "application/json": {
                    "example": {
                        "error_code": "CELEBRITY_NOT_FOUND",
                        "message": "Celebrity not found",
                        "details": None,
                        "timestamp": "2026-01-28T01:19:36.803Z",
                    }
                }
            },
        },
        503: {"model": ErrorResponse, "description": "Celebrity store unavailable"},
    },
    summary="Get celebrity by ID",
    description="Retrieves a single celebrity. Cached in Redis.",
)
def get_celebrity(
    id: str,
    store: CelebrityStore = Depends(get_celebrity_repository),
) -> CelebrityResponse:
    cache_key = get_celebrity_cache_key(id)
    cache = get_cache()
    start_time = time.time()

    if cache:
        try:
            cached = cache.get(cache_key, CelebrityResponse)
            if cached:
                latency = (time.time() - start_time) * 1000
                cached.cache = create_cache_info(True, cache_key, latency, TTL_CELEBRITIES)
                return cached
        except Exception as e:
            logger.warning(f"Cache read failed for {cache_key}: {e}")

    try:
        record = store.get_by_id(id)
    except RepositoryException as e:
        logger.error(f"Fetching celebrity {id} failed: {e}")
        raise_store_error(e)
    if record is None:
        raise_celebrity_not_found()

    latency = (time.time() - start_time) * 1000
    response = CelebrityResponse(
        **record.model_dump(),
        cache=create_cache_info(False, cache_key, latency, TTL_CELEBRITIES),
    )

    if cache:
        try:
            cache.set(cache_key, response, TTL_CELEBRITIES)
        except Exception as e:
            logger.warning(f"Cache write failed for {cache_key}: {e}")

    return response


@router.post(
    "/celebrities/{id}/votes",
    response_model=VoteResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Celebrity not found"},
        422: {"model": ErrorResponse, "description": "Vote is not a number between 0 and 100"},
        503: {"model": ErrorResponse, "description": "Celebrity store unavailable"},
    },
    summary="Vote on a celebrity",
    description=(
        "Folds a 0-100 vote (0 = good, 100 = evil) into the celebrity's running average. "
        "Failed votes change nothing and are not retried."
    ),
)
def submit_vote(
    id: str,
    vote: VoteRequest,
    service: VoteService = Depends(get_vote_service),
) -> VoteResponse:
    try:
        record = service.submit_vote(id, vote.percent)
    except InvalidVoteException as e:
        raise_error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "INVALID_VOTE",
            e.message,
            details={"field": "percent", "value": str(e.value)},
        )
    except RepositoryException as e:
        raise_store_error(e)

    return VoteResponse(
        id=record.id,
        name=record.name,
        score=record.score,
        count=record.count,
        applied_score=percent_to_score(vote.percent),
    )
