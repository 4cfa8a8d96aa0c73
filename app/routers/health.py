"""
Health Check Router - Celebrity Timeline
app/routers/health.py

Returns health status of the celebrity store and the Redis cache with real
connection checks. Redis is optional: without it the API still serves, so an
unreachable cache degrades the status but does not fail the check.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

from app.config import settings
from app.core.dependencies import get_celebrity_repository
from app.repositories.base import CelebrityStore

router = APIRouter(tags=["Health"])



#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    store_backend: str
    dependencies: Dict[str, str]



#  Dependency Health Checks


def check_store(store: CelebrityStore) -> str:
    """Check the configured celebrity store."""
    return store.health_check()


def check_redis() -> str:
    """Check Redis connection health."""
    try:
        import redis

        client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2,
        )
        client.ping()
        client.close()
        return f"healthy (URL: {settings.REDIS_URL})"

    except Exception as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"



#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Store healthy (cache may be degraded)"},
        503: {"description": "Celebrity store unhealthy"},
    },
    summary="Health check",
    description="Check health of the celebrity store and the Redis cache.",
)
def health_check(store: CelebrityStore = Depends(get_celebrity_repository)):
    """Check health of all dependencies."""
    dependencies = {
        "store": check_store(store),
        "redis": check_redis(),
    }

    store_healthy = dependencies["store"].startswith("healthy")
    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else ("degraded" if store_healthy else "unhealthy"),
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        store_backend=settings.STORE_BACKEND,
        dependencies=dependencies,
    )

    if store_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
