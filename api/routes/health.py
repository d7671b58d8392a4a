"""
Health check endpoint.
"""

import time

from fastapi import APIRouter, Depends, Request

from api.deps import get_cache, get_catalog
from api.models import HealthResponse
from core.cache.redis_client import RedisClient
from core.translation import EngineCatalog

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    request: Request,
    cache: RedisClient = Depends(get_cache),
    catalog: EngineCatalog = Depends(get_catalog),
):
    """
    Report cache and engine state.

    ``degraded`` means translations still work but are not persisted in
    Redis (in-memory fallback, or Redis stopped answering).
    """
    reachable = await cache.ping()
    status = "healthy" if reachable and cache.is_real_redis else "degraded"
    return HealthResponse(
        status=status,
        version=request.app.version,
        cache_backend=cache.backend_name,
        cache_reachable=reachable,
        engines=len(catalog),
        timestamp=time.time(),
    )
