"""
Dependency getters for API route modules.

The catalog, cache client and lookup are built once in the application
lifespan and stored on ``app.state``; routes read them through these getters.
"""

from fastapi import Request

from core.cache.redis_client import RedisClient
from core.translation import CachedLookup, EngineCatalog


def get_lookup(request: Request) -> CachedLookup:
    return request.app.state.lookup


def get_catalog(request: Request) -> EngineCatalog:
    return request.app.state.catalog


def get_cache(request: Request) -> RedisClient:
    return request.app.state.cache
