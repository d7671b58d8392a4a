"""
Redis client wrapper for the translation cache.

Translations are kept in Redis hashes: one hash per target language, one field
per source word (``HGET <lang> <word>`` / ``HSET <lang> <word> <text>``).

Redis outages are reported per operation and never raised out of ``read``:
a lookup that cannot reach Redis degrades to direct translation, and picks the
cache back up as soon as Redis answers again. Without a URL a process-local
dict stands in (tests, local runs).

Usage:
    from core.cache.redis_client import RedisClient

    cache = await RedisClient.create("redis://127.0.0.1/")
    async with cache.session() as session:
        result = await session.read(CacheKey("es", "hello"))
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from core.translation.exceptions import CacheReadFailure, CacheWriteFailure

from .models import CacheKey, CacheRead

logger = logging.getLogger(__name__)

# Errors that mean "the store is unavailable", as opposed to programming errors
STORE_ERRORS = (RedisError, OSError, asyncio.TimeoutError)

# ---------------------------------------------------------------------------
# In-memory backend (no Redis URL, single-process only)
# ---------------------------------------------------------------------------

class InMemoryBackend:
    """Dict-based stand-in that mimics the Redis hash commands the gateway uses."""

    def __init__(self):
        self._store: Dict[str, Dict[str, str]] = {}  # hash name -> {field: value}

    async def hget(self, name: str, key: str) -> Optional[str]:
        return self._store.get(name, {}).get(key)

    async def hset(self, name: str, key: str, value: str) -> int:
        fields = self._store.setdefault(name, {})
        added = 0 if key in fields else 1
        fields[key] = value
        return added

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        self._store.clear()

    @property
    def is_real_redis(self) -> bool:
        return False


# ---------------------------------------------------------------------------
# Per-lookup session
# ---------------------------------------------------------------------------

class CacheSession:
    """
    Cache operations for the duration of one lookup.

    ``read`` never raises: store errors come back as ``CacheRead.failure``.
    ``write`` raises ``CacheWriteFailure`` so the caller decides how loud to be.
    """

    def __init__(self, conn: Any, timeout: Optional[float] = None):
        self._conn = conn
        self._timeout = timeout

    async def read(self, key: CacheKey) -> CacheRead:
        try:
            value = await asyncio.wait_for(
                self._conn.hget(key.language, key.word), timeout=self._timeout
            )
        except STORE_ERRORS as exc:
            return CacheRead.failure(CacheReadFailure(key.language, key.word, exc))

        if isinstance(value, bytes):
            try:
                value = value.decode("utf-8")
            except UnicodeDecodeError as exc:
                return CacheRead.failure(CacheReadFailure(key.language, key.word, exc))
        # entries written with raw trans output still carry its trailing newline
        value = (value or "").strip()
        if not value:
            return CacheRead.miss()
        return CacheRead.hit(value)

    async def write(self, key: CacheKey, value: str) -> None:
        try:
            await asyncio.wait_for(
                self._conn.hset(key.language, key.word, value), timeout=self._timeout
            )
        except STORE_ERRORS as exc:
            raise CacheWriteFailure(key.language, key.word, exc) from exc


# ---------------------------------------------------------------------------
# Redis wrapper
# ---------------------------------------------------------------------------

class RedisClient:
    """
    Async Redis client; InMemoryBackend only when no URL is configured.

    Call ``await RedisClient.create(url)`` to construct.
    """

    def __init__(self, backend: Any, *, is_real: bool, timeout: Optional[float] = None):
        self._backend = backend
        self._is_real = is_real
        self.timeout = timeout

    @classmethod
    async def create(cls, url: Optional[str] = None, timeout: Optional[float] = 2.0) -> "RedisClient":
        """
        Factory: build the Redis client and check it once.

        An unreachable Redis is logged but still used: every operation retries
        through the connection pool, so the cache comes back with Redis.

        Args:
            url: Redis URL (e.g. ``redis://127.0.0.1/``).
                 If None, skips Redis entirely and uses in-memory.
            timeout: Seconds allowed for each cache operation.
        """
        if url:
            client = aioredis.from_url(url)
            try:
                await asyncio.wait_for(client.ping(), timeout=timeout)
                logger.info("Redis connected: %s", url)
            except STORE_ERRORS as exc:
                logger.warning("Redis unavailable (%s), lookups run uncached until it answers", exc)
            return cls(client, is_real=True, timeout=timeout)

        return cls(InMemoryBackend(), is_real=False, timeout=timeout)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[CacheSession]:
        """
        Scope cache access to one lookup.

        For Redis, a client bound to the shared connection pool is opened and
        closed around the block; pooled connections go back to the pool on
        every exit path.
        """
        if not self._is_real:
            yield CacheSession(self._backend, self.timeout)
            return

        async with aioredis.Redis(connection_pool=self._backend.connection_pool) as conn:
            yield CacheSession(conn, self.timeout)

    async def ping(self) -> bool:
        try:
            return bool(await asyncio.wait_for(self._backend.ping(), timeout=self.timeout))
        except STORE_ERRORS as exc:
            logger.warning("Redis ping failed: %s", exc)
            return False

    async def close(self) -> None:
        await self._backend.aclose()

    @property
    def is_real_redis(self) -> bool:
        return self._is_real

    @property
    def backend_name(self) -> str:
        return "redis" if self._is_real else "memory"
