"""
Cached Lookup
Cache-aside translation: read the cache, translate on miss, write back
"""

import logging
from typing import TYPE_CHECKING, Optional

from core.cache.models import CacheKey, CacheStatus

from .exceptions import CacheWriteFailure
from .fallback import FallbackTranslator

if TYPE_CHECKING:
    from core.cache.redis_client import RedisClient

logger = logging.getLogger(__name__)


class CachedLookup:
    """
    Serves translations from the cache, computing and storing them on a miss.

    A cache outage never fails a lookup: read errors are treated as a miss
    and write errors only skip the store.
    """

    def __init__(self, translator: FallbackTranslator, cache: "RedisClient"):
        self.translator = translator
        self.cache = cache

    async def lookup(self, language: str, word: str) -> Optional[str]:
        """
        Return the translation of ``word`` into ``language``, or None if no engine has one.
        """
        key = CacheKey(language, word)

        async with self.cache.session() as session:
            cached = await session.read(key)
            if cached.status is CacheStatus.HIT:
                return cached.value
            if cached.status is CacheStatus.FAILURE:
                logger.warning("failed access the cache: %s", cached.error)

            translation = await self.translator.translate(language, word)
            if translation is None:
                return None

            try:
                await session.write(key, translation)
            except CacheWriteFailure as e:
                logger.warning("failed save to cache word %s for lang %s: %s", word, language, e.cause)

            return translation
