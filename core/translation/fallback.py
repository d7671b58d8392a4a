"""
Fallback Translator
Tries catalog engines in order and returns the first translation produced
"""

import logging
from typing import Optional

from .catalog import EngineCatalog
from .engines.base import EngineInvoker
from .exceptions import EngineFailure

logger = logging.getLogger(__name__)


class FallbackTranslator:
    """
    Walks the engine catalog with early return.

    Usage:
        translator = FallbackTranslator(catalog, TransShellInvoker())
        text = await translator.translate("es", "hello")
    """

    def __init__(self, catalog: EngineCatalog, invoker: EngineInvoker):
        self.catalog = catalog
        self.invoker = invoker

    async def translate(self, language: str, word: str) -> Optional[str]:
        """
        Translate with the first engine that succeeds.

        Args:
            language: Target language code
            word: Source text

        Returns:
            The translation, or None when every engine failed
        """
        for engine_id in self.catalog:
            try:
                text = await self.invoker.invoke(engine_id, language, word)
            except EngineFailure as e:
                logger.debug("Engine %s failed for %s/%s: %s", engine_id, language, word, e.reason)
                continue
            if not text:
                logger.debug("Engine %s returned nothing for %s/%s", engine_id, language, word)
                continue
            logger.debug("Engine %s translated %s/%s", engine_id, language, word)
            return text

        logger.info("All %d engines exhausted for %s/%s", len(self.catalog), language, word)
        return None
