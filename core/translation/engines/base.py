"""
Base Engine Invoker Abstract Class
All engine invokers must inherit from this class
"""

from abc import ABC, abstractmethod


class EngineInvoker(ABC):
    """
    Runs one named engine for one word.

    Implementations return the translation text or raise ``EngineFailure``.
    An empty result is a failure, never a valid translation.
    """

    @abstractmethod
    async def invoke(self, engine_id: str, language: str, word: str) -> str:
        """
        Translate ``word`` into ``language`` with the engine ``engine_id``.

        Args:
            engine_id: Engine identifier from the catalog
            language: Target language code
            word: Source text

        Returns:
            Non-empty translation text

        Raises:
            EngineFailure: the engine could not produce a translation
        """
        pass

    @abstractmethod
    async def list_engines(self) -> list:
        """Enumerate the engine identifiers the backend supports, in priority order."""
        pass
