"""
Engine Catalog: the ordered list of engines to try.

Built once at startup from the invoker's engine listing and shared read-only
by every request. Order is fallback priority.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .engines.base import EngineInvoker
from .exceptions import EmptyCatalogError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineCatalog:
    """Ordered sequence of engine ids"""
    engines: Tuple[str, ...]

    @classmethod
    def of(cls, engines: Iterable[str]) -> "EngineCatalog":
        ordered: List[str] = []
        for engine_id in engines:
            if engine_id not in ordered:
                ordered.append(engine_id)
        return cls(tuple(ordered))

    @classmethod
    async def discover(cls, invoker: EngineInvoker, require_engines: bool = True) -> "EngineCatalog":
        """
        Enumerate engines once through ``invoker``.

        Raises:
            EngineDiscoveryError: the listing could not be obtained
            EmptyCatalogError: the listing was empty and ``require_engines`` is set
        """
        catalog = cls.of(await invoker.list_engines())
        for engine_id in catalog:
            logger.info("found engine %s", engine_id)
        if require_engines and not catalog:
            raise EmptyCatalogError("no translation engines discovered")
        return catalog

    def list(self) -> Tuple[str, ...]:
        return self.engines

    def __iter__(self) -> Iterator[str]:
        return iter(self.engines)

    def __len__(self) -> int:
        return len(self.engines)

    def __bool__(self) -> bool:
        return bool(self.engines)
