"""Cache data model: keys and three-way read results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CacheStatus(Enum):
    """Outcome of a cache read"""
    HIT = "hit"
    MISS = "miss"
    FAILURE = "failure"


@dataclass(frozen=True)
class CacheKey:
    """
    Address of one cached translation.

    Stored as a two-level map: the Redis hash named ``language`` holds one
    field per ``word``.
    """
    language: str
    word: str


@dataclass(frozen=True)
class CacheRead:
    """Result of reading one key; ``FAILURE`` and ``MISS`` both lead to a recompute."""
    status: CacheStatus
    value: Optional[str] = None
    error: Optional[Exception] = None

    @classmethod
    def hit(cls, value: str) -> "CacheRead":
        return cls(CacheStatus.HIT, value=value)

    @classmethod
    def miss(cls) -> "CacheRead":
        return cls(CacheStatus.MISS)

    @classmethod
    def failure(cls, error: Exception) -> "CacheRead":
        return cls(CacheStatus.FAILURE, error=error)

    @property
    def is_hit(self) -> bool:
        return self.status is CacheStatus.HIT
