"""
Translation Module for the Translate Gateway
Ordered engine fallback behind a cache-aside lookup
"""

from .cached_lookup import CachedLookup
from .catalog import EngineCatalog
from .engines.base import EngineInvoker
from .engines.trans_shell import TransShellInvoker, parse_engine_listing
from .exceptions import (
    CacheReadFailure,
    CacheWriteFailure,
    EmptyCatalogError,
    EngineDiscoveryError,
    EngineFailure,
    MalformedRequest,
    TranslateGatewayError,
    TranslationNotFound,
)
from .fallback import FallbackTranslator

__all__ = [
    # Core
    "CachedLookup",
    "FallbackTranslator",
    "EngineCatalog",
    # Engines
    "EngineInvoker",
    "TransShellInvoker",
    "parse_engine_listing",
    # Errors
    "TranslateGatewayError",
    "EngineFailure",
    "EngineDiscoveryError",
    "EmptyCatalogError",
    "CacheReadFailure",
    "CacheWriteFailure",
    "TranslationNotFound",
    "MalformedRequest",
]
