"""Engine Invokers Package"""

from .base import EngineInvoker
from .trans_shell import TransShellInvoker, parse_engine_listing

__all__ = [
    "EngineInvoker",
    "TransShellInvoker",
    "parse_engine_listing",
]
