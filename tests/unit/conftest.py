"""
Pytest Configuration and Fixtures
"""

import pytest

from core.cache.redis_client import InMemoryBackend, RedisClient
from core.translation import EngineCatalog, EngineFailure, EngineInvoker


class SpyInvoker(EngineInvoker):
    """
    Scripted engine invoker that records every call.

    ``answers`` maps engine id -> {(language, word): text}; anything missing
    fails with EngineFailure.
    """

    def __init__(self, answers=None, engines=None):
        self.answers = answers or {}
        self.engines = list(engines) if engines is not None else list(self.answers)
        self.calls = []

    async def invoke(self, engine_id, language, word):
        self.calls.append((engine_id, language, word))
        text = self.answers.get(engine_id, {}).get((language, word))
        if not text:
            raise EngineFailure(engine_id, "no translation")
        return text

    async def list_engines(self):
        return list(self.engines)

    def engines_called(self):
        return [call[0] for call in self.calls]


class FailingBackend(InMemoryBackend):
    """In-memory backend whose reads and/or writes raise like a dead Redis."""

    def __init__(self, fail_get=True, fail_set=True):
        super().__init__()
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.set_attempts = 0

    async def hget(self, name, key):
        if self.fail_get:
            raise ConnectionError("Connection refused")
        return await super().hget(name, key)

    async def hset(self, name, key, value):
        self.set_attempts += 1
        if self.fail_set:
            raise ConnectionError("Connection refused")
        return await super().hset(name, key, value)


@pytest.fixture
def memory_backend():
    return InMemoryBackend()


@pytest.fixture
def memory_cache(memory_backend):
    return RedisClient(memory_backend, is_real=False, timeout=1.0)


@pytest.fixture
def spy_invoker():
    """Catalog [A, B]: A always fails, B knows es/hello"""
    return SpyInvoker(
        answers={"A": {}, "B": {("es", "hello"): "hola"}},
        engines=["A", "B"],
    )


@pytest.fixture
def catalog_ab():
    return EngineCatalog.of(["A", "B"])


@pytest.fixture
def make_invoker():
    return SpyInvoker


@pytest.fixture
def make_failing_cache():
    """Factory: RedisClient over a FailingBackend, returned with the backend"""
    def _make(fail_get=True, fail_set=True):
        backend = FailingBackend(fail_get=fail_get, fail_set=fail_set)
        return RedisClient(backend, is_real=False, timeout=1.0), backend
    return _make
