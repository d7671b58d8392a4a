"""Tests for the cache-aside lookup."""

import pytest

from core.cache.models import CacheKey, CacheStatus
from core.translation import CachedLookup, EngineCatalog, FallbackTranslator


def build_lookup(invoker, cache, engines):
    return CachedLookup(FallbackTranslator(EngineCatalog.of(engines), invoker), cache)


class TestColdAndWarmCache:

    @pytest.mark.asyncio
    async def test_fallback_result_is_cached_then_served_without_engines(
        self, spy_invoker, memory_cache, memory_backend
    ):
        lookup = build_lookup(spy_invoker, memory_cache, ["A", "B"])

        assert await lookup.lookup("es", "hello") == "hola"
        assert spy_invoker.engines_called() == ["A", "B"]
        assert await memory_backend.hget("es", "hello") == "hola"

        spy_invoker.calls.clear()
        assert await lookup.lookup("es", "hello") == "hola"
        assert spy_invoker.calls == []

    @pytest.mark.asyncio
    async def test_cache_hit_skips_engines(self, make_invoker, memory_cache, memory_backend):
        await memory_backend.hset("fr", "cat", "chat")
        invoker = make_invoker({"A": {("fr", "cat"): "minou"}})
        lookup = build_lookup(invoker, memory_cache, ["A"])

        assert await lookup.lookup("fr", "cat") == "chat"
        assert invoker.calls == []

    @pytest.mark.asyncio
    async def test_cache_hit_does_not_write(self, make_invoker, memory_cache, memory_backend):
        await memory_backend.hset("fr", "cat", "chat")
        writes = []
        original_hset = memory_backend.hset

        async def recording_hset(name, key, value):
            writes.append((name, key, value))
            return await original_hset(name, key, value)

        memory_backend.hset = recording_hset
        lookup = build_lookup(make_invoker({}), memory_cache, ["A"])

        assert await lookup.lookup("fr", "cat") == "chat"
        assert writes == []

    @pytest.mark.asyncio
    async def test_keys_are_per_language(self, make_invoker, memory_cache, memory_backend):
        invoker = make_invoker({"A": {("es", "hello"): "hola", ("de", "hello"): "hallo"}})
        lookup = build_lookup(invoker, memory_cache, ["A"])

        assert await lookup.lookup("es", "hello") == "hola"
        assert await lookup.lookup("de", "hello") == "hallo"
        assert await memory_backend.hget("es", "hello") == "hola"
        assert await memory_backend.hget("de", "hello") == "hallo"

    @pytest.mark.asyncio
    async def test_word_is_not_normalized(self, make_invoker, memory_cache, memory_backend):
        invoker = make_invoker({"A": {("es", "Hello"): "Hola", ("es", "hello"): "hola"}})
        lookup = build_lookup(invoker, memory_cache, ["A"])

        assert await lookup.lookup("es", "Hello") == "Hola"
        assert await lookup.lookup("es", "hello") == "hola"


class TestExhausted:

    @pytest.mark.asyncio
    async def test_all_engines_fail_returns_none_and_writes_nothing(
        self, make_invoker, memory_cache, memory_backend
    ):
        invoker = make_invoker({"A": {}})
        lookup = build_lookup(invoker, memory_cache, ["A"])

        assert await lookup.lookup("fr", "xyzzy") is None
        assert invoker.engines_called() == ["A"]
        assert memory_backend._store == {}

    @pytest.mark.asyncio
    async def test_miss_is_recomputed_each_time(self, make_invoker, memory_cache):
        invoker = make_invoker({"A": {}})
        lookup = build_lookup(invoker, memory_cache, ["A"])

        assert await lookup.lookup("fr", "xyzzy") is None
        assert await lookup.lookup("fr", "xyzzy") is None
        assert invoker.engines_called() == ["A", "A"]


class TestCacheFailures:
    """A broken cache degrades to direct translation."""

    @pytest.mark.asyncio
    async def test_read_failure_falls_through_and_attempts_write(
        self, spy_invoker, make_failing_cache
    ):
        cache, backend = make_failing_cache(fail_get=True, fail_set=False)
        lookup = build_lookup(spy_invoker, cache, ["A", "B"])

        assert await lookup.lookup("es", "hello") == "hola"
        assert backend.set_attempts == 1
        assert backend._store == {"es": {"hello": "hola"}}

    @pytest.mark.asyncio
    async def test_write_failure_still_returns_translation(self, spy_invoker, make_failing_cache):
        cache, backend = make_failing_cache(fail_get=False, fail_set=True)
        lookup = build_lookup(spy_invoker, cache, ["A", "B"])

        assert await lookup.lookup("es", "hello") == "hola"
        assert backend.set_attempts == 1

    @pytest.mark.asyncio
    async def test_cache_fully_down(self, spy_invoker, make_failing_cache, caplog):
        cache, backend = make_failing_cache()
        lookup = build_lookup(spy_invoker, cache, ["A", "B"])

        with caplog.at_level("WARNING", logger="core.translation.cached_lookup"):
            assert await lookup.lookup("es", "hello") == "hola"

        messages = [r.getMessage() for r in caplog.records]
        assert any("failed access the cache" in m for m in messages)
        assert any("failed save to cache word hello for lang es" in m for m in messages)

    @pytest.mark.asyncio
    async def test_read_failure_with_no_translation_skips_write(self, make_invoker, make_failing_cache):
        cache, backend = make_failing_cache(fail_get=True, fail_set=False)
        lookup = build_lookup(make_invoker({"A": {}}), cache, ["A"])

        assert await lookup.lookup("fr", "xyzzy") is None
        assert backend.set_attempts == 0


class TestSessionScope:
    """The cache session is released on every exit path."""

    class TrackingCache:
        def __init__(self, inner):
            self.inner = inner
            self.opened = 0
            self.closed = 0

        def session(self):
            tracker = self
            inner_cm = self.inner.session()

            class _Scope:
                async def __aenter__(self):
                    tracker.opened += 1
                    return await inner_cm.__aenter__()

                async def __aexit__(self, *exc):
                    tracker.closed += 1
                    return await inner_cm.__aexit__(*exc)

            return _Scope()

    @pytest.mark.asyncio
    async def test_released_on_hit_miss_and_exhaustion(self, spy_invoker, memory_cache):
        cache = self.TrackingCache(memory_cache)
        lookup = build_lookup(spy_invoker, cache, ["A", "B"])

        await lookup.lookup("es", "hello")   # computed
        await lookup.lookup("es", "hello")   # hit
        await lookup.lookup("fr", "xyzzy")   # exhausted

        assert cache.opened == 3
        assert cache.closed == 3

    @pytest.mark.asyncio
    async def test_released_when_engine_raises_unexpectedly(self, make_invoker, memory_cache):
        class Broken(make_invoker):
            async def invoke(self, engine_id, language, word):
                raise RuntimeError("bug")

        cache = self.TrackingCache(memory_cache)
        lookup = build_lookup(Broken({}), cache, ["A"])

        with pytest.raises(RuntimeError):
            await lookup.lookup("es", "hello")
        assert cache.closed == 1


class TestScenarios:

    @pytest.mark.asyncio
    async def test_first_engine_broken_second_answers(
        self, spy_invoker, memory_cache, memory_backend
    ):
        lookup = build_lookup(spy_invoker, memory_cache, ["A", "B"])

        assert await lookup.lookup("es", "hello") == "hola"
        async with memory_cache.session() as session:
            cached = await session.read(CacheKey("es", "hello"))
        assert cached.status is CacheStatus.HIT
        assert cached.value == "hola"

        spy_invoker.calls.clear()
        assert await lookup.lookup("es", "hello") == "hola"
        assert spy_invoker.calls == []

    @pytest.mark.asyncio
    async def test_single_failing_engine(self, make_invoker, memory_cache, memory_backend):
        lookup = build_lookup(make_invoker({"A": {}}), memory_cache, ["A"])

        assert await lookup.lookup("fr", "xyzzy") is None
        assert await memory_backend.hget("fr", "xyzzy") is None


class TestLegacyEntries:
    """Entries stored with the raw trans output read the same as fresh ones."""

    @pytest.mark.asyncio
    async def test_trailing_newline_entry_matches_fresh_lookup(
        self, make_invoker, memory_cache, memory_backend
    ):
        await memory_backend.hset("es", "hello", "hola\n")
        invoker = make_invoker({"A": {("es", "bye"): "adiós"}})
        lookup = build_lookup(invoker, memory_cache, ["A"])

        assert await lookup.lookup("es", "hello") == "hola"
        assert invoker.calls == []
        assert await lookup.lookup("es", "bye") == "adiós"
