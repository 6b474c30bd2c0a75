# Copyright Rand Arete @ Ananke 2025
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""Unit tests for CachedTypeResolver."""

import threading

import pytest

from typeshape.cache import CachedTypeResolver, CacheStats
from typeshape.descriptors import ClassRef, ParameterizedRef
from typeshape.errors import TypeLoadError, UnrecognizedTypeError

INT = ClassRef("builtins.int")
STR = ClassRef("builtins.str")
FLOAT = ClassRef("builtins.float")


@pytest.fixture
def cached(resolver) -> CachedTypeResolver:
    return CachedTypeResolver(resolver, max_entries=2)


class TestCachedTypeResolver:
    """Tests for hits, misses and eviction."""

    def test_hit_returns_same_tree(self, cached):
        first = cached.resolve_type(INT)
        second = cached.resolve_type(INT)
        assert first is second
        assert cached.stats.hits == 1
        assert cached.stats.misses == 1

    def test_matches_uncached(self, cached, resolver):
        ref = ParameterizedRef(ClassRef("builtins.dict"), (STR, INT))
        assert cached.resolve_type(ref) == resolver.resolve_type(ref)

    def test_lru_eviction(self, cached):
        cached.resolve_type(INT)
        cached.resolve_type(STR)
        cached.resolve_type(INT)  # INT is now most recent
        cached.resolve_type(FLOAT)
        assert INT in cached
        assert STR not in cached
        assert len(cached) == 2
        assert cached.stats.evictions == 1

    def test_invalidate_one(self, cached):
        cached.resolve_type(INT)
        cached.resolve_type(STR)
        cached.invalidate(INT)
        assert INT not in cached
        assert STR in cached

    def test_invalidate_all(self, cached):
        cached.resolve_type(INT)
        cached.invalidate()
        assert len(cached) == 0

    def test_invalidate_missing_is_noop(self, cached):
        cached.invalidate(INT)
        assert len(cached) == 0

    def test_unknown_not_cached(self, cached):
        with pytest.raises(UnrecognizedTypeError):
            cached.resolve_type([1, 2])
        assert len(cached) == 0
        assert cached.stats.misses == 0

    def test_failures_not_cached(self, cached):
        missing = ClassRef("no_such_package.Thing")
        for _ in range(2):
            with pytest.raises(TypeLoadError):
                cached.resolve_type(missing)
        assert missing not in cached
        assert cached.stats.misses == 2

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            CachedTypeResolver(max_entries=0)

    def test_concurrent_callers(self):
        cached = CachedTypeResolver(max_entries=16)
        refs = [INT, STR, FLOAT]
        errors = []

        def worker():
            try:
                for _ in range(50):
                    for ref in refs:
                        assert cached.resolve_type(ref).declared == ref
            except AssertionError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(cached) == 3


class TestCacheStats:
    def test_hit_rate(self):
        assert CacheStats().hit_rate == 0.0
        assert CacheStats(hits=3, misses=1).hit_rate == 0.75
