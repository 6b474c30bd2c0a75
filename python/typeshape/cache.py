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
"""Caller-side memoization of type resolution.

The resolvers never cache. Callers that resolve the same descriptors
repeatedly (a serializer resolving the same model class per request) can
wrap a TypeResolver in a CachedTypeResolver. Descriptors are frozen and
hashable, so they key the cache directly. TypeDefinitions are immutable,
so sharing a cached tree between callers is safe.

Failed resolutions are not cached; the error propagates on every call.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

from typeshape.definitions import TypeDefinition
from typeshape.descriptors import TypeDescriptor
from typeshape.errors import UnrecognizedTypeError
from typeshape.kinds import TypeKind, classify
from typeshape.resolver import TypeResolver


@dataclass
class CacheStats:
    """Hit/miss counters for a CachedTypeResolver.

    Attributes:
        hits: Lookups answered from the cache
        misses: Lookups that ran the resolver
        evictions: Entries dropped to stay within ``max_entries``
    """

    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total


class CachedTypeResolver:
    """An LRU cache of TypeDefinitions in front of a TypeResolver.

    Thread Safety:
        Lookups and insertions are guarded by a lock. Two threads missing
        on the same descriptor may both resolve it; the trees are equal,
        and the later insert wins.
    """

    def __init__(
        self,
        resolver: Optional[TypeResolver] = None,
        max_entries: int = 1024,
    ) -> None:
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._resolver = resolver or TypeResolver()
        self._max_entries = max_entries
        self._entries: OrderedDict[TypeDescriptor, TypeDefinition] = OrderedDict()
        self._stats = CacheStats()
        self._lock = threading.Lock()

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def resolve_type(self, descriptor: TypeDescriptor) -> TypeDefinition:
        """Resolve ``descriptor``, reusing a cached tree when present."""
        if classify(descriptor) is TypeKind.UNKNOWN:
            # Unknown inputs may be unhashable; never cache them
            raise UnrecognizedTypeError(descriptor)

        with self._lock:
            cached = self._entries.get(descriptor)
            if cached is not None:
                self._entries.move_to_end(descriptor)
                self._stats.hits += 1
                return cached
            self._stats.misses += 1

        definition = self._resolver.resolve_type(descriptor)

        with self._lock:
            self._entries[descriptor] = definition
            self._entries.move_to_end(descriptor)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
                self._stats.evictions += 1
        return definition

    def invalidate(self, descriptor: Optional[TypeDescriptor] = None) -> None:
        """Drop one cached descriptor, or everything when None."""
        with self._lock:
            if descriptor is None:
                self._entries.clear()
            else:
                self._entries.pop(descriptor, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, descriptor: object) -> bool:
        with self._lock:
            return descriptor in self._entries
