"""Memoization for annotation resolution.

Design:
- Keyed by CacheKey(element, kind); values are annotation instances
- Positive results only: a miss is recomputed on every call
- Put-if-absent, never evicted: type graphs don't change once built
- One threading.Lock per map; concurrent resolvers may compute the same
  key twice, the first stored value wins

Caches are plain objects. Share one between resolvers by passing it to
each AnnotationResolver; nothing here is process-global.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Generic, TypeVar

from annolens.model.annotations import Annotation
from annolens.model.elements import AnnotatedElement, TypeDescriptor

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class CacheKey:
    """(element, annotation kind) pair."""

    element: AnnotatedElement
    kind: type[Annotation]


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache counters."""

    hits: int = 0
    misses: int = 0
    stores: int = 0
    size: int = 0


class _LockedMap(Generic[K, V]):
    def __init__(self) -> None:
        self._data: dict[K, V] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._stores = 0

    def get(self, key: K) -> V | None:
        with self._lock:
            value = self._data.get(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def put_if_absent(self, key: K, value: V) -> V:
        """Store value unless key is present. Returns the value now stored."""
        with self._lock:
            existing = self._data.get(key)
            if existing is not None:
                return existing
            self._data[key] = value
            self._stores += 1
            return value

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                stores=self._stores,
                size=len(self._data),
            )

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class ResolutionCache(_LockedMap[CacheKey, Annotation]):
    """CacheKey -> first matching annotation found for it."""


class InterfaceFlagCache(_LockedMap[TypeDescriptor, bool]):
    """Interface -> whether any method visible on it declares an annotation."""
