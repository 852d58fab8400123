# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Read-through caching decorator for any vault.

Design:
    - Caches ModelSecret values (never decoded credentials) by key
    - Unbounded, process-lifetime cache; the working set is the number of
      distinct secrets one scan touches
    - Read-through only: set() goes straight to the inner vault and does
      NOT update the cache, since a secret just written is not guaranteed
      to be read back with the same representation
    - Failures (not-found included) are never cached

Example:
    >>> vault = VaultCached(VaultMulti((external, embedded)))
    >>> secret = await vault.get(ModelSecretId(key="ssh-prod"))
"""

from __future__ import annotations

import asyncio
import logging
import threading

from fleetvault.models.model_secret import ModelSecret, ModelSecretId, ModelVaultInfo
from fleetvault.protocols import ProtocolVault
from fleetvault.vaults.model_vault_cache_stats import ModelVaultCacheStats

logger = logging.getLogger(__name__)


class VaultCached:
    """In-memory read-through cache in front of one vault.

    Thread Safety:
        Two-level locking:

        1. ``threading.Lock`` (``_lock``): guards the cache dict and the
           counters. Held only for in-memory operations, never across an
           await.

        2. Per-key ``asyncio.Lock`` (``_key_locks``): coalesces concurrent
           misses for the SAME key so the inner vault is asked once while
           other coroutines wait and reuse the cached result. Different keys
           are fetched in parallel.
    """

    def __init__(self, inner: ProtocolVault) -> None:
        self._inner = inner
        self._cache: dict[str, ModelSecret] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()
        self._key_locks: dict[str, asyncio.Lock] = {}

    @property
    def inner(self) -> ProtocolVault:
        return self._inner

    async def about(self) -> ModelVaultInfo:
        return await self._inner.about()

    async def get(self, secret_id: ModelSecretId) -> ModelSecret:
        """Return the cached secret, fetching it from the inner vault on a miss.

        Raises:
            SecretNotFoundError: Propagated from the inner vault
            VaultError: Propagated from the inner vault
        """
        key = secret_id.key
        cached = self._get_from_cache(key)
        if cached is not None:
            return cached

        async with self._get_key_lock(key):
            # another coroutine may have filled the entry while we waited
            cached = self._get_from_cache(key)
            if cached is not None:
                return cached

            with self._lock:
                self._misses += 1
            logger.debug("Secret cache miss", extra={"secret_key": key})

            secret = await self._inner.get(secret_id)

            with self._lock:
                self._cache[key] = secret
            return secret

    async def set(self, secret: ModelSecret) -> ModelSecretId:
        # read-through only: the cache is not updated on write
        return await self._inner.set(secret)

    def get_cache_stats(self) -> ModelVaultCacheStats:
        with self._lock:
            return ModelVaultCacheStats(
                total_entries=len(self._cache),
                hits=self._hits,
                misses=self._misses,
            )

    def clear(self) -> None:
        """Drop every cached secret."""
        with self._lock:
            self._cache.clear()
            self._key_locks.clear()

    def _get_from_cache(self, key: str) -> ModelSecret | None:
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._hits += 1
            return cached

    def _get_key_lock(self, key: str) -> asyncio.Lock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = asyncio.Lock()
                self._key_locks[key] = lock
            return lock


__all__: list[str] = ["VaultCached"]
