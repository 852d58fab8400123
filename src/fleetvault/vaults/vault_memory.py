# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-memory vault.

Holds secrets in a process-local dict. The orchestrator uses it for the
credentials embedded in inventory data; tests use it as a stand-in for any
backend.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping

from fleetvault.codec import new_secret
from fleetvault.enums import EnumSecretEncoding
from fleetvault.errors import ModelErrorContext, SecretNotFoundError, VaultError
from fleetvault.models.model_credential import ModelCredential
from fleetvault.models.model_secret import ModelSecret, ModelSecretId, ModelVaultInfo

logger = logging.getLogger(__name__)

DEFAULT_MEMORY_VAULT_NAME: str = "memory"


class VaultMemory:
    """Dict-backed vault.

    Thread Safety:
        All access to the store is guarded by a ``threading.Lock``; operations
        never await while holding it.
    """

    def __init__(self, name: str = DEFAULT_MEMORY_VAULT_NAME) -> None:
        self._name = name
        self._store: dict[str, ModelSecret] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_credentials(
        cls,
        credentials: Mapping[str, ModelCredential],
        *,
        name: str = DEFAULT_MEMORY_VAULT_NAME,
        encoding: EnumSecretEncoding = EnumSecretEncoding.STRUCTURED,
    ) -> VaultMemory:
        """Build a vault holding one secret per credential.

        Each credential is stored under its map key, which wins over any
        ``secret_id`` the credential itself carries.

        Raises:
            SecretEncodeError: If a credential cannot be encoded
        """
        vault = cls(name=name)
        for key, credential in credentials.items():
            keyed = credential.model_copy(update={"secret_id": key})
            secret = new_secret(keyed, encoding)
            vault._store[key] = secret
        return vault

    async def about(self) -> ModelVaultInfo:
        return ModelVaultInfo(name=self._name)

    async def get(self, secret_id: ModelSecretId) -> ModelSecret:
        with self._lock:
            secret = self._store.get(secret_id.key)
        if secret is None:
            raise SecretNotFoundError(
                "Secret not found",
                context=ModelErrorContext(operation="get", target_name=self._name),
                secret_key=secret_id.key,
            )
        return secret

    async def set(self, secret: ModelSecret) -> ModelSecretId:
        if not secret.key:
            raise VaultError(
                "Cannot store a secret without a key",
                context=ModelErrorContext(operation="set", target_name=self._name),
            )
        with self._lock:
            self._store[secret.key] = secret
        logger.debug(
            "Stored secret in memory vault",
            extra={"vault_name": self._name, "secret_key": secret.key},
        )
        return ModelSecretId(key=secret.key)

    def keys(self) -> list[str]:
        """List stored keys (never values)."""
        with self._lock:
            return sorted(self._store)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


__all__: list[str] = ["DEFAULT_MEMORY_VAULT_NAME", "VaultMemory"]
