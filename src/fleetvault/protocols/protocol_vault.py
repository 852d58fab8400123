# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for vault backends.

This module defines the ProtocolVault interface every secret backend
implements. It is deliberately minimal: describe yourself, fetch a secret
by key, store a secret and return its key.

Architecture Context:
    - Concrete backends (VaultMemory, VaultHashiCorp, ...) own connection
      setup, authentication and retries
    - Decorators (VaultCached, VaultMulti) wrap any ProtocolVault and satisfy
      the same protocol, so they compose arbitrarily, e.g.
      ``VaultCached(VaultMulti((primary, fallback)))``
    - CredentialResolver and VaultOrchestrator depend only on this protocol

Example Usage:
    ```python
    from fleetvault.protocols import ProtocolVault

    class DictVault:
        def __init__(self) -> None:
            self._store: dict[str, ModelSecret] = {}

        async def about(self) -> ModelVaultInfo:
            return ModelVaultInfo(name="dict")

        async def get(self, secret_id: ModelSecretId) -> ModelSecret:
            try:
                return self._store[secret_id.key]
            except KeyError:
                raise SecretNotFoundError("Secret not found") from None

        async def set(self, secret: ModelSecret) -> ModelSecretId:
            self._store[secret.key] = secret
            return ModelSecretId(key=secret.key)

    assert isinstance(DictVault(), ProtocolVault)
    ```

Error Handling:
    - get() MUST raise SecretNotFoundError (and nothing else) when the key
      does not exist; composition layers rely on it to fall through to the
      next backend. SecretNotFoundError is never a transient failure.
    - Any other failure raises VaultError or a subclass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fleetvault.models.model_secret import ModelSecret, ModelSecretId, ModelVaultInfo

__all__ = [
    "ProtocolVault",
]


@runtime_checkable
class ProtocolVault(Protocol):
    """Secret backend protocol.

    Concurrency Safety:
        Implementations must be safe for concurrent use: fleet scans resolve
        credentials for many assets at once. Implementations may block on
        network I/O but must do so without blocking the event loop (run
        synchronous clients in an executor).
    """

    async def about(self) -> ModelVaultInfo:
        """Describe the vault (diagnostics only)."""
        ...

    async def get(self, secret_id: ModelSecretId) -> ModelSecret:
        """Fetch a secret by key.

        Raises:
            SecretNotFoundError: If no secret exists for the key
            VaultError: On any other backend failure
        """
        ...

    async def set(self, secret: ModelSecret) -> ModelSecretId:
        """Store a secret and return the key it is stored under.

        Raises:
            VaultError: If the secret cannot be stored
        """
        ...
