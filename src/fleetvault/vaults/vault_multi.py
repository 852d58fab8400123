# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Composition of an ordered list of vaults into one.

The first vault is the writable primary; the rest are read-only fallbacks.
get() walks the list in order and falls through only on
SecretNotFoundError. Any other error stops the walk: a broken backend must
not be masked by a fallback that happens to hold a stale copy.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fleetvault.errors import (
    ModelErrorContext,
    SecretNotFoundError,
    VaultConfigurationError,
)
from fleetvault.models.model_secret import ModelSecret, ModelSecretId, ModelVaultInfo
from fleetvault.protocols import ProtocolVault

logger = logging.getLogger(__name__)


class VaultMulti:
    """Ordered, fixed list of vaults tried in turn (primary first)."""

    def __init__(self, vaults: Sequence[ProtocolVault]) -> None:
        if not vaults:
            raise VaultConfigurationError(
                "VaultMulti requires at least one vault",
                context=ModelErrorContext(operation="init", target_name="vault-multi"),
            )
        self._vaults: tuple[ProtocolVault, ...] = tuple(vaults)

    @property
    def vaults(self) -> tuple[ProtocolVault, ...]:
        return self._vaults

    async def about(self) -> ModelVaultInfo:
        names = [(await vault.about()).name for vault in self._vaults]
        return ModelVaultInfo(name=f"multi({', '.join(names)})")

    async def get(self, secret_id: ModelSecretId) -> ModelSecret:
        """Return the secret from the first vault that has it.

        Raises:
            SecretNotFoundError: If every vault reports not-found
            VaultError: The first hard failure encountered
        """
        for index, vault in enumerate(self._vaults):
            try:
                return await vault.get(secret_id)
            except SecretNotFoundError:
                logger.debug(
                    "Secret not in vault %d, trying next",
                    index,
                    extra={"secret_key": secret_id.key, "vault_index": index},
                )

        raise SecretNotFoundError(
            "Secret not found in any vault",
            context=ModelErrorContext(operation="get", target_name="vault-multi"),
            secret_key=secret_id.key,
            vault_count=len(self._vaults),
        )

    async def set(self, secret: ModelSecret) -> ModelSecretId:
        """Write to the primary (first) vault only."""
        return await self._vaults[0].set(secret)


__all__: list[str] = ["VaultMulti"]
