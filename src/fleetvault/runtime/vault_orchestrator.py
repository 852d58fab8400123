# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault orchestrator: one credential resolver for a whole inventory.

The orchestrator owns the wiring between:

    - an in-memory vault holding the credentials embedded in the inventory
    - an optional external vault (inventory ``spec.vault`` or set directly)
    - the VaultMulti / VaultCached decorators
    - the credential query runner

Composition:
    external + memory  ->  VaultMulti((external, memory))
    one of them        ->  that vault
    neither            ->  no vault; references fail, inline credentials
                           still pass through

With ``cache_credentials`` enabled the composed vault is wrapped in a
VaultCached. Whenever the external vault or the inventory changes the
composition, the cache and the resolver are rebuilt together, so a
resolver obtained earlier keeps working against the old composition.

Example:
    >>> orchestrator = VaultOrchestrator()
    >>> inventory = orchestrator.load_inventory(ModelInventory.from_file("inv.yml"))
    >>> results = await orchestrator.resolve_assets(inventory.spec.assets)
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Sequence

from fleetvault.enums import EnumCredentialType, EnumVaultType
from fleetvault.errors import FleetVaultError
from fleetvault.models.model_asset import ModelAsset
from fleetvault.models.model_credential import ModelCredential
from fleetvault.models.model_inventory import ModelInventory
from fleetvault.protocols import ProtocolVault
from fleetvault.runtime.credential_query_runner import CredentialQueryRunner
from fleetvault.runtime.credential_resolver import CredentialResolver
from fleetvault.runtime.model_asset_resolution import ModelAssetResolution
from fleetvault.runtime.model_vault_orchestrator_config import (
    ModelVaultOrchestratorConfig,
)
from fleetvault.runtime.policy_engine_jinja import create_policy_engine
from fleetvault.vaults import VaultCached, VaultMemory, VaultMulti, create_vault

logger = logging.getLogger(__name__)

EMBEDDED_VAULT_NAME: str = "inventory"


class VaultOrchestrator:
    """Composes vaults and resolves asset credentials.

    Thread Safety:
        Recomposition swaps the vault and resolver under a
        ``threading.Lock``; resolution reads a consistent snapshot of both.
    """

    def __init__(self, config: ModelVaultOrchestratorConfig | None = None) -> None:
        self._config = config or ModelVaultOrchestratorConfig()
        self._lock = threading.Lock()
        self._external_vault: ProtocolVault | None = None
        self._owns_external_vault = False
        self._memory_vault: VaultMemory | None = None
        self._vault: ProtocolVault | None = None
        self._resolver = CredentialResolver(None, self._config.resolve_timeout_seconds)
        self._config_query_runner: CredentialQueryRunner | None = None
        if self._config.credential_query:
            self._config_query_runner = self._create_query_runner(self._config.credential_query)
        self._query_runner = self._config_query_runner

    @property
    def config(self) -> ModelVaultOrchestratorConfig:
        return self._config

    @property
    def vault(self) -> ProtocolVault | None:
        """The composed vault (cached when caching is enabled)."""
        with self._lock:
            return self._vault

    @property
    def query_runner(self) -> CredentialQueryRunner | None:
        return self._query_runner

    # === Setup ===

    def load_inventory(self, inventory: ModelInventory) -> ModelInventory:
        """Load the credentials, vault and query of ``inventory``.

        The inventory is not modified: a pre-processed copy is returned whose
        assets carry credential references only.

        Raises:
            InventoryError: If credentials cannot be extracted or a
                reference is malformed
            VaultConfigurationError: If the inventory's vault is invalid
            CredentialQueryError: If the inventory's credential query is invalid
            SecretEncodeError: If an embedded credential cannot be encoded
        """
        processed = inventory.model_copy(deep=True)
        processed.pre_process()
        processed.validate_references()

        memory_vault: VaultMemory | None = None
        if processed.spec.credentials:
            memory_vault = VaultMemory.from_credentials(
                processed.spec.credentials,
                name=EMBEDDED_VAULT_NAME,
            )

        external_vault: ProtocolVault | None = None
        vault_config = processed.spec.vault
        if vault_config is not None and vault_config.type != EnumVaultType.NONE:
            external_vault = create_vault(vault_config)

        # the orchestrator's own query wins over the inventory's
        query_runner = self._config_query_runner
        if query_runner is None and processed.spec.credential_query:
            query_runner = self._create_query_runner(processed.spec.credential_query)

        self._memory_vault = memory_vault
        self._query_runner = query_runner
        if external_vault is not None:
            self._external_vault = external_vault
            self._owns_external_vault = True
        elif self._owns_external_vault:
            # the previous inventory's vault does not outlive it
            self._external_vault = None
            self._owns_external_vault = False
        self._recompose()

        logger.info(
            "Loaded inventory %s",
            processed.metadata.name,
            extra={
                "inventory_name": processed.metadata.name,
                "asset_count": len(processed.spec.assets),
                "credential_count": len(processed.spec.credentials),
            },
        )
        return processed

    def set_external_vault(self, vault: ProtocolVault | None) -> None:
        """Replace the external vault. The caller keeps ownership of ``vault``."""
        self._external_vault = vault
        self._owns_external_vault = False
        self._recompose()

    def _create_query_runner(self, source: str) -> CredentialQueryRunner:
        engine = create_policy_engine(self._config.query_engine)
        return CredentialQueryRunner.create(source, engine)

    def _recompose(self) -> None:
        vaults: list[ProtocolVault] = [
            vault for vault in (self._external_vault, self._memory_vault) if vault is not None
        ]

        composed: ProtocolVault | None
        if not vaults:
            composed = None
        elif len(vaults) == 1:
            composed = vaults[0]
        else:
            composed = VaultMulti(vaults)

        if composed is not None and self._config.cache_credentials:
            composed = VaultCached(composed)

        resolver = CredentialResolver(composed, self._config.resolve_timeout_seconds)
        with self._lock:
            self._vault = composed
            self._resolver = resolver

        logger.info(
            "Recomposed vaults",
            extra={
                "vault_count": len(vaults),
                "has_external_vault": self._external_vault is not None,
                "cache_credentials": self._config.cache_credentials,
            },
        )

    # === Resolution ===

    def get_creds_resolver(self) -> CredentialResolver:
        """Return the resolver over the current composition."""
        with self._lock:
            return self._resolver

    def run_credential_query(self, asset: ModelAsset) -> ModelCredential | None:
        """Run the configured credential query for ``asset``.

        Returns:
            Credential reference, or None when no query is configured

        Raises:
            CredentialQueryError: If the query fails for this asset
        """
        if self._query_runner is None:
            return None
        return self._query_runner.run(asset)

    async def resolve_asset(self, asset: ModelAsset) -> ModelAsset:
        """Return a copy of ``asset`` with every credential reference resolved.

        Credentials with a ``secret_id`` are replaced by the resolver's
        output; others pass through unchanged. Connections without any
        credentials get one from the credential query, when configured.
        The input asset is never mutated.

        Raises:
            CredentialQueryError: If the credential query fails
            CredentialResolutionError: If a reference cannot be resolved
            SecretNotFoundError: If a referenced secret does not exist
            VaultError: If a vault backend fails
            SecretDecodeError: If a stored secret cannot be decoded
        """
        resolver = self.get_creds_resolver()
        resolved = asset.model_copy(deep=True)

        queried: ModelCredential | None = None
        query_done = False
        for connection in resolved.connections:
            if not connection.credentials and self._query_runner is not None:
                if not query_done:
                    queried = self._query_runner.run(asset)
                    query_done = True
                if queried is not None and _is_usable_reference(queried):
                    connection.credentials = [queried.model_copy()]
                else:
                    logger.debug(
                        "Credential query returned no credential",
                        extra={"asset_mrn": asset.mrn},
                    )

            credentials: list[ModelCredential] = []
            for credential in connection.credentials:
                if credential.secret_id:
                    credentials.append(await resolver.get_credential(credential))
                else:
                    credentials.append(credential)
            connection.credentials = credentials

        return resolved

    async def resolve_assets(self, assets: Sequence[ModelAsset]) -> list[ModelAssetResolution]:
        """Resolve many assets concurrently.

        A failing asset never aborts the batch: its result carries the
        error and the untouched input asset. Results keep input order.
        """

        async def resolve_one(asset: ModelAsset) -> ModelAssetResolution:
            try:
                return ModelAssetResolution(asset=await self.resolve_asset(asset))
            except FleetVaultError as e:
                logger.warning(
                    "Cannot resolve credentials for asset %s: %s",
                    asset.name or asset.mrn,
                    e.message,
                    extra={"asset_mrn": asset.mrn, "error_type": type(e).__name__},
                )
                return ModelAssetResolution(asset=asset, error=e)

        return list(await asyncio.gather(*(resolve_one(asset) for asset in assets)))

    async def close(self) -> None:
        """Release the external vault when the orchestrator created it."""
        vault = self._external_vault
        if vault is None or not self._owns_external_vault:
            return
        close = getattr(vault, "close", None)
        if close is not None:
            await close()


def _is_usable_reference(credential: ModelCredential) -> bool:
    # ssh-agent style credentials need no secret
    return bool(credential.secret_id) or credential.type != EnumCredentialType.UNDEFINED


__all__: list[str] = ["EMBEDDED_VAULT_NAME", "VaultOrchestrator"]
