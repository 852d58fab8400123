# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault backends and decorators.

Exports:
    VaultMemory: Dict-backed vault
    VaultHashiCorp: HashiCorp Vault KV v2 backend (hvac)
    VaultCached: Read-through cache in front of any vault
    VaultMulti: Ordered composition of vaults
    create_vault: Backend factory keyed on EnumVaultType
"""

from fleetvault.vaults.model_hashicorp_vault_config import ModelHashiCorpVaultConfig
from fleetvault.vaults.model_vault_cache_stats import ModelVaultCacheStats
from fleetvault.vaults.vault_cached import VaultCached
from fleetvault.vaults.vault_factory import SUPPORTED_VAULT_TYPES, create_vault
from fleetvault.vaults.vault_hashicorp import DEFAULT_HASHICORP_VAULT_NAME, VaultHashiCorp
from fleetvault.vaults.vault_memory import DEFAULT_MEMORY_VAULT_NAME, VaultMemory
from fleetvault.vaults.vault_multi import VaultMulti

__all__: list[str] = [
    "DEFAULT_HASHICORP_VAULT_NAME",
    "DEFAULT_MEMORY_VAULT_NAME",
    "SUPPORTED_VAULT_TYPES",
    "ModelHashiCorpVaultConfig",
    "ModelVaultCacheStats",
    "VaultCached",
    "VaultHashiCorp",
    "VaultMemory",
    "VaultMulti",
    "create_vault",
]
