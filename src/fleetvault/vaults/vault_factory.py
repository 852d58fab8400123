# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Construction of vault backends from configuration."""

from __future__ import annotations

import logging

from fleetvault.enums import EnumVaultType
from fleetvault.errors import ModelErrorContext, VaultConfigurationError
from fleetvault.models.model_vault_configuration import ModelVaultConfiguration
from fleetvault.protocols import ProtocolVault
from fleetvault.vaults.model_hashicorp_vault_config import ModelHashiCorpVaultConfig
from fleetvault.vaults.vault_hashicorp import VaultHashiCorp
from fleetvault.vaults.vault_memory import VaultMemory

logger = logging.getLogger(__name__)

SUPPORTED_VAULT_TYPES: frozenset[EnumVaultType] = frozenset(
    {EnumVaultType.MEMORY, EnumVaultType.HASHICORP}
)


def create_vault(config: ModelVaultConfiguration) -> ProtocolVault:
    """Build the vault backend described by ``config``.

    The vault name defaults to the type name when the configuration leaves
    it empty.

    Raises:
        VaultConfigurationError: If the type is unsupported or its options
            are invalid
    """
    name = config.name or config.type.value

    if config.type == EnumVaultType.MEMORY:
        vault: ProtocolVault = VaultMemory(name=name)
    elif config.type == EnumVaultType.HASHICORP:
        vault = VaultHashiCorp(ModelHashiCorpVaultConfig.from_options(config.options), name=name)
    else:
        raise VaultConfigurationError(
            f"Unsupported vault type: {config.type.value}",
            context=ModelErrorContext(operation="create_vault", target_name=name),
            vault_type=config.type.value,
        )

    logger.debug(
        "Created vault",
        extra={"vault_name": name, "vault_type": config.type.value},
    )
    return vault


__all__: list[str] = ["SUPPORTED_VAULT_TYPES", "create_vault"]
