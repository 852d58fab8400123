# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Data models for fleetvault.

Exports:
    ModelSecretId, ModelSecret, ModelVaultInfo: Vault contract models
    ModelCredential: Credential reference or materialized credential
    ModelCredentialQueryResponse: Structured result of a policy query
    ModelVaultConfiguration: External vault configuration
    ModelAsset, ModelConnection, ModelPlatform: Asset models
    ModelInventory: Inventory of assets and credentials
"""

from fleetvault.models.model_asset import ModelAsset, ModelConnection, ModelPlatform
from fleetvault.models.model_credential import ModelCredential
from fleetvault.models.model_credential_query_response import (
    ModelCredentialQueryResponse,
)
from fleetvault.models.model_inventory import (
    INVENTORY_FILE_PATH_LABEL,
    ModelInventory,
    ModelInventoryMetadata,
    ModelInventorySpec,
)
from fleetvault.models.model_secret import ModelSecret, ModelSecretId, ModelVaultInfo
from fleetvault.models.model_vault_configuration import ModelVaultConfiguration

__all__: list[str] = [
    "INVENTORY_FILE_PATH_LABEL",
    "ModelAsset",
    "ModelConnection",
    "ModelCredential",
    "ModelCredentialQueryResponse",
    "ModelInventory",
    "ModelInventoryMetadata",
    "ModelInventorySpec",
    "ModelPlatform",
    "ModelSecret",
    "ModelSecretId",
    "ModelVaultConfiguration",
    "ModelVaultInfo",
]
