# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""fleetvault Errors Module.

Exports:
    ModelErrorContext: Configuration model for bundled error context
    FleetVaultError: Base error class
    VaultError: Vault backend failure
    SecretNotFoundError: "Not found" sentinel of the vault contract
    VaultTimeoutError: Vault operation timed out
    VaultConfigurationError: Invalid configuration (fatal at setup)
    CredentialQueryError: Policy query compile/evaluation failure
    SecretDecodeError: Secret payload could not be decoded
    SecretEncodeError: Credential could not be encoded
    CredentialResolutionError: Credential reference could not be materialized
    InventoryError: Inventory data could not be loaded or validated

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - Passwords, private keys, tokens or any secret payload
        - Decoded credential contents

    SAFE to include:
        - Secret keys (they name a secret, they never contain it)
        - Vault names and types
        - Asset identifiers
        - Correlation IDs
"""

from fleetvault.errors.errors_vault import (
    CredentialQueryError,
    CredentialResolutionError,
    FleetVaultError,
    InventoryError,
    SecretDecodeError,
    SecretEncodeError,
    SecretNotFoundError,
    VaultConfigurationError,
    VaultError,
    VaultTimeoutError,
)
from fleetvault.errors.model_error_context import ModelErrorContext

__all__: list[str] = [
    # Configuration model
    "ModelErrorContext",
    # Error classes
    "FleetVaultError",
    "VaultError",
    "SecretNotFoundError",
    "VaultTimeoutError",
    "VaultConfigurationError",
    "CredentialQueryError",
    "SecretDecodeError",
    "SecretEncodeError",
    "CredentialResolutionError",
    "InventoryError",
]
