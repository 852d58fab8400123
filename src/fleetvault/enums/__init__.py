# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Enumerations for fleetvault.

Exports:
    EnumCredentialType: Kind of authentication material a credential carries
    EnumSecretEncoding: Encoding of a secret's opaque payload
    EnumVaultType: Vault backend types
"""

from fleetvault.enums.enum_credential_type import EnumCredentialType
from fleetvault.enums.enum_secret_encoding import EnumSecretEncoding
from fleetvault.enums.enum_vault_type import EnumVaultType

__all__: list[str] = [
    "EnumCredentialType",
    "EnumSecretEncoding",
    "EnumVaultType",
]
