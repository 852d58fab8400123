# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault Configuration Model.

Describes an externally configured vault backend. The backend itself is
built by ``fleetvault.vaults.create_vault`` keyed on ``type``.

Security Note:
    Options may reference where credentials live (environment variable
    names, addresses) but should not embed tokens. Backends read tokens from
    the environment when the option is absent.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fleetvault.enums import EnumVaultType

_VAULT_TYPE_ALIASES: dict[str, str] = {"hashi_corp": "hashicorp"}


class ModelVaultConfiguration(BaseModel):
    """Configuration for one vault backend.

    Attributes:
        name: Human-readable name of the vault
        type: Backend type
        options: Backend-specific string options

    Example:
        >>> config = ModelVaultConfiguration(
        ...     name="prod-vault",
        ...     type="hashicorp",
        ...     options={"url": "https://vault.example.com:8200"},
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="", description="Human-readable vault name")
    type: EnumVaultType = Field(description="Backend type")
    options: dict[str, str] = Field(
        default_factory=dict,
        description="Backend-specific options",
    )

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: object) -> object:
        """Accept ``HashiCorp``, ``hashi-corp`` and ``aws-secrets-manager`` spellings."""
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "_")
            return _VAULT_TYPE_ALIASES.get(normalized, normalized)
        return value


__all__: list[str] = ["ModelVaultConfiguration"]
