# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret, secret ID and vault info models.

A ModelSecret is the at-rest representation a vault returns. Its ``data``
payload stays opaque until decoded per ``encoding`` by
``fleetvault.codec.credential_from_secret``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from fleetvault.enums import EnumSecretEncoding


class ModelSecretId(BaseModel):
    """Backend-specific lookup key for a secret.

    The key is opaque (an ARN, a file path, a ``bucket/object`` path, ...)
    and never contains the secret itself.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(description="Backend-specific lookup key")


class ModelSecret(BaseModel):
    """Encoded secret payload plus its lookup key.

    Attributes:
        key: Lookup key the secret is stored under
        label: Optional human-readable label
        data: Opaque encoded payload (excluded from repr)
        encoding: How ``data`` is encoded
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(default="", description="Lookup key the secret is stored under")
    label: str = Field(default="", description="Optional human-readable label")
    data: bytes = Field(default=b"", repr=False, description="Opaque encoded payload")
    encoding: EnumSecretEncoding = Field(
        default=EnumSecretEncoding.UNDEFINED,
        description="Encoding of the data payload",
    )

    @property
    def secret_id(self) -> ModelSecretId:
        """Return the lookup ID for this secret."""
        return ModelSecretId(key=self.key)


class ModelVaultInfo(BaseModel):
    """Vault self-description, used for diagnostics only."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(description="Human-readable vault name")


__all__: list[str] = ["ModelSecret", "ModelSecretId", "ModelVaultInfo"]
