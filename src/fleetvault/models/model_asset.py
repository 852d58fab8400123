# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Asset, connection and platform models.

Only the parts of an asset that credential resolution needs are modelled:
identity (mrn, name), labels, platform, and the connections with their
credentials.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from fleetvault.models.model_credential import ModelCredential


class ModelPlatform(BaseModel):
    """Detected platform of an asset."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    release: str = ""
    arch: str = ""
    title: str = ""
    family: list[str] = Field(default_factory=list)


class ModelConnection(BaseModel):
    """One way of connecting to an asset."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(default="", description="Connection type (ssh, winrm, aws, ...)")
    host: str = ""
    port: int = 0
    path: str = ""
    insecure: bool = False
    credentials: list[ModelCredential] = Field(default_factory=list)
    options: dict[str, str] = Field(default_factory=dict)


class ModelAsset(BaseModel):
    """An inspectable asset.

    Attributes:
        mrn: Asset identifier
        name: Display name
        labels: Free-form labels (used by credential policies)
        platform: Detected platform, None when unknown
        connections: Connection configurations
    """

    model_config = ConfigDict(extra="ignore")

    mrn: str = ""
    name: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    platform: ModelPlatform | None = None
    connections: list[ModelConnection] = Field(default_factory=list)


__all__: list[str] = ["ModelAsset", "ModelConnection", "ModelPlatform"]
