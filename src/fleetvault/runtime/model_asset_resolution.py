# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Per-asset outcome of batch credential resolution."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from fleetvault.errors import FleetVaultError
from fleetvault.models.model_asset import ModelAsset


class ModelAssetResolution(BaseModel):
    """Resolved asset, or the error that stopped its resolution.

    On failure ``asset`` is the untouched input asset.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    asset: ModelAsset
    error: FleetVaultError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__: list[str] = ["ModelAssetResolution"]
