# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Cache statistics model for VaultCached."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelVaultCacheStats(BaseModel):
    """Point-in-time cache statistics. Never contains secret values."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_entries: int = Field(default=0, ge=0, description="Cached secrets")
    hits: int = Field(default=0, ge=0, description="Lookups served from cache")
    misses: int = Field(default=0, ge=0, description="Lookups sent to the inner vault")


__all__: list[str] = ["ModelVaultCacheStats"]
