# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Configuration model for the vault orchestrator."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fleetvault.errors import ModelErrorContext, VaultConfigurationError

__all__: list[str] = [
    "ENV_CACHE_CREDENTIALS",
    "ENV_CREDENTIAL_QUERY_ENGINE",
    "ENV_RESOLVE_TIMEOUT_SECONDS",
    "ModelVaultOrchestratorConfig",
]

ENV_CACHE_CREDENTIALS: Final[str] = "FLEETVAULT_CACHE_CREDENTIALS"
ENV_RESOLVE_TIMEOUT_SECONDS: Final[str] = "FLEETVAULT_RESOLVE_TIMEOUT_SECONDS"
ENV_CREDENTIAL_QUERY_ENGINE: Final[str] = "FLEETVAULT_CREDENTIAL_QUERY_ENGINE"

_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


class ModelVaultOrchestratorConfig(BaseModel):
    """Configuration for VaultOrchestrator.

    Attributes:
        cache_credentials: Wrap the composed vault in VaultCached
        resolve_timeout_seconds: Per vault call timeout, None for no limit
        credential_query: Policy source overriding the inventory's query
        query_engine: Policy engine name ("expression" or "template")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cache_credentials: bool = Field(default=True)
    resolve_timeout_seconds: float | None = Field(default=None, gt=0)
    credential_query: str = Field(default="")
    query_engine: Literal["expression", "template"] = Field(default="expression")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ModelVaultOrchestratorConfig:
        """Create config from environment variables.

        Reads FLEETVAULT_CACHE_CREDENTIALS, FLEETVAULT_RESOLVE_TIMEOUT_SECONDS
        and FLEETVAULT_CREDENTIAL_QUERY_ENGINE. Unset variables keep their
        defaults.

        Raises:
            VaultConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        raw: dict[str, object] = {}

        cache = env.get(ENV_CACHE_CREDENTIALS)
        if cache is not None and cache.strip():
            raw["cache_credentials"] = cache.strip().lower() not in _FALSE_VALUES
        timeout = env.get(ENV_RESOLVE_TIMEOUT_SECONDS)
        if timeout is not None and timeout.strip():
            raw["resolve_timeout_seconds"] = timeout.strip()
        engine = env.get(ENV_CREDENTIAL_QUERY_ENGINE)
        if engine is not None and engine.strip():
            raw["query_engine"] = engine.strip().lower()

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise VaultConfigurationError(
                f"Invalid orchestrator configuration in environment: {e.error_count()} error(s)",
                context=ModelErrorContext(operation="from_env", target_name="vault_orchestrator"),
            ) from e
