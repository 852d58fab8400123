# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential resolution runtime.

Exports:
    CredentialResolver: Materializes credential references through a vault
    CredentialQueryRunner: Computes credential references from asset metadata
    PolicyEngineJinjaExpression, PolicyEngineJinjaTemplate: Policy engines
    VaultOrchestrator: Wires vaults, resolver and query runner together
    ModelVaultOrchestratorConfig: Orchestrator configuration
    ModelAssetResolution: Per-asset batch resolution result
"""

from fleetvault.runtime.credential_query_runner import (
    CredentialQueryRunner,
    build_policy_context,
)
from fleetvault.runtime.credential_resolver import CredentialResolver
from fleetvault.runtime.model_asset_resolution import ModelAssetResolution
from fleetvault.runtime.model_vault_orchestrator_config import (
    ModelVaultOrchestratorConfig,
)
from fleetvault.runtime.policy_engine_jinja import (
    ENGINE_EXPRESSION,
    ENGINE_TEMPLATE,
    PolicyEngineJinjaExpression,
    PolicyEngineJinjaTemplate,
    create_policy_engine,
)
from fleetvault.runtime.vault_orchestrator import EMBEDDED_VAULT_NAME, VaultOrchestrator

__all__: list[str] = [
    "EMBEDDED_VAULT_NAME",
    "ENGINE_EXPRESSION",
    "ENGINE_TEMPLATE",
    "CredentialQueryRunner",
    "CredentialResolver",
    "ModelAssetResolution",
    "ModelVaultOrchestratorConfig",
    "PolicyEngineJinjaExpression",
    "PolicyEngineJinjaTemplate",
    "VaultOrchestrator",
    "build_policy_context",
    "create_policy_engine",
]
