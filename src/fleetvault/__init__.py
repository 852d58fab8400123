# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""fleetvault - Credential resolution for fleet inspection.

This package resolves the credentials needed to reach remote assets
without storing plaintext secrets in inventory configuration:

- Secret codec: credentials encoded as JSON, structured (protobuf wire
  format) or binary secret payloads
- Vault contract with in-memory and HashiCorp Vault backends
- Caching and multi-vault composition decorators
- Credential resolver merging caller overrides with stored secrets
- Credential policy queries evaluated per asset (Jinja2 sandbox)

Key Components:
    - ProtocolVault: interface every secret backend implements
    - VaultCached / VaultMulti: structural vault decorators
    - CredentialResolver: reference -> materialized credential
    - CredentialQueryRunner: asset metadata -> credential reference
    - VaultOrchestrator: wires the above for one inventory
"""

__all__: list[str] = []
