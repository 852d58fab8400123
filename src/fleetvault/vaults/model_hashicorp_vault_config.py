# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HashiCorp Vault Backend Configuration Model.

Security Note:
    The token field uses SecretStr to prevent accidental logging of
    sensitive credentials. Tokens should come from the ``VAULT_TOKEN``
    environment variable, never from inventory files.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from fleetvault.errors import ModelErrorContext, VaultConfigurationError

ENV_VAULT_ADDR: str = "VAULT_ADDR"
ENV_VAULT_TOKEN: str = "VAULT_TOKEN"
ENV_VAULT_NAMESPACE: str = "VAULT_NAMESPACE"

_FALSE_VALUES: frozenset[str] = frozenset({"0", "false", "no", "off"})


class ModelHashiCorpVaultConfig(BaseModel):
    """Configuration for the HashiCorp Vault (KV v2) backend.

    Attributes:
        url: Vault server URL (e.g. "https://vault.example.com:8200")
        token: Vault token (SecretStr, optional)
        namespace: Vault Enterprise namespace (optional)
        mount_point: KV v2 mount point (default "secret")
        verify_ssl: Whether to verify TLS certificates (default True)
        timeout_seconds: Per-operation timeout in seconds
        max_concurrent_operations: Thread pool size for the blocking client

    Example:
        >>> config = ModelHashiCorpVaultConfig(
        ...     url="https://vault.example.com:8200",
        ...     token=SecretStr("s.1234567890"),
        ... )
        >>> print(config.token)
        **********
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(min_length=1, description="Vault server URL")
    token: SecretStr | None = Field(default=None, description="Vault token")
    namespace: str | None = Field(default=None, description="Vault namespace")
    mount_point: str = Field(default="secret", min_length=1, description="KV v2 mount")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Operation timeout in seconds",
    )
    max_concurrent_operations: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Thread pool size for blocking client calls",
    )

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, str],
        environ: Mapping[str, str] | None = None,
    ) -> ModelHashiCorpVaultConfig:
        """Build the config from vault configuration options.

        ``url``, ``token`` and ``namespace`` fall back to ``VAULT_ADDR``,
        ``VAULT_TOKEN`` and ``VAULT_NAMESPACE``.

        Raises:
            VaultConfigurationError: If required options are missing or invalid
        """
        env = os.environ if environ is None else environ
        context = ModelErrorContext(operation="configure", target_name="vault-hashicorp")

        url = options.get("url") or env.get(ENV_VAULT_ADDR)
        if not url:
            raise VaultConfigurationError(
                f"HashiCorp vault requires the 'url' option or {ENV_VAULT_ADDR}",
                context=context,
            )

        raw: dict[str, object] = {"url": url}
        token = options.get("token") or env.get(ENV_VAULT_TOKEN)
        if token:
            raw["token"] = SecretStr(token)
        namespace = options.get("namespace") or env.get(ENV_VAULT_NAMESPACE)
        if namespace:
            raw["namespace"] = namespace
        if "mount_point" in options:
            raw["mount_point"] = options["mount_point"]
        if "verify_ssl" in options:
            raw["verify_ssl"] = options["verify_ssl"].strip().lower() not in _FALSE_VALUES
        if "timeout_seconds" in options:
            raw["timeout_seconds"] = options["timeout_seconds"]
        if "max_concurrent_operations" in options:
            raw["max_concurrent_operations"] = options["max_concurrent_operations"]

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise VaultConfigurationError(
                f"Invalid HashiCorp vault configuration: {e.error_count()} error(s)",
                context=context,
            ) from e


__all__: list[str] = [
    "ENV_VAULT_ADDR",
    "ENV_VAULT_NAMESPACE",
    "ENV_VAULT_TOKEN",
    "ModelHashiCorpVaultConfig",
]
