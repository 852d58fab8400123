# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault test doubles implementing the vault contract."""

from __future__ import annotations

import asyncio

from fleetvault.enums import EnumSecretEncoding
from fleetvault.errors import ModelErrorContext, SecretNotFoundError
from fleetvault.models import ModelSecret, ModelSecretId, ModelVaultInfo


class RecordingVault:
    """Dict-backed vault that records every call it receives."""

    def __init__(
        self,
        name: str = "recording",
        secrets: dict[str, ModelSecret] | None = None,
    ) -> None:
        self.name = name
        self.secrets: dict[str, ModelSecret] = dict(secrets or {})
        self.get_calls: list[str] = []
        self.set_calls: list[str] = []
        self.error: BaseException | None = None
        self.key_errors: dict[str, Exception] = {}

    async def about(self) -> ModelVaultInfo:
        return ModelVaultInfo(name=self.name)

    async def get(self, secret_id: ModelSecretId) -> ModelSecret:
        self.get_calls.append(secret_id.key)
        if self.error is not None:
            raise self.error
        if secret_id.key in self.key_errors:
            raise self.key_errors[secret_id.key]
        secret = self.secrets.get(secret_id.key)
        if secret is None:
            raise SecretNotFoundError(
                "Secret not found",
                context=ModelErrorContext(operation="get", target_name=self.name),
                secret_key=secret_id.key,
            )
        return secret

    async def set(self, secret: ModelSecret) -> ModelSecretId:
        self.set_calls.append(secret.key)
        self.secrets[secret.key] = secret
        return ModelSecretId(key=secret.key)


class BlockingVault(RecordingVault):
    """Recording vault whose get() blocks until ``release`` is set."""

    def __init__(
        self,
        name: str = "blocking",
        secrets: dict[str, ModelSecret] | None = None,
    ) -> None:
        super().__init__(name=name, secrets=secrets)
        self.release = asyncio.Event()

    async def get(self, secret_id: ModelSecretId) -> ModelSecret:
        await self.release.wait()
        return await super().get(secret_id)


def binary_secret(key: str, data: bytes = b"payload") -> ModelSecret:
    """Build a binary-encoded secret."""
    return ModelSecret(key=key, data=data, encoding=EnumSecretEncoding.BINARY)
