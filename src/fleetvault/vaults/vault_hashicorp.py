# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HashiCorp Vault backend using the hvac client (KV v2 secrets engine).

Storage Layout:
    Each secret lives at ``<mount_point>/<key>`` with the fields

        label     human-readable label
        data      base64 of the encoded payload
        encoding  encoding name ("json", "structured", "binary")

    Entries written by other tools without a ``data`` field are read as a
    JSON-encoded credential built from the whole KV document, with
    password and private key sugar folded into the secret, so operators can
    store ``{"user": "...", "password": "..."}`` directly.

Security:
    - The token is held as SecretStr and never logged
    - Secret paths are logged only at debug level, values never
    - hvac exceptions are translated to fleetvault errors with sanitized
      messages

Thread Pool:
    hvac is synchronous; every call runs in a bounded ThreadPoolExecutor
    with ``asyncio.wait_for`` applying the configured timeout. Cancelling
    the awaiting task abandons the wait without blocking the event loop.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

import hvac
import hvac.exceptions
from pydantic import ValidationError

from fleetvault.codec import new_secret
from fleetvault.enums import EnumSecretEncoding
from fleetvault.errors import (
    ModelErrorContext,
    SecretNotFoundError,
    VaultError,
    VaultTimeoutError,
)
from fleetvault.models.model_credential import ModelCredential
from fleetvault.models.model_secret import ModelSecret, ModelSecretId, ModelVaultInfo
from fleetvault.vaults.model_hashicorp_vault_config import ModelHashiCorpVaultConfig

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_HASHICORP_VAULT_NAME: str = "hashicorp"


class VaultHashiCorp:
    """Vault backend storing secrets in HashiCorp Vault KV v2."""

    def __init__(
        self,
        config: ModelHashiCorpVaultConfig,
        name: str = DEFAULT_HASHICORP_VAULT_NAME,
        client: hvac.Client | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            config: Validated backend configuration
            name: Vault name reported by about()
            client: Pre-built hvac client (tests); built from config otherwise
        """
        self._config = config
        self._name = name
        self._client = client if client is not None else self._create_hvac_client(config)
        self._executor = ThreadPoolExecutor(
            max_workers=config.max_concurrent_operations,
            thread_name_prefix="fleetvault-hashicorp",
        )

    @staticmethod
    def _create_hvac_client(config: ModelHashiCorpVaultConfig) -> hvac.Client:
        return hvac.Client(
            url=config.url,
            token=config.token.get_secret_value() if config.token else None,
            namespace=config.namespace,
            verify=config.verify_ssl,
            timeout=config.timeout_seconds,
        )

    async def about(self) -> ModelVaultInfo:
        return ModelVaultInfo(name=self._name)

    async def get(self, secret_id: ModelSecretId) -> ModelSecret:
        key = secret_id.key

        def read_func() -> dict[str, object]:
            return self._client.secrets.kv.v2.read_secret_version(
                path=key,
                mount_point=self._config.mount_point,
                raise_on_deleted_version=True,
            )

        response = await self._execute("get", key, read_func)
        data_obj = response.get("data", {})
        data_dict = data_obj if isinstance(data_obj, dict) else {}
        fields = data_dict.get("data", {})
        if not isinstance(fields, dict):
            fields = {}
        return self._secret_from_fields(key, fields)

    async def set(self, secret: ModelSecret) -> ModelSecretId:
        if not secret.key:
            raise VaultError(
                "Cannot store a secret without a key",
                context=ModelErrorContext(operation="set", target_name=self._name),
            )

        fields = {
            "label": secret.label,
            "data": base64.b64encode(secret.data).decode("ascii"),
            "encoding": secret.encoding.name.lower(),
        }

        def write_func() -> dict[str, object]:
            return self._client.secrets.kv.v2.create_or_update_secret(
                path=secret.key,
                secret=fields,
                mount_point=self._config.mount_point,
            )

        await self._execute("set", secret.key, write_func)
        return ModelSecretId(key=secret.key)

    async def close(self) -> None:
        """Release the thread pool. The backend is unusable afterwards."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _secret_from_fields(self, key: str, fields: dict[str, object]) -> ModelSecret:
        context = ModelErrorContext(operation="get", target_name=self._name)
        raw_data = fields.get("data")

        if not isinstance(raw_data, str):
            return self._secret_from_document(key, fields, context)

        try:
            data = base64.b64decode(raw_data, validate=True)
        except binascii.Error as e:
            raise VaultError(
                "Stored secret data is not valid base64",
                context=context,
                secret_key=key,
            ) from e

        encoding_name = str(fields.get("encoding", "")).upper()
        try:
            encoding = EnumSecretEncoding[encoding_name]
        except KeyError:
            encoding = EnumSecretEncoding.UNDEFINED

        return ModelSecret(
            key=key,
            label=str(fields.get("label", "")),
            data=data,
            encoding=encoding,
        )

    def _secret_from_document(
        self,
        key: str,
        fields: dict[str, object],
        context: ModelErrorContext,
    ) -> ModelSecret:
        """Normalize a plain KV document into a JSON credential secret.

        Sugar fields are folded into ``secret``/``type`` here so the decoded
        credential looks like one written through ``set``.
        """
        try:
            credential = ModelCredential.model_validate(fields)
        except ValidationError as e:
            raise VaultError(
                f"Stored KV document is not a credential: {e.error_count()} error(s)",
                context=context,
                secret_key=key,
            ) from e

        credential.secret_id = key
        credential.pre_process()
        return new_secret(credential, EnumSecretEncoding.JSON)

    async def _execute(self, operation: str, key: str, func: Callable[[], T]) -> T:
        """Run a blocking hvac call in the thread pool and translate errors."""
        context = ModelErrorContext(operation=operation, target_name=self._name)
        loop = asyncio.get_running_loop()
        logger.debug(
            "Vault operation %s",
            operation,
            extra={"vault_name": self._name, "secret_key": key},
        )
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(self._executor, func),
                timeout=self._config.timeout_seconds,
            )
        except TimeoutError as e:
            raise VaultTimeoutError(
                "Vault operation timed out",
                context=context,
                timeout_seconds=self._config.timeout_seconds,
                secret_key=key,
            ) from e
        except hvac.exceptions.InvalidPath as e:
            raise SecretNotFoundError(
                "Secret not found",
                context=context,
                secret_key=key,
            ) from e
        except hvac.exceptions.Forbidden as e:
            raise VaultError(
                "Vault operation forbidden - check token permissions",
                context=context,
                secret_key=key,
            ) from e
        except hvac.exceptions.VaultDown as e:
            raise VaultError(
                "Vault is sealed or unavailable",
                context=context,
            ) from e
        except hvac.exceptions.VaultError as e:
            raise VaultError(
                f"Vault operation failed: {type(e).__name__}",
                context=context,
                secret_key=key,
            ) from e
        except OSError as e:
            # requests' connection errors derive from OSError
            raise VaultError(
                f"Cannot reach vault: {type(e).__name__}",
                context=context,
            ) from e


__all__: list[str] = ["DEFAULT_HASHICORP_VAULT_NAME", "VaultHashiCorp"]
