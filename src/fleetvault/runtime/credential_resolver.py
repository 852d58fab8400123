# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential resolver: turns credential references into usable credentials.

Resolution Steps:
    1. Reject a missing reference
    2. Fetch the secret named by ``reference.secret_id`` from the vault
    3. Decode the secret into a credential
    4. Merge the caller's overrides: a non-empty ``user`` and a defined
       ``type`` replace the stored values; nothing else is overridable

Not-found is not an error the resolver handles: SecretNotFoundError
propagates unchanged so callers can decide what a missing secret means.
No default value, no retry.

Caching:
    The resolver holds no cache itself. Construct it over a VaultCached to
    get a cached resolver; the orchestrator does this when credential
    caching is enabled.

Example:
    >>> resolver = CredentialResolver(VaultCached(vault), timeout_seconds=10.0)
    >>> credential = await resolver.get_credential(
    ...     ModelCredential(secret_id="ssh-prod", user="alice")
    ... )
"""

from __future__ import annotations

import asyncio
import logging

from fleetvault.codec import credential_from_secret
from fleetvault.enums import EnumCredentialType
from fleetvault.errors import (
    CredentialResolutionError,
    FleetVaultError,
    ModelErrorContext,
    VaultError,
    VaultTimeoutError,
)
from fleetvault.models.model_credential import ModelCredential
from fleetvault.models.model_secret import ModelSecret, ModelSecretId
from fleetvault.protocols import ProtocolVault

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Materializes credential references through one vault.

    Holds immutable references only and is safe to share between
    concurrent tasks.
    """

    def __init__(
        self,
        vault: ProtocolVault | None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            vault: Vault to fetch secrets from. None gives a resolver that
                fails every reference.
            timeout_seconds: Upper bound for each vault call, None for no limit
        """
        self._vault = vault
        self._timeout_seconds = timeout_seconds

    @property
    def vault(self) -> ProtocolVault | None:
        return self._vault

    async def get_credential(self, reference: ModelCredential | None) -> ModelCredential:
        """Resolve a credential reference.

        Args:
            reference: Credential naming a secret, optionally with
                ``user``/``type`` overrides

        Returns:
            Materialized credential (a new object; the reference is untouched)

        Raises:
            CredentialResolutionError: If the reference is None or no vault
                is configured
            SecretNotFoundError: If no secret exists for the reference
            VaultTimeoutError: If the vault call exceeded the timeout
            VaultError: If the vault backend failed
            SecretDecodeError: If the stored secret cannot be decoded
        """
        context = ModelErrorContext(operation="get_credential", target_name="credential_resolver")

        if reference is None:
            raise CredentialResolutionError("No credential reference provided", context=context)

        if self._vault is None:
            raise CredentialResolutionError(
                "No vault configured, cannot resolve credential reference",
                context=context,
                secret_key=reference.secret_id,
            )

        secret = await self._fetch(self._vault, ModelSecretId(key=reference.secret_id), context)
        credential = credential_from_secret(secret)

        overrides: dict[str, object] = {}
        if reference.user:
            overrides["user"] = reference.user
        if reference.type != EnumCredentialType.UNDEFINED:
            overrides["type"] = reference.type
        if overrides:
            credential = credential.model_copy(update=overrides)

        logger.debug(
            "Resolved credential",
            extra={
                "secret_key": reference.secret_id,
                "credential_type": credential.type.type_name,
            },
        )
        return credential

    async def _fetch(
        self,
        vault: ProtocolVault,
        secret_id: ModelSecretId,
        context: ModelErrorContext,
    ) -> ModelSecret:
        """Fetch one secret, mapping backend failures to fleetvault errors.

        Vault implementations outside this package may raise anything; those
        errors are wrapped in VaultError so a single backend fault stays a
        per-asset failure. Cancellation is not an Exception and propagates.
        """
        try:
            if self._timeout_seconds is None:
                return await vault.get(secret_id)
            return await asyncio.wait_for(
                vault.get(secret_id),
                timeout=self._timeout_seconds,
            )
        except FleetVaultError:
            raise
        except TimeoutError as e:
            raise VaultTimeoutError(
                "Timed out fetching secret",
                context=context,
                timeout_seconds=self._timeout_seconds,
                secret_key=secret_id.key,
            ) from e
        except Exception as e:
            raise VaultError(
                f"Vault backend failed: {type(e).__name__}",
                context=context,
                secret_key=secret_id.key,
            ) from e


__all__: list[str] = ["CredentialResolver"]
