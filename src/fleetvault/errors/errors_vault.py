# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""fleetvault Error Classes.

Error Hierarchy:
    FleetVaultError (base error)
    ├── VaultError
    │   ├── SecretNotFoundError
    │   └── VaultTimeoutError
    ├── VaultConfigurationError
    │   └── CredentialQueryError
    ├── SecretDecodeError
    ├── SecretEncodeError
    ├── CredentialResolutionError
    └── InventoryError

All errors:
    - Support proper error chaining with ``raise ... from e``
    - Include structured context for debugging
    - Accept ModelErrorContext for bundled context parameters
    - Never carry secret values in their message or context

SecretNotFoundError is the "not found" sentinel of the vault contract.
Composition layers (VaultMulti) treat it as "try the next backend", every
other VaultError is a hard failure of that backend.
"""

from __future__ import annotations

from uuid import UUID

from fleetvault.errors.model_error_context import ModelErrorContext


class FleetVaultError(Exception):
    """Base error class for all fleetvault errors.

    Structured Fields (via ModelErrorContext):
        operation: Operation being performed
        target_name: Target component or backend name
        correlation_id: Correlation ID for tracing

    Example:
        >>> context = ModelErrorContext(operation="get", target_name="vault-memory")
        >>> raise FleetVaultError("Operation failed", context=context, secret_key="db")
    """

    def __init__(
        self,
        message: str,
        context: ModelErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize FleetVaultError with structured fields.

        Args:
            message: Human-readable error message
            context: Bundled error context (operation, target, correlation id)
            **extra_context: Additional context information
        """
        super().__init__(message)
        self.message = message
        structured_context: dict[str, object] = dict(extra_context)
        self.correlation_id: UUID | None = None
        if context is not None:
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            self.correlation_id = context.correlation_id
        self.context: dict[str, object] = structured_context


class VaultError(FleetVaultError):
    """Raised when a vault backend fails.

    Used for backend communication failures, permission problems and any
    other condition that is not "the secret does not exist".
    """


class SecretNotFoundError(VaultError):
    """Raised by a vault when no secret exists for the requested key.

    This is a sentinel, not a transient failure: it must never be retried.

    Example:
        >>> raise SecretNotFoundError(
        ...     "Secret not found",
        ...     context=ModelErrorContext(operation="get", target_name="vault-memory"),
        ...     secret_key="ssh-prod",
        ... )
    """


class VaultTimeoutError(VaultError):
    """Raised when a vault operation exceeds its timeout."""

    def __init__(
        self,
        message: str,
        context: ModelErrorContext | None = None,
        timeout_seconds: float | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize VaultTimeoutError.

        Args:
            message: Human-readable error message
            context: Bundled error context
            timeout_seconds: The timeout that was exceeded
            **extra_context: Additional context information
        """
        if timeout_seconds is not None:
            extra_context["timeout_seconds"] = timeout_seconds
        super().__init__(message, context=context, **extra_context)


class VaultConfigurationError(FleetVaultError):
    """Raised when vault or orchestrator configuration is invalid.

    Configuration errors are fatal at setup time.
    """


class CredentialQueryError(VaultConfigurationError):
    """Raised when a credential policy query cannot be compiled or evaluated."""


class SecretDecodeError(FleetVaultError):
    """Raised when a secret payload cannot be decoded into a credential.

    Covers corrupt payloads and unknown encodings.
    """


class SecretEncodeError(FleetVaultError):
    """Raised when a credential cannot be encoded into a secret."""


class CredentialResolutionError(FleetVaultError):
    """Raised when a credential reference cannot be materialized."""


class InventoryError(FleetVaultError):
    """Raised when inventory data cannot be loaded or fails validation."""


__all__: list[str] = [
    "CredentialQueryError",
    "CredentialResolutionError",
    "FleetVaultError",
    "InventoryError",
    "SecretDecodeError",
    "SecretEncodeError",
    "SecretNotFoundError",
    "VaultConfigurationError",
    "VaultError",
    "VaultTimeoutError",
]
