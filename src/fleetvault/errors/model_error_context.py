# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error Context Configuration Model.

This module defines the configuration model for error context, bundling the
common structured fields attached to fleetvault errors so error constructors
stay small while remaining strongly typed.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ModelErrorContext(BaseModel):
    """Configuration model for error context.

    Attributes:
        operation: Operation being performed (get, set, decode, run, ...)
        target_name: Target component or backend name
        correlation_id: Correlation ID for tracing one resolution across layers

    Example:
        >>> context = ModelErrorContext(
        ...     operation="get",
        ...     target_name="vault-hashicorp",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise VaultError("Backend unavailable", context=context)
    """

    model_config = ConfigDict(
        frozen=True,  # Immutable for thread safety
        extra="forbid",
    )

    operation: str | None = Field(
        default=None,
        description="Operation being performed (get, set, decode, run, ...)",
    )
    target_name: str | None = Field(
        default=None,
        description="Target component or backend name",
    )
    correlation_id: UUID | None = Field(
        default=None,
        description="Correlation ID for tracing",
    )


__all__ = ["ModelErrorContext"]
