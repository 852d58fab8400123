# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Vault backend type enumeration."""

from __future__ import annotations

from enum import Enum


class EnumVaultType(str, Enum):
    """Backend types a vault configuration may name.

    Only a subset is constructible by ``fleetvault.vaults.create_vault``;
    the remaining values are recognized so that configurations written for
    other deployments parse and fail with a clear message.
    """

    NONE = "none"
    KEYRING = "keyring"
    LINUX_KERNEL_KEYRING = "linux_kernel_keyring"
    ENCRYPTED_FILE = "encrypted_file"
    HASHICORP = "hashicorp"
    GCP_SECRETS_MANAGER = "gcp_secrets_manager"
    AWS_SECRETS_MANAGER = "aws_secrets_manager"
    AWS_PARAMETER_STORE = "aws_parameter_store"
    GCP_BERGLAS = "gcp_berglas"
    MEMORY = "memory"


__all__ = ["EnumVaultType"]
