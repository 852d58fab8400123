# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential type enumeration.

The integer values are part of the structured (wire) encoding of a
credential and must never be renumbered.
"""

from __future__ import annotations

from enum import IntEnum


class EnumCredentialType(IntEnum):
    """Kind of authentication material a credential carries.

    Attributes:
        UNDEFINED: No type set. Credential references carry this value.
        PASSWORD: Secret holds a password.
        PRIVATE_KEY: Secret holds a PEM private key (password is its passphrase).
        SSH_AGENT: Authenticate through a running SSH agent, no secret material.
        BEARER: Secret holds a bearer token.
        CREDENTIALS_QUERY: Credential is computed by a policy query.
        JSON: Secret holds a provider-specific JSON document.
        CLOUD_INSTANCE_CONNECT: Short-lived key pushed through a cloud instance-connect API.
        CLOUD_SESSION: Cloud-managed session (e.g. a systems-manager session).
        PKCS12: Secret holds a PKCS#12 bundle.
    """

    UNDEFINED = 0
    PASSWORD = 1
    PRIVATE_KEY = 2
    SSH_AGENT = 3
    BEARER = 4
    CREDENTIALS_QUERY = 5
    JSON = 6
    CLOUD_INSTANCE_CONNECT = 7
    CLOUD_SESSION = 8
    PKCS12 = 9

    @classmethod
    def from_name(cls, name: str) -> EnumCredentialType | None:
        """Look up a type by its lowercase name.

        Legacy names written by older tooling are accepted as aliases.

        Args:
            name: Type name such as ``"password"`` or ``"private_key"``

        Returns:
            The matching member, or None when the name is not recognized
        """
        normalized = name.strip().lower()
        normalized = _LEGACY_TYPE_NAMES.get(normalized, normalized)
        try:
            return cls[normalized.upper()]
        except KeyError:
            return None

    @property
    def type_name(self) -> str:
        """Lowercase name used in JSON and policy output."""
        return self.name.lower()


_LEGACY_TYPE_NAMES: dict[str, str] = {
    "aws_ec2_instance_connect": "cloud_instance_connect",
    "aws_ec2_ssm_session": "cloud_session",
}


__all__ = ["EnumCredentialType"]
