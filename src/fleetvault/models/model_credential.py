# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential model.

A credential is either a *reference* (only ``secret_id`` set, optionally
``type``/``user`` as overrides) or *materialized* (secret material present).
``password``, ``private_key`` and ``private_key_path`` are sugar accepted in
static configuration; ``pre_process`` folds them into ``secret``/``type`` so
downstream code only inspects ``secret`` and ``type``.

Security Note:
    All fields holding secret material are excluded from repr so a
    credential can be logged by identity without leaking its content.
"""

from __future__ import annotations

import base64

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from fleetvault.enums import EnumCredentialType


class ModelCredential(BaseModel):
    """Typed, user-attributable authentication value.

    Attributes:
        secret_id: Key of the secret this credential refers to or came from
        type: Kind of authentication material
        user: User name to authenticate as
        secret: Secret material (password, key, token, ...)
        password: Sugar for a password, or the passphrase of a private key
        private_key: Sugar for an inline PEM private key
        private_key_path: Sugar for a private key loaded from a file

    Example:
        >>> ref = ModelCredential(secret_id="ssh-prod", user="ec2-user")
        >>> ref.is_reference
        True
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    secret_id: str = Field(default="", description="Key of the backing secret")
    type: EnumCredentialType = Field(
        default=EnumCredentialType.UNDEFINED,
        description="Kind of authentication material",
    )
    user: str = Field(default="", description="User name to authenticate as")
    secret: bytes = Field(default=b"", repr=False, description="Secret material")
    password: str = Field(default="", repr=False, description="Password sugar")
    private_key: str = Field(default="", repr=False, description="Private key sugar")
    private_key_path: str = Field(default="", description="Private key file path sugar")

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> object:
        """Accept type names (``"password"``) as well as enum values."""
        if isinstance(value, str):
            if not value.strip():
                return EnumCredentialType.UNDEFINED
            if value.isdigit():
                return int(value)
            resolved = EnumCredentialType.from_name(value)
            if resolved is None:
                raise ValueError(f"unknown credential type: {value!r}")
            return resolved
        return value

    @field_validator("secret", mode="before")
    @classmethod
    def _coerce_secret(cls, value: object) -> object:
        """Accept plain text secrets from static configuration."""
        if isinstance(value, str):
            return value.encode("utf-8")
        if value is None:
            return b""
        return value

    @field_serializer("type", when_used="json")
    def _serialize_type(self, value: EnumCredentialType) -> str:
        return value.type_name

    @field_serializer("secret", when_used="json")
    def _serialize_secret(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")

    @property
    def is_reference(self) -> bool:
        """True when the credential names a secret but carries no material."""
        return bool(self.secret_id) and not self.has_secret_material

    @property
    def has_secret_material(self) -> bool:
        """True when secret material or one of its sugar fields is set."""
        return bool(
            self.secret or self.password or self.private_key or self.private_key_path
        )

    def pre_process(self) -> None:
        """Fold sugar fields into ``secret`` and ``type``.

        - An inline private key becomes the secret; the type defaults to
          private_key. A password set alongside it stays as the passphrase.
        - A password becomes the secret when no secret is set yet; the type
          defaults to password.

        ``private_key_path`` is left alone here, loading files is the
        inventory's job since paths resolve relative to the inventory file.
        """
        if self.private_key:
            self.secret = self.private_key.encode("utf-8")
            self.private_key = ""
            if self.type == EnumCredentialType.UNDEFINED:
                self.type = EnumCredentialType.PRIVATE_KEY

        if self.password:
            if self.type == EnumCredentialType.UNDEFINED:
                self.type = EnumCredentialType.PASSWORD
            if not self.secret:
                self.secret = self.password.encode("utf-8")
                self.password = ""

    def clean_secrets(self) -> None:
        """Drop all secret material, keeping identity and type."""
        self.secret = b""
        self.password = ""
        self.private_key = ""
        self.private_key_path = ""

    def clean(self) -> None:
        """Reduce the credential to a bare reference (``secret_id`` only)."""
        self.user = ""
        self.type = EnumCredentialType.UNDEFINED
        self.clean_secrets()


__all__: list[str] = ["ModelCredential"]
