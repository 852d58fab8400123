# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Structured result of a credential policy query."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ModelCredentialQueryResponse(BaseModel):
    """Fields a credential policy may return.

    ``type`` stays a plain string here; mapping it onto EnumCredentialType
    is the query runner's job, where unknown names are logged rather than
    rejected. Unknown keys in the policy output are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(default="", description="Credential type name")
    user: str = Field(default="", description="User name")
    secret_id: str = Field(default="", description="Key of the secret to use")

    @field_validator("type", "user", "secret_id", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        if value is None:
            return ""
        return value


__all__: list[str] = ["ModelCredentialQueryResponse"]
