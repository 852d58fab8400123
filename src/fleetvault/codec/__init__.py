# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Encoding and decoding of credentials into secret payloads."""

from fleetvault.codec.secret_codec import credential_from_secret, new_secret
from fleetvault.codec.wire_structured import decode_credential, encode_credential

__all__: list[str] = [
    "credential_from_secret",
    "decode_credential",
    "encode_credential",
    "new_secret",
]
