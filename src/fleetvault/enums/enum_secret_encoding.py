# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret payload encoding enumeration."""

from __future__ import annotations

from enum import IntEnum


class EnumSecretEncoding(IntEnum):
    """How a secret's opaque ``data`` payload is encoded.

    Attributes:
        UNDEFINED: No encoding recorded. Cannot be decoded.
        JSON: Human-inspectable JSON document.
        STRUCTURED: Compact schema-based binary form.
        BINARY: Opaque bytes, copied verbatim into the credential secret.
    """

    UNDEFINED = 0
    JSON = 1
    STRUCTURED = 2
    BINARY = 3


__all__ = ["EnumSecretEncoding"]
