# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Structured (binary) encoding of credentials.

The structured encoding is the protocol-buffers wire format of the
credential message, so payloads written by other tools that share the
schema decode unchanged. Field numbers:

    secret_id         1  string
    type              2  enum (varint)
    user              3  string
    secret            4  bytes
    password         21  string
    private_key      22  string
    private_key_path 23  string

Empty fields are omitted on write (proto3 semantics). Unknown fields are
skipped on read.
"""

from __future__ import annotations

import logging

from fleetvault.enums import EnumCredentialType
from fleetvault.models.model_credential import ModelCredential

logger = logging.getLogger(__name__)

_WIRE_VARINT = 0
_WIRE_FIXED64 = 1
_WIRE_LENGTH_DELIMITED = 2
_WIRE_FIXED32 = 5

_FIELD_SECRET_ID = 1
_FIELD_TYPE = 2
_FIELD_USER = 3
_FIELD_SECRET = 4
_FIELD_PASSWORD = 21
_FIELD_PRIVATE_KEY = 22
_FIELD_PRIVATE_KEY_PATH = 23

_STRING_FIELDS: dict[int, str] = {
    _FIELD_SECRET_ID: "secret_id",
    _FIELD_USER: "user",
    _FIELD_PASSWORD: "password",
    _FIELD_PRIVATE_KEY: "private_key",
    _FIELD_PRIVATE_KEY_PATH: "private_key_path",
}

# varints longer than this cannot represent a 64-bit value
_MAX_VARINT_BYTES = 10


def _write_varint(out: bytearray, value: int) -> None:
    while True:
        towrite = value & 0x7F
        value >>= 7
        if value:
            out.append(towrite | 0x80)
        else:
            out.append(towrite)
            return


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    shift = 0
    for _ in range(_MAX_VARINT_BYTES):
        if pos >= len(data):
            raise ValueError("truncated varint")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
        shift += 7
    raise ValueError("varint too long")


def _write_bytes_field(out: bytearray, field_number: int, value: bytes) -> None:
    _write_varint(out, (field_number << 3) | _WIRE_LENGTH_DELIMITED)
    _write_varint(out, len(value))
    out += value


def encode_credential(credential: ModelCredential) -> bytes:
    """Encode a credential into the structured wire format."""
    out = bytearray()
    if credential.secret_id:
        _write_bytes_field(out, _FIELD_SECRET_ID, credential.secret_id.encode("utf-8"))
    if credential.type != EnumCredentialType.UNDEFINED:
        _write_varint(out, (_FIELD_TYPE << 3) | _WIRE_VARINT)
        _write_varint(out, int(credential.type))
    if credential.user:
        _write_bytes_field(out, _FIELD_USER, credential.user.encode("utf-8"))
    if credential.secret:
        _write_bytes_field(out, _FIELD_SECRET, credential.secret)
    if credential.password:
        _write_bytes_field(out, _FIELD_PASSWORD, credential.password.encode("utf-8"))
    if credential.private_key:
        _write_bytes_field(out, _FIELD_PRIVATE_KEY, credential.private_key.encode("utf-8"))
    if credential.private_key_path:
        _write_bytes_field(
            out, _FIELD_PRIVATE_KEY_PATH, credential.private_key_path.encode("utf-8")
        )
    return bytes(out)


def decode_credential(data: bytes) -> ModelCredential:
    """Decode a credential from the structured wire format.

    Raises:
        ValueError: If the payload is truncated, uses an unsupported wire
            type, or holds invalid UTF-8 in a string field
    """
    fields: dict[str, object] = {}
    pos = 0
    while pos < len(data):
        tag, pos = _read_varint(data, pos)
        field_number = tag >> 3
        wire_type = tag & 0x07
        if field_number == 0:
            raise ValueError("invalid field number 0")

        if wire_type == _WIRE_VARINT:
            value, pos = _read_varint(data, pos)
            if field_number == _FIELD_TYPE:
                try:
                    fields["type"] = EnumCredentialType(value)
                except ValueError:
                    logger.warning(
                        "Unknown credential type %d in structured payload",
                        value,
                        extra={"credential_type": value},
                    )
        elif wire_type == _WIRE_LENGTH_DELIMITED:
            length, pos = _read_varint(data, pos)
            end = pos + length
            if end > len(data):
                raise ValueError("truncated length-delimited field")
            chunk = data[pos:end]
            pos = end
            if field_number == _FIELD_SECRET:
                fields["secret"] = bytes(chunk)
            elif field_number in _STRING_FIELDS:
                fields[_STRING_FIELDS[field_number]] = chunk.decode("utf-8")
        elif wire_type == _WIRE_FIXED64:
            pos += 8
        elif wire_type == _WIRE_FIXED32:
            pos += 4
        else:
            raise ValueError(f"unsupported wire type {wire_type}")

        if pos > len(data):
            raise ValueError("truncated fixed-width field")

    return ModelCredential.model_validate(fields)


__all__: list[str] = ["decode_credential", "encode_credential"]
