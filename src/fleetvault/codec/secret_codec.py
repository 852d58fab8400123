# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret codec: credential <-> secret payload.

Encodings:
    - JSON: human-inspectable document with keys ``secret_id``, ``type``
      (type name; integers are accepted on read), ``user``, ``secret``
      (base64), ``password``, ``private_key``, ``private_key_path``.
      Empty fields are omitted.
    - STRUCTURED: compact protocol-buffers wire form, see
      ``fleetvault.codec.wire_structured``.
    - BINARY: opaque passthrough. Decoding copies the payload verbatim into
      ``ModelCredential.secret``; there is no binary write path through
      ``new_secret``, build the ModelSecret directly instead.

Invariant:
    A credential decoded from a secret always carries that secret's key as
    ``secret_id``, whatever the payload says.
"""

from __future__ import annotations

import base64
import binascii
import json

from pydantic import ValidationError

from fleetvault.codec.wire_structured import decode_credential, encode_credential
from fleetvault.enums import EnumSecretEncoding
from fleetvault.errors import ModelErrorContext, SecretDecodeError, SecretEncodeError
from fleetvault.models.model_credential import ModelCredential
from fleetvault.models.model_secret import ModelSecret


def credential_from_secret(secret: ModelSecret) -> ModelCredential:
    """Decode a secret into a credential.

    Args:
        secret: Secret as returned by a vault

    Returns:
        Materialized credential with ``secret_id`` set to ``secret.key``

    Raises:
        SecretDecodeError: If the encoding is unknown or the payload is corrupt
    """
    context = ModelErrorContext(operation="decode", target_name="secret_codec")

    if secret.encoding == EnumSecretEncoding.BINARY:
        credential = ModelCredential(secret=secret.data)
    elif secret.encoding == EnumSecretEncoding.STRUCTURED:
        try:
            credential = decode_credential(secret.data)
        except (ValueError, ValidationError) as e:
            raise SecretDecodeError(
                "Corrupt structured secret payload",
                context=context,
                secret_key=secret.key,
            ) from e
    elif secret.encoding == EnumSecretEncoding.JSON:
        credential = _decode_json(secret, context)
    else:
        raise SecretDecodeError(
            f"Unknown secret encoding: {secret.encoding!r}",
            context=context,
            secret_key=secret.key,
        )

    credential.secret_id = secret.key
    return credential


def _decode_json(secret: ModelSecret, context: ModelErrorContext) -> ModelCredential:
    try:
        raw = json.loads(secret.data)
    except (ValueError, UnicodeDecodeError) as e:
        raise SecretDecodeError(
            "Secret payload is not valid JSON",
            context=context,
            secret_key=secret.key,
        ) from e

    if not isinstance(raw, dict):
        raise SecretDecodeError(
            "JSON secret payload must be an object",
            context=context,
            secret_key=secret.key,
        )

    encoded_secret = raw.get("secret")
    if isinstance(encoded_secret, str):
        try:
            raw["secret"] = base64.b64decode(encoded_secret, validate=True)
        except binascii.Error as e:
            raise SecretDecodeError(
                "Secret field is not valid base64",
                context=context,
                secret_key=secret.key,
            ) from e

    try:
        return ModelCredential.model_validate(raw)
    except ValidationError as e:
        raise SecretDecodeError(
            f"JSON secret payload does not match credential schema: "
            f"{e.error_count()} error(s)",
            context=context,
            secret_key=secret.key,
        ) from e


def new_secret(
    credential: ModelCredential,
    encoding: EnumSecretEncoding,
    *,
    label: str = "",
) -> ModelSecret:
    """Encode a credential into a secret keyed by ``credential.secret_id``.

    Args:
        credential: Credential to encode (all fields are serialized)
        encoding: JSON or STRUCTURED
        label: Optional human-readable label for the secret

    Returns:
        Encoded secret

    Raises:
        SecretEncodeError: For any other encoding, BINARY included
    """
    if encoding == EnumSecretEncoding.JSON:
        data = credential.model_dump_json(exclude_defaults=True).encode("utf-8")
    elif encoding == EnumSecretEncoding.STRUCTURED:
        data = encode_credential(credential)
    else:
        raise SecretEncodeError(
            f"Unsupported encoding for credential secrets: {encoding!r}",
            context=ModelErrorContext(operation="encode", target_name="secret_codec"),
            secret_key=credential.secret_id,
        )

    return ModelSecret(
        key=credential.secret_id,
        label=label,
        data=data,
        encoding=encoding,
    )


__all__: list[str] = ["credential_from_secret", "new_secret"]
