# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential query runner.

Evaluates a credential policy against asset metadata to decide which
secret an asset should use before any connection is attempted. The result
is always a credential *reference*; materializing it is the resolver's job.

Policy Context (fresh per call):
    mrn       asset identifier
    name      asset name
    labels    copy of the asset labels
    platform  {"name", "release", "arch", "title", "family"}, empty values
              when the platform is unknown

The dry run at construction evaluates the policy against the context of an
empty asset, so policies may rely on every key above being present.

An unrecognized credential type name is logged as a warning; an empty one
only at debug level. Both leave the type undefined.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from fleetvault.enums import EnumCredentialType
from fleetvault.errors import CredentialQueryError, ModelErrorContext
from fleetvault.models.model_asset import ModelAsset
from fleetvault.models.model_credential import ModelCredential
from fleetvault.models.model_credential_query_response import (
    ModelCredentialQueryResponse,
)
from fleetvault.protocols import ProtocolCompiledPolicy, ProtocolPolicyEngine

logger = logging.getLogger(__name__)


def build_policy_context(asset: ModelAsset) -> dict[str, object]:
    """Build the read-only evaluation context for one asset."""
    platform: dict[str, object] = {"name": "", "release": "", "arch": "", "title": "", "family": []}
    if asset.platform is not None:
        platform = {
            "name": asset.platform.name,
            "release": asset.platform.release,
            "arch": asset.platform.arch,
            "title": asset.platform.title,
            "family": list(asset.platform.family),
        }
    return {
        "mrn": asset.mrn,
        "name": asset.name,
        "labels": dict(asset.labels),
        "platform": platform,
    }


class CredentialQueryRunner:
    """Runs a compiled credential policy per asset.

    Construct with ``create``, which validates the policy up front.
    """

    def __init__(self, policy: ProtocolCompiledPolicy, engine_name: str) -> None:
        self._policy = policy
        self._engine_name = engine_name

    @classmethod
    def create(cls, source: str, engine: ProtocolPolicyEngine) -> CredentialQueryRunner:
        """Compile ``source`` and dry-run it against a placeholder asset.

        Only compile and evaluation failures are checked here; a policy
        whose output shape is wrong for a real asset is reported by run().

        Raises:
            CredentialQueryError: If the policy does not compile or fails
                to evaluate on the placeholder context
        """
        context = ModelErrorContext(operation="create", target_name=engine.engine_name)
        try:
            policy = engine.compile(source)
        except CredentialQueryError:
            raise
        except Exception as e:
            raise CredentialQueryError(
                f"Cannot compile credential query: {type(e).__name__}",
                context=context,
            ) from e

        try:
            policy.evaluate(build_policy_context(ModelAsset()))
        except CredentialQueryError as e:
            raise CredentialQueryError(
                "Credential query failed its dry run",
                context=context,
            ) from e
        except Exception as e:
            raise CredentialQueryError(
                f"Credential query failed its dry run: {type(e).__name__}",
                context=context,
            ) from e

        logger.debug("Compiled credential query", extra={"engine": engine.engine_name})
        return cls(policy, engine.engine_name)

    @property
    def engine_name(self) -> str:
        return self._engine_name

    def run(self, asset: ModelAsset) -> ModelCredential:
        """Compute the credential reference for ``asset``.

        Returns:
            Credential carrying only ``type``, ``user`` and ``secret_id``

        Raises:
            CredentialQueryError: If evaluation fails or its result is not
                a mapping with the expected fields
        """
        error_context = ModelErrorContext(operation="run", target_name=self._engine_name)
        try:
            result = self._policy.evaluate(build_policy_context(asset))
        except CredentialQueryError as e:
            raise CredentialQueryError(
                "Credential query failed for asset",
                context=error_context,
                asset_mrn=asset.mrn,
            ) from e
        except Exception as e:
            raise CredentialQueryError(
                f"Credential query failed for asset: {type(e).__name__}",
                context=error_context,
                asset_mrn=asset.mrn,
            ) from e

        if result is None:
            result = {}
        if not isinstance(result, Mapping):
            raise CredentialQueryError(
                "Credential query must return a mapping",
                context=error_context,
                asset_mrn=asset.mrn,
                actual_type=type(result).__name__,
            )

        try:
            response = ModelCredentialQueryResponse.model_validate(dict(result))
        except ValidationError as e:
            raise CredentialQueryError(
                f"Credential query result is invalid: {e.error_count()} error(s)",
                context=error_context,
                asset_mrn=asset.mrn,
            ) from e

        credential_type = EnumCredentialType.UNDEFINED
        if not response.type:
            logger.debug(
                "Credential query returned no credential type",
                extra={"asset_mrn": asset.mrn},
            )
        else:
            resolved = EnumCredentialType.from_name(response.type)
            if resolved is None:
                logger.warning(
                    "Unrecognized credential type %r from credential query, leaving it undefined",
                    response.type,
                    extra={"asset_mrn": asset.mrn},
                )
            else:
                credential_type = resolved

        return ModelCredential(
            type=credential_type,
            user=response.user,
            secret_id=response.secret_id,
        )


__all__: list[str] = ["CredentialQueryRunner", "build_policy_context"]
