# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Inventory model.

An inventory lists assets together with the credentials used to reach them,
an optional external vault configuration, and an optional credential policy
query. Credentials may be embedded inline in asset connections;
``pre_process`` moves them into the dedicated ``spec.credentials`` section so
the asset side only ever carries references.

Example YAML::

    metadata:
      name: production
    spec:
      credential_query: >
        {"secret_id": "ssh-default", "type": "private_key"}
      vault:
        name: prod-vault
        type: hashicorp
        options:
          url: https://vault.example.com:8200
      assets:
        - name: web-1
          connections:
            - type: ssh
              host: 10.0.0.5
              credentials:
                - user: ec2-user
                  private_key_path: keys/web.pem
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from uuid import uuid4

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fleetvault.enums import EnumCredentialType
from fleetvault.errors import InventoryError, ModelErrorContext
from fleetvault.models.model_asset import ModelAsset
from fleetvault.models.model_credential import ModelCredential
from fleetvault.models.model_vault_configuration import ModelVaultConfiguration

logger = logging.getLogger(__name__)

# Label recording the absolute path an inventory was loaded from
INVENTORY_FILE_PATH_LABEL: str = "fleetvault/source-file"


class _InventoryDumper(yaml.SafeDumper):
    """Safe dumper writing enums by lowercase name."""


def _represent_enum(dumper: yaml.SafeDumper, data: Enum) -> yaml.Node:
    return dumper.represent_str(data.name.lower())


_InventoryDumper.add_multi_representer(Enum, _represent_enum)


class ModelInventoryMetadata(BaseModel):
    """Inventory metadata."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    labels: dict[str, str] = Field(default_factory=dict)


class ModelInventorySpec(BaseModel):
    """Inventory content."""

    model_config = ConfigDict(extra="ignore")

    assets: list[ModelAsset] = Field(default_factory=list)
    credentials: dict[str, ModelCredential] = Field(default_factory=dict)
    vault: ModelVaultConfiguration | None = None
    credential_query: str = ""


class ModelInventory(BaseModel):
    """A set of assets plus the credentials and vault used to reach them."""

    model_config = ConfigDict(extra="ignore")

    metadata: ModelInventoryMetadata = Field(default_factory=ModelInventoryMetadata)
    spec: ModelInventorySpec = Field(default_factory=ModelInventorySpec)

    # === Loading ===

    @classmethod
    def from_yaml(cls, data: str | bytes) -> ModelInventory:
        """Parse an inventory from YAML text.

        Args:
            data: YAML document

        Returns:
            Parsed inventory (not yet pre-processed)

        Raises:
            InventoryError: If the document is not valid YAML or does not
                match the inventory schema
        """
        context = ModelErrorContext(operation="load_inventory", target_name="inventory")
        try:
            raw = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise InventoryError("Inventory is not valid YAML", context=context) from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise InventoryError(
                "Inventory must be a YAML mapping",
                context=context,
                actual_type=type(raw).__name__,
            )

        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise InventoryError(
                f"Inventory does not match schema: {e.error_count()} error(s)",
                context=context,
            ) from e

    @classmethod
    def from_file(cls, path: str | Path) -> ModelInventory:
        """Load an inventory from a YAML file.

        The absolute source path is recorded in the metadata labels so that
        relative ``private_key_path`` entries resolve next to the file.

        Raises:
            InventoryError: If the file cannot be read or parsed
        """
        abs_path = Path(path).expanduser().resolve()
        try:
            content = abs_path.read_text(encoding="utf-8")
        except OSError as e:
            raise InventoryError(
                "Cannot read inventory file",
                context=ModelErrorContext(operation="load_inventory", target_name="inventory"),
                path=str(abs_path),
            ) from e

        inventory = cls.from_yaml(content)
        inventory.metadata.labels[INVENTORY_FILE_PATH_LABEL] = str(abs_path)
        return inventory

    def to_yaml(self) -> str:
        """Serialize the inventory back to YAML.

        Secrets are written as ``!!binary`` so non-text key material survives
        a reload through ``from_yaml``.
        """
        return yaml.dump(
            self.model_dump(exclude_defaults=True),
            Dumper=_InventoryDumper,
            sort_keys=False,
        )

    # === Pre-processing ===

    def pre_process(self) -> None:
        """Move embedded credentials into ``spec.credentials``.

        After this call every asset-side credential is a bare reference and
        every entry in ``spec.credentials`` has its sugar fields folded into
        ``secret``/``type``, including private keys loaded from
        ``private_key_path``. Re-serializing a pre-processed inventory gives
        a different but equivalent document.

        Raises:
            InventoryError: If a referenced private key file cannot be read
        """
        for asset in self.spec.assets:
            for connection in asset.connections:
                for credential in connection.credentials:
                    if credential.secret_id:
                        # an explicit secret id always wins over inline content
                        credential.clean_secrets()
                        continue

                    secret_id = uuid4().hex
                    credential.secret_id = secret_id
                    self.spec.credentials[secret_id] = credential.model_copy(deep=True)
                    credential.clean()
                    logger.debug(
                        "Extracted embedded credential for asset %s",
                        asset.name,
                        extra={"asset_name": asset.name, "secret_key": secret_id},
                    )

        for key, credential in self.spec.credentials.items():
            credential.secret_id = key
            credential.pre_process()

            if credential.private_key_path:
                path = self._resolve_key_path(credential.private_key_path)
                try:
                    credential.secret = path.read_bytes()
                except OSError as e:
                    raise InventoryError(
                        "Cannot read credential file",
                        context=ModelErrorContext(
                            operation="pre_process", target_name="inventory"
                        ),
                        secret_key=key,
                        path=str(path),
                    ) from e
                # pkcs12 credentials also use the path, keep an explicit type
                if credential.type == EnumCredentialType.UNDEFINED:
                    credential.type = EnumCredentialType.PRIVATE_KEY

    def _resolve_key_path(self, raw_path: str) -> Path:
        """Resolve a key path relative to ``~`` or the inventory file."""
        if raw_path.startswith("~"):
            return Path(raw_path).expanduser()

        path = Path(raw_path)
        if path.is_absolute():
            return path

        source_file = self.metadata.labels.get(INVENTORY_FILE_PATH_LABEL)
        if source_file:
            return Path(source_file).parent / path
        return path.resolve()

    def validate_references(self) -> None:
        """Check that every asset credential is a proper reference.

        Expects ``pre_process`` to have run first. References may keep a
        ``type``/``user`` since those act as overrides during resolution.

        Raises:
            InventoryError: If a credential has no secret id or still
                carries secret material
        """
        context = ModelErrorContext(operation="validate", target_name="inventory")
        for asset in self.spec.assets:
            for connection in asset.connections:
                for credential in connection.credentials:
                    if not credential.secret_id:
                        raise InventoryError(
                            "Credential is missing the secret_id",
                            context=context,
                            asset_name=asset.name,
                        )
                    if credential.has_secret_material:
                        raise InventoryError(
                            "Credential reference carries secret material",
                            context=context,
                            asset_name=asset.name,
                            secret_key=credential.secret_id,
                        )

    # === Bulk edits ===

    def add_assets(self, *assets: ModelAsset) -> None:
        self.spec.assets.extend(assets)

    def apply_labels(self, labels: dict[str, str]) -> None:
        """Merge ``labels`` into every asset's labels."""
        for asset in self.spec.assets:
            asset.labels.update(labels)

    def mark_connections_insecure(self) -> None:
        for asset in self.spec.assets:
            for connection in asset.connections:
                connection.insecure = True


__all__: list[str] = [
    "INVENTORY_FILE_PATH_LABEL",
    "ModelInventory",
    "ModelInventoryMetadata",
    "ModelInventorySpec",
]
