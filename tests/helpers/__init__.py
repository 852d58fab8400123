# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for fleetvault unit tests.

Available Utilities:
    Vault Doubles:
        - RecordingVault: Dict-backed vault recording every call
        - BlockingVault: Vault whose get() waits until released
        - binary_secret: Build a binary-encoded secret

    Log Helpers:
        - filter_module_records: Filter log records from a specific module
        - get_warning_messages: Extract warning messages from log records
"""

from tests.helpers.log_helpers import filter_module_records, get_warning_messages
from tests.helpers.vault_doubles import BlockingVault, RecordingVault, binary_secret

__all__ = [
    "BlockingVault",
    "RecordingVault",
    "binary_secret",
    "filter_module_records",
    "get_warning_messages",
]
