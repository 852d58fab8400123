# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definitions for fleetvault.

Protocols:
    - ProtocolVault: Interface every secret backend implements
    - ProtocolPolicyEngine: Compiles credential policy sources
    - ProtocolCompiledPolicy: A compiled policy evaluated per asset

Architecture:
    Protocols enable duck typing and dependency injection without requiring
    inheritance. Classes implementing a protocol are recognized through
    structural typing (matching method signatures).
"""

from fleetvault.protocols.protocol_policy_engine import (
    ProtocolCompiledPolicy,
    ProtocolPolicyEngine,
)
from fleetvault.protocols.protocol_vault import ProtocolVault

__all__ = [
    "ProtocolCompiledPolicy",
    "ProtocolPolicyEngine",
    "ProtocolVault",
]
