# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definitions for credential policy evaluation engines.

A policy engine compiles a policy source string once into a compiled policy;
the compiled policy is then evaluated per asset against a read-only context:

    mrn       asset identifier (str)
    name      asset name (str)
    labels    asset labels (dict[str, str])
    platform  platform facts (dict[str, str], at least name/release/arch)

Evaluation returns a structured value decodable into
``{type: str, user: str, secret_id: str}`` (a mapping), or None for "no
credential".

Contract:
    - Evaluation is deterministic and side-effect free
    - A compiled policy is immutable and may be evaluated from many threads
      and coroutines at once; no state is shared between calls
    - compile() raises on syntax errors, evaluate() raises on runtime errors
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

__all__ = [
    "ProtocolCompiledPolicy",
    "ProtocolPolicyEngine",
]


@runtime_checkable
class ProtocolCompiledPolicy(Protocol):
    """A compiled, immutable credential policy."""

    def evaluate(self, context: Mapping[str, object]) -> object:
        """Evaluate the policy against one asset context."""
        ...


@runtime_checkable
class ProtocolPolicyEngine(Protocol):
    """Compiles credential policy sources."""

    @property
    def engine_name(self) -> str:
        """Short engine name used in logs and errors."""
        ...

    def compile(self, source: str) -> ProtocolCompiledPolicy:
        """Compile a policy source string.

        Raises:
            Exception: Engine-specific syntax error
        """
        ...
