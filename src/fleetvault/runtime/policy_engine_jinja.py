# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Jinja2-sandbox credential policy engines.

Two engines share one sandboxed environment setup:

Expression engine (``expression``):
    The policy is a single Jinja expression evaluated to a Python value,
    typically a dict literal::

        {"user": "ec2-user", "type": "private_key", "secret_id": "ssh-prod"}
            if labels["Name"] == "ssh" else {"secret_id": ""}

Template engine (``template``):
    The policy is a Jinja template rendering a YAML mapping, which suits
    longer policies with several branches::

        {% if platform.name == "windows" %}
        secret_id: winrm-admin
        type: password
        {% endif %}

    Empty output means "no credential" (None).

Both engines run in ``jinja2.sandbox.ImmutableSandboxedEnvironment``:
policies cannot reach Python internals or mutate the context. Missing
labels evaluate to undefined values rather than raising, so a policy can
test ``labels["Name"]`` on assets without that label.

Thread Safety:
    Compiled policies wrap immutable Jinja objects; every evaluation gets
    its own render context.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import jinja2
import yaml
from jinja2.sandbox import ImmutableSandboxedEnvironment

from fleetvault.errors import CredentialQueryError, ModelErrorContext

logger = logging.getLogger(__name__)

ENGINE_EXPRESSION: str = "expression"
ENGINE_TEMPLATE: str = "template"


def _create_environment() -> ImmutableSandboxedEnvironment:
    return ImmutableSandboxedEnvironment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class CompiledPolicyJinjaExpression:
    """A compiled policy expression."""

    def __init__(self, expression: jinja2.environment.TemplateExpression) -> None:
        self._expression = expression

    def evaluate(self, context: Mapping[str, object]) -> object:
        try:
            return self._expression(**context)
        except Exception as e:
            raise CredentialQueryError(
                f"Credential policy evaluation failed: {type(e).__name__}",
                context=ModelErrorContext(operation="evaluate", target_name=ENGINE_EXPRESSION),
            ) from e


class CompiledPolicyJinjaTemplate:
    """A compiled policy template rendering YAML."""

    def __init__(self, template: jinja2.Template) -> None:
        self._template = template

    def evaluate(self, context: Mapping[str, object]) -> object:
        error_context = ModelErrorContext(operation="evaluate", target_name=ENGINE_TEMPLATE)
        try:
            rendered = self._template.render(**context)
        except Exception as e:
            raise CredentialQueryError(
                f"Credential policy evaluation failed: {type(e).__name__}",
                context=error_context,
            ) from e

        try:
            return yaml.safe_load(rendered)
        except yaml.YAMLError as e:
            raise CredentialQueryError(
                "Credential policy did not render valid YAML",
                context=error_context,
            ) from e


class PolicyEngineJinjaExpression:
    """Compiles policies as single Jinja expressions."""

    def __init__(self) -> None:
        self._env = _create_environment()

    @property
    def engine_name(self) -> str:
        return ENGINE_EXPRESSION

    def compile(self, source: str) -> CompiledPolicyJinjaExpression:
        """Compile an expression policy.

        Raises:
            CredentialQueryError: On syntax errors
        """
        try:
            expression = self._env.compile_expression(source, undefined_to_none=True)
        except jinja2.TemplateSyntaxError as e:
            raise CredentialQueryError(
                f"Credential policy has a syntax error at line {e.lineno}",
                context=ModelErrorContext(operation="compile", target_name=ENGINE_EXPRESSION),
            ) from e
        return CompiledPolicyJinjaExpression(expression)


class PolicyEngineJinjaTemplate:
    """Compiles policies as Jinja templates rendering YAML."""

    def __init__(self) -> None:
        self._env = _create_environment()

    @property
    def engine_name(self) -> str:
        return ENGINE_TEMPLATE

    def compile(self, source: str) -> CompiledPolicyJinjaTemplate:
        """Compile a template policy.

        Raises:
            CredentialQueryError: On syntax errors
        """
        try:
            template = self._env.from_string(source)
        except jinja2.TemplateSyntaxError as e:
            raise CredentialQueryError(
                f"Credential policy has a syntax error at line {e.lineno}",
                context=ModelErrorContext(operation="compile", target_name=ENGINE_TEMPLATE),
            ) from e
        return CompiledPolicyJinjaTemplate(template)


def create_policy_engine(name: str) -> PolicyEngineJinjaExpression | PolicyEngineJinjaTemplate:
    """Return the policy engine registered under ``name``.

    Raises:
        CredentialQueryError: If no engine has that name
    """
    if name == ENGINE_EXPRESSION:
        return PolicyEngineJinjaExpression()
    if name == ENGINE_TEMPLATE:
        return PolicyEngineJinjaTemplate()
    raise CredentialQueryError(
        f"Unknown credential policy engine: {name}",
        context=ModelErrorContext(operation="create_policy_engine", target_name=name),
    )


__all__: list[str] = [
    "ENGINE_EXPRESSION",
    "ENGINE_TEMPLATE",
    "CompiledPolicyJinjaExpression",
    "CompiledPolicyJinjaTemplate",
    "PolicyEngineJinjaExpression",
    "PolicyEngineJinjaTemplate",
    "create_policy_engine",
]
