"""One-call helpers for the two most common authorizer answers.

Example
-------
::

    from apigateway_auth_policy import allow_all
    response = allow_all("123456789012", "user-42")
    return response.to_dict()

"""
from __future__ import annotations

from collections.abc import Mapping

from apigateway_auth_policy.config.gateway_config import GatewayConfig
from apigateway_auth_policy.policy.builder import PolicyBuilder
from apigateway_auth_policy.policy.types import AuthResponse, ContextValue, HttpVerb


def allow_all(
    account_id: str,
    principal_id: str,
    config: GatewayConfig | Mapping[str, object] | None = None,
    context: Mapping[str, ContextValue] | None = None,
) -> AuthResponse:
    """Render a response allowing every method on every resource."""
    builder = PolicyBuilder(account_id, config).allow_method(HttpVerb.ALL, "*")
    return _render(builder, principal_id, context)


def deny_all(
    account_id: str,
    principal_id: str,
    config: GatewayConfig | Mapping[str, object] | None = None,
    context: Mapping[str, ContextValue] | None = None,
) -> AuthResponse:
    """Render a response denying every method on every resource."""
    builder = PolicyBuilder(account_id, config).deny_method(HttpVerb.ALL, "*")
    return _render(builder, principal_id, context)


def _render(
    builder: PolicyBuilder,
    principal_id: str,
    context: Mapping[str, ContextValue] | None,
) -> AuthResponse:
    for key, value in (context or {}).items():
        builder.add_value_to_context(key, value)
    return builder.render(principal_id)
