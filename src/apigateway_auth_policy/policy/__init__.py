"""Policy builder package for apigateway-auth-policy.

Exports the builder, its value types, and the error taxonomy.
"""
from __future__ import annotations

from apigateway_auth_policy.policy.builder import PolicyBuilder
from apigateway_auth_policy.policy.errors import (
    EmptyPolicyError,
    InvalidContextValueError,
    InvalidEffectError,
    InvalidResourcePathError,
    InvalidVerbError,
    PolicyError,
    ValidationError,
)
from apigateway_auth_policy.policy.types import (
    AuthResponse,
    Condition,
    Context,
    ContextValue,
    Effect,
    HttpVerb,
    PolicyDocument,
    Rule,
    Statement,
)

__all__ = [
    "AuthResponse",
    "Condition",
    "Context",
    "ContextValue",
    "Effect",
    "EmptyPolicyError",
    "HttpVerb",
    "InvalidContextValueError",
    "InvalidEffectError",
    "InvalidResourcePathError",
    "InvalidVerbError",
    "PolicyBuilder",
    "PolicyDocument",
    "PolicyError",
    "Rule",
    "Statement",
    "ValidationError",
]
