"""apigateway-auth-policy — policy documents for API Gateway Lambda authorizers.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import apigateway_auth_policy as agp
>>> response = (
...     agp.PolicyBuilder("12345")
...     .allow_method(agp.HttpVerb.GET, "/media")
...     .render("*")
... )
>>> response.to_dict()["policyDocument"]["Statement"][0]["Resource"]
['arn:aws:execute-api:*:12345:*/*/GET/media']
"""
from __future__ import annotations

__version__: str = "0.1.0"

from apigateway_auth_policy.convenience import allow_all, deny_all

# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------
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
    Effect,
    HttpVerb,
    PolicyDocument,
    Rule,
    Statement,
)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
from apigateway_auth_policy.config.gateway_config import GatewayConfig
from apigateway_auth_policy.config.loader import PolicyConfigError, PolicyLoader

__all__ = [
    "__version__",
    "allow_all",
    "deny_all",
    # Policy
    "AuthResponse",
    "Condition",
    "Context",
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
    # Config
    "GatewayConfig",
    "PolicyConfigError",
    "PolicyLoader",
]
