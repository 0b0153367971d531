"""Gateway configuration and declarative rule-set loading."""
from __future__ import annotations

from apigateway_auth_policy.config.gateway_config import GatewayConfig
from apigateway_auth_policy.config.loader import PolicyConfigError, PolicyLoader

__all__ = [
    "GatewayConfig",
    "PolicyConfigError",
    "PolicyLoader",
]
