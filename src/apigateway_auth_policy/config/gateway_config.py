"""Gateway scoping options with Pydantic v2 validation.

Every option defaults to the ``"*"`` wildcard so that an empty config
matches any API, region and stage of the account.

Example
-------
>>> config = GatewayConfig(region="eu-west-1")
>>> config.api_id, config.region, config.stage
('*', 'eu-west-1', '*')
"""
from __future__ import annotations

from pydantic import BaseModel, Field

WILDCARD: str = "*"


class GatewayConfig(BaseModel):
    """API Gateway scope used when building resource ARNs.

    ``api_id`` may also be supplied under its camelCase name ``apiId``.
    """

    model_config = {"extra": "forbid", "frozen": True, "populate_by_name": True}

    api_id: str = Field(default=WILDCARD, min_length=1, alias="apiId")
    region: str = Field(default=WILDCARD, min_length=1)
    stage: str = Field(default=WILDCARD, min_length=1)
