"""Fluent builder for API Gateway authorizer policies.

Rules are registered in order through :meth:`PolicyBuilder.allow_method`
and :meth:`PolicyBuilder.deny_method` and rendered into an
:class:`~apigateway_auth_policy.policy.types.AuthResponse`.

Rendering groups rules per effect.  Every rule carrying a condition gets
its own single-resource statement; all unconditioned rules of the same
effect are merged into one trailing statement.  Allow statements always
precede Deny statements.

Example
-------
>>> response = (
...     PolicyBuilder("12345")
...     .allow_method(HttpVerb.GET, "/media")
...     .allow_method(
...         HttpVerb.PATCH,
...         "/media",
...         {"IpAddress": {"aws:SourceIp": ["203.0.113.0/24"]}},
...     )
...     .deny_method(HttpVerb.DELETE, "/media")
...     .render("*")
... )
>>> [s.effect.value for s in response.policy_document.statements]
['Allow', 'Allow', 'Deny']
"""
from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping

import pydantic

from apigateway_auth_policy.config.gateway_config import GatewayConfig
from apigateway_auth_policy.policy.errors import (
    EmptyPolicyError,
    InvalidContextValueError,
    InvalidEffectError,
    InvalidResourcePathError,
    InvalidVerbError,
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

logger = logging.getLogger(__name__)

RESOURCE_PATH_REGEX: re.Pattern[str] = re.compile(r"[/.a-zA-Z0-9*-]+")

_ARN_TEMPLATE = "arn:aws:execute-api:{region}:{account_id}:{api_id}/{stage}/{verb}/{resource}"


class PolicyBuilder:
    """Accumulates allow/deny rules and renders them into an auth response.

    A builder is meant to serve a single authorization decision.  It holds
    plain mutable state and must not be shared between concurrent callers.

    Parameters
    ----------
    account_id:
        AWS account the API belongs to.
    config:
        Optional :class:`GatewayConfig` (or a mapping validated into one)
        narrowing the API id, region and stage.  Unset options are ``"*"``.

    Raises
    ------
    ValidationError
        For an empty account id or a config mapping that fails validation.
    """

    def __init__(
        self,
        account_id: str,
        config: GatewayConfig | Mapping[str, object] | None = None,
    ) -> None:
        if not isinstance(account_id, str) or not account_id:
            raise ValidationError(f"Found invalid account id {account_id!r}", account_id)

        if config is None:
            config = GatewayConfig()
        elif not isinstance(config, GatewayConfig):
            try:
                config = GatewayConfig.model_validate(dict(config))
            except pydantic.ValidationError as exc:
                raise ValidationError(f"Found invalid gateway config: {exc}", config) from exc

        self._account_id = account_id
        self._config: GatewayConfig = config
        self._rules: list[Rule] = []
        self._context: Context | None = None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def allow_method(
        self,
        verb: HttpVerb | str,
        resource_path: str,
        condition: Condition | None = None,
    ) -> PolicyBuilder:
        """Add a method to the list of allowed methods.  Chainable."""
        self._add_rule(Effect.ALLOW, verb, resource_path, condition)
        return self

    def deny_method(
        self,
        verb: HttpVerb | str,
        resource_path: str,
        condition: Condition | None = None,
    ) -> PolicyBuilder:
        """Add a method to the list of denied methods.  Chainable."""
        self._add_rule(Effect.DENY, verb, resource_path, condition)
        return self

    def add_value_to_context(self, key: str, value: ContextValue) -> PolicyBuilder:
        """Set ``key`` in the response context, replacing any previous value.

        Raises
        ------
        InvalidContextValueError
            When ``value`` is not a string, finite number or boolean.
        """
        if not isinstance(key, str):
            raise ValidationError(f"Context keys must be strings, got {key!r}", key)
        if not isinstance(value, (str, int, float, bool)) or (
            isinstance(value, float) and not math.isfinite(value)
        ):
            logger.warning("Rejected context value for key '%s': %r", key, value)
            raise InvalidContextValueError(key, value)

        if self._context is None:
            self._context = {}
        self._context[key] = value
        logger.debug("Context '%s' set to %r", key, value)
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def statements_for_effect(self, effect: Effect | str) -> list[Statement]:
        """Group the registered rules of one effect into statements.

        Conditioned rules each produce a single-resource statement, in
        registration order.  Unconditioned rules are merged into one
        statement appended after them, or none if there are no such rules.
        """
        effect = self._coerce_effect(effect)

        statements: list[Statement] = []
        unconditioned: list[str] = []

        for rule in self._rules:
            if rule.effect is not effect:
                continue
            if rule.condition is not None:
                statements.append(Statement(effect, (rule.resource_arn,), rule.condition))
            else:
                unconditioned.append(rule.resource_arn)

        if unconditioned:
            statements.append(Statement(effect, tuple(unconditioned)))

        return statements

    def render(self, principal_id: str) -> AuthResponse:
        """Render the registered rules into an :class:`AuthResponse`.

        Parameters
        ----------
        principal_id:
            Principal identifier placed in the response.

        Raises
        ------
        EmptyPolicyError
            When no rule has been registered.
        """
        if not self._rules:
            raise EmptyPolicyError()

        statements = [
            *self.statements_for_effect(Effect.ALLOW),
            *self.statements_for_effect(Effect.DENY),
        ]
        logger.info(
            "Rendered policy for principal '%s': %d rules in %d statements",
            principal_id,
            len(self._rules),
            len(statements),
        )
        return AuthResponse(
            principal_id=principal_id,
            policy_document=PolicyDocument(statements=tuple(statements)),
            context=dict(self._context) if self._context is not None else None,
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def config(self) -> GatewayConfig:
        return self._config

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Registered rules in registration order."""
        return tuple(self._rules)

    @property
    def context(self) -> Context | None:
        """A copy of the context, or ``None`` if it was never populated."""
        return dict(self._context) if self._context is not None else None

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return (
            f"PolicyBuilder(account_id={self._account_id!r}, "
            f"api_id={self._config.api_id!r}, region={self._config.region!r}, "
            f"stage={self._config.stage!r}, rules={len(self._rules)})"
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _add_rule(
        self,
        effect: Effect | str,
        verb: HttpVerb | str,
        resource_path: str,
        condition: Condition | None = None,
    ) -> None:
        """Validate one rule and append it.  State is untouched on failure."""
        effect = self._coerce_effect(effect)
        verb = self._coerce_verb(verb)

        if not isinstance(resource_path, str) or not RESOURCE_PATH_REGEX.fullmatch(resource_path):
            logger.warning("Rejected resource path %r", resource_path)
            raise InvalidResourcePathError(resource_path, RESOURCE_PATH_REGEX.pattern)

        resource = resource_path[1:] if resource_path.startswith("/") else resource_path
        rule = Rule(effect=effect, resource_arn=self._resource_arn(verb, resource), condition=condition)
        self._rules.append(rule)
        logger.debug(
            "Registered %s rule for %s (condition=%s)",
            effect.value,
            rule.resource_arn,
            condition is not None,
        )

    def _resource_arn(self, verb: HttpVerb, resource: str) -> str:
        return _ARN_TEMPLATE.format(
            region=self._config.region,
            account_id=self._account_id,
            api_id=self._config.api_id,
            stage=self._config.stage,
            verb=verb.value,
            resource=resource,
        )

    @staticmethod
    def _coerce_effect(effect: Effect | str) -> Effect:
        try:
            return Effect(effect)
        except ValueError:
            logger.warning("Rejected effect %r", effect)
            raise InvalidEffectError(effect) from None

    @staticmethod
    def _coerce_verb(verb: HttpVerb | str) -> HttpVerb:
        try:
            return HttpVerb(verb)
        except ValueError:
            logger.warning("Rejected verb %r", verb)
            raise InvalidVerbError(verb) from None
