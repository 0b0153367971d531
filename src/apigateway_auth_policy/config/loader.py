"""YAML-based rule-set loader for the policy builder.

PolicyLoader reads a declarative rule set and returns a populated
:class:`~apigateway_auth_policy.policy.builder.PolicyBuilder`, ready to be
rendered for a principal.

Schema
------
::

    version: "1"
    account_id: "123456789012"
    gateway:
      api_id: "abc123"
      region: "eu-west-1"
      stage: "prod"
    rules:
      - effect: allow
        verb: GET
        resource: /media
      - effect: deny
        verb: DELETE
        resource: /media
        condition:
          IpAddress:
            aws:SourceIp:
              - "203.0.113.0/24"
    context:
      tier: gold

Example
-------
::

    loader = PolicyLoader()
    builder = loader.load("/path/to/authorizer.yaml")
    response = builder.render("user-42")
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import pydantic
import yaml

from apigateway_auth_policy.config.gateway_config import GatewayConfig
from apigateway_auth_policy.policy.builder import PolicyBuilder
from apigateway_auth_policy.policy.errors import ValidationError
from apigateway_auth_policy.policy.types import Effect

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1", "1.0"])
_KNOWN_TOP_KEYS: frozenset[str] = frozenset(
    ["version", "account_id", "gateway", "rules", "context", "description"]
)
_REQUIRED_RULE_KEYS: tuple[str, ...] = ("effect", "verb", "resource")


class PolicyConfigError(ValueError):
    """Raised when a rule-set config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class PolicyLoader:
    """Builds :class:`PolicyBuilder` instances from YAML files or dicts.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys are treated as an error.
        Default ``False`` (unknown keys are ignored with a warning).
    """

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, config_path: str | Path, account_id: str | None = None) -> PolicyBuilder:
        """Load a rule set from a YAML file on disk.

        Parameters
        ----------
        config_path:
            Path to the YAML rule-set file.
        account_id:
            Overrides the ``account_id`` declared in the file.

        Raises
        ------
        FileNotFoundError
            If the config file does not exist.
        PolicyConfigError
            If the file cannot be parsed or is structurally invalid.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Policy config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw: dict[str, object] = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(f"Failed to parse YAML: {exc}", str(config_path)) from exc

        return self._build(raw, account_id, config_path=str(config_path))

    def load_string(self, yaml_content: str, account_id: str | None = None) -> PolicyBuilder:
        """Load a rule set from a YAML string."""
        try:
            raw: dict[str, object] = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(f"Failed to parse YAML string: {exc}") from exc
        return self._build(raw, account_id)

    def load_from_dict(
        self,
        config: Mapping[str, object],
        account_id: str | None = None,
        config_path: str | None = None,
    ) -> PolicyBuilder:
        """Load a rule set from an already-parsed mapping."""
        return self._build(config, account_id, config_path=config_path)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build(
        self,
        raw: Mapping[str, object],
        account_id: str | None,
        config_path: str | None = None,
    ) -> PolicyBuilder:
        self._validate_structure(raw, config_path)

        version = str(raw.get("version", "1"))
        if version not in _SUPPORTED_VERSIONS:
            raise PolicyConfigError(
                f"Unsupported config version {version!r}. "
                f"Supported: {sorted(_SUPPORTED_VERSIONS)}.",
                config_path,
            )

        if account_id is None:
            if raw.get("account_id") is None:
                raise PolicyConfigError("Policy config must declare an 'account_id'.", config_path)
            # Unquoted ids load as int, or as octal when they start with 0.
            if not isinstance(raw["account_id"], str):
                raise PolicyConfigError(
                    f"'account_id' must be a quoted string, got {raw['account_id']!r}. "
                    "Quote it in YAML to keep leading zeros intact.",
                    config_path,
                )
            account_id = raw["account_id"]

        try:
            gateway = GatewayConfig.model_validate(raw.get("gateway") or {})
        except pydantic.ValidationError as exc:
            raise PolicyConfigError(f"Invalid 'gateway' section: {exc}", config_path) from exc

        builder = PolicyBuilder(account_id, gateway)

        raw_rules: list[object] = list(raw.get("rules") or [])  # type: ignore[call-overload]
        for index, raw_rule in enumerate(raw_rules):
            try:
                self._apply_rule(builder, raw_rule)
            except (ValidationError, KeyError, TypeError) as exc:
                raise PolicyConfigError(f"Error in rule at index {index}: {exc}", config_path) from exc

        raw_context = raw.get("context") or {}
        if not isinstance(raw_context, Mapping):
            raise PolicyConfigError("Policy config 'context' must be a mapping.", config_path)
        for key, value in raw_context.items():
            try:
                builder.add_value_to_context(str(key), value)  # type: ignore[arg-type]
            except ValidationError as exc:
                raise PolicyConfigError(f"Error in context entry {key!r}: {exc}", config_path) from exc

        logger.info(
            "Loaded %d rules for account %s from %s",
            len(builder),
            account_id,
            config_path or "<dict>",
        )
        return builder

    def _apply_rule(self, builder: PolicyBuilder, raw_rule: object) -> None:
        if not isinstance(raw_rule, Mapping):
            raise TypeError(f"rule must be a mapping, got {type(raw_rule).__name__}")

        missing = [key for key in _REQUIRED_RULE_KEYS if key not in raw_rule]
        if missing:
            raise KeyError(f"missing required keys {missing}")

        condition = raw_rule.get("condition")
        if condition is not None and not isinstance(condition, Mapping):
            raise TypeError("condition must be a mapping")

        effect = str(raw_rule["effect"]).capitalize()
        verb = str(raw_rule["verb"]).upper()
        resource = str(raw_rule["resource"])

        match effect:
            case Effect.ALLOW:
                builder.allow_method(verb, resource, condition)  # type: ignore[arg-type]
            case Effect.DENY:
                builder.deny_method(verb, resource, condition)  # type: ignore[arg-type]
            case _:
                raise ValidationError(f"Found invalid effect {raw_rule['effect']!r}", raw_rule["effect"])

    def _validate_structure(self, raw: object, config_path: str | None) -> None:
        if not isinstance(raw, Mapping):
            raise PolicyConfigError("Policy config must be a YAML mapping (dict).", config_path)

        if raw.get("rules") is not None and not isinstance(raw["rules"], list):
            raise PolicyConfigError("Policy config 'rules' must be a list.", config_path)

        unknown_keys = set(raw.keys()) - _KNOWN_TOP_KEYS
        if unknown_keys:
            if self._strict:
                raise PolicyConfigError(
                    f"Unknown top-level keys: {sorted(unknown_keys)}. "
                    f"Known keys: {sorted(_KNOWN_TOP_KEYS)}.",
                    config_path,
                )
            logger.warning("Ignoring unknown top-level keys: %s", sorted(unknown_keys))
