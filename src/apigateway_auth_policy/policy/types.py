"""Value types shared by the policy builder and its callers.

The output types (:class:`Statement`, :class:`PolicyDocument`,
:class:`AuthResponse`) are frozen dataclasses.  Each exposes ``to_dict()``
which produces the exact key layout API Gateway expects from a Lambda
authorizer.

Example
-------
>>> statement = Statement(Effect.ALLOW, ("arn:aws:execute-api:*:1:*/*/GET/media",))
>>> statement.to_dict()["Action"]
'execute-api:Invoke'
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

POLICY_VERSION: str = "2012-10-17"
INVOKE_ACTION: str = "execute-api:Invoke"

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Condition = dict[str, dict[str, Union[str, list[str]]]]
ContextValue = Union[str, int, float, bool]
Context = dict[str, ContextValue]


class Effect(str, Enum):
    """Outcome of a rule."""

    ALLOW = "Allow"
    DENY = "Deny"


class HttpVerb(str, Enum):
    """HTTP methods a rule can target.  ``ALL`` matches every method."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    HEAD = "HEAD"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    ALL = "*"


@dataclass(frozen=True)
class Rule:
    """A single registered allow/deny entry.

    Attributes
    ----------
    effect:
        Whether the rule allows or denies.
    resource_arn:
        Fully-qualified ``execute-api`` ARN for the verb and path.
    condition:
        Opaque condition block, or ``None``.
    """

    effect: Effect
    resource_arn: str
    condition: Condition | None = None

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Statement:
    """One entry of a rendered policy document.

    A statement either carries a condition and exactly one resource, or no
    condition and one or more resources.
    """

    effect: Effect
    resources: tuple[str, ...]
    condition: Condition | None = None
    action: str = field(default=INVOKE_ACTION, init=False)

    # Conditions are dicts.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not self.resources:
            raise ValueError("A statement needs at least one resource")
        if self.condition is not None and len(self.resources) != 1:
            raise ValueError(
                f"A conditioned statement must target exactly one resource, "
                f"got {len(self.resources)}"
            )

    def to_dict(self) -> dict[str, object]:
        statement: dict[str, object] = {
            "Action": self.action,
            "Effect": self.effect.value,
            "Resource": list(self.resources),
        }
        if self.condition is not None:
            statement["Condition"] = self.condition
        return statement


@dataclass(frozen=True)
class PolicyDocument:
    """Ordered statements plus the fixed policy language version."""

    statements: tuple[Statement, ...]
    version: str = POLICY_VERSION

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, object]:
        return {
            "Version": self.version,
            "Statement": [s.to_dict() for s in self.statements],
        }


@dataclass(frozen=True)
class AuthResponse:
    """Final output of :meth:`PolicyBuilder.render`.

    Attributes
    ----------
    principal_id:
        Identifier of the caller the policy was rendered for.
    policy_document:
        The rendered :class:`PolicyDocument`.
    context:
        Auxiliary key/value data, or ``None`` when no value was ever added.
    """

    principal_id: str
    policy_document: PolicyDocument
    context: Context | None = None

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, object]:
        """Return the authorizer response in API Gateway's wire layout.

        ``context`` is omitted entirely when it was never populated.
        """
        response: dict[str, object] = {
            "principalId": self.principal_id,
            "policyDocument": self.policy_document.to_dict(),
        }
        if self.context is not None:
            response["context"] = dict(self.context)
        return response

    def to_json(self, **kwargs: object) -> str:
        """Serialise :meth:`to_dict` with :func:`json.dumps`.

        ``allow_nan`` defaults to ``False`` so the output is always strict JSON.
        """
        kwargs.setdefault("allow_nan", False)
        return json.dumps(self.to_dict(), **kwargs)  # type: ignore[arg-type]
