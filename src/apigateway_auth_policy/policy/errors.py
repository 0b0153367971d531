"""Error taxonomy for the policy builder.

All errors are raised synchronously at the offending call.  Validation
failures subclass :class:`ValueError` so callers that only care about bad
input can catch that.
"""
from __future__ import annotations


class PolicyError(Exception):
    """Base class for every error raised by the policy builder."""


class ValidationError(PolicyError, ValueError):
    """Raised when a rule or context entry fails input validation.

    Attributes
    ----------
    value:
        The rejected input value.
    """

    def __init__(self, message: str, value: object = None) -> None:
        self.value = value
        super().__init__(message)


class InvalidEffectError(ValidationError):
    """Raised for an effect outside ``Allow`` / ``Deny``."""

    def __init__(self, effect: object) -> None:
        super().__init__(f"Found invalid effect {effect!r}", effect)


class InvalidVerbError(ValidationError):
    """Raised for an HTTP verb outside the recognised set."""

    def __init__(self, verb: object) -> None:
        super().__init__(f"Found invalid verb {verb!r}", verb)


class InvalidResourcePathError(ValidationError):
    """Raised when a resource path fails the character allow-list."""

    def __init__(self, resource_path: object, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(
            f"Found invalid resource path {resource_path!r}. Paths should match {pattern}",
            resource_path,
        )


class InvalidContextValueError(ValidationError):
    """Raised when a context value is not a string, number or boolean."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        super().__init__(
            f"Context value for {key!r} must be a string, finite number or boolean, "
            f"got {type(value).__name__}",
            value,
        )


class EmptyPolicyError(PolicyError):
    """Raised when rendering a builder that has no registered rules."""

    def __init__(self) -> None:
        super().__init__("The policy has no statements")
