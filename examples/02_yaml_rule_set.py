#!/usr/bin/env python3
"""Example: Declarative rule sets

Loads authorizer.yaml next to this script and renders it for a user.

Usage:
    python examples/02_yaml_rule_set.py

Requirements:
    pip install apigateway-auth-policy
"""
from __future__ import annotations

from pathlib import Path

from apigateway_auth_policy import PolicyLoader, allow_all


def main() -> None:
    loader = PolicyLoader(strict=True)
    builder = loader.load(Path(__file__).parent / "authorizer.yaml")
    print(repr(builder))
    print(builder.render("user-42").to_json(indent=2))

    print("\nWildcard allow:")
    print(allow_all("123456789012", "service-account").to_json(indent=2))


if __name__ == "__main__":
    main()
