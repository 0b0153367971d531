#!/usr/bin/env python3
"""Example: Quickstart — apigateway-auth-policy

Minimal working example: register a few rules and print the authorizer
response API Gateway expects.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install apigateway-auth-policy
"""
from __future__ import annotations

import json

import apigateway_auth_policy as agp


def main() -> None:
    print(f"apigateway-auth-policy version: {agp.__version__}")

    # Step 1: Register rules
    builder = (
        agp.PolicyBuilder("12345")
        .allow_method(agp.HttpVerb.GET, "/media")
        .allow_method(
            agp.HttpVerb.PATCH,
            "/media",
            {"IpAddress": {"aws:SourceIp": ["203.0.113.0/24"]}},
        )
        .deny_method(agp.HttpVerb.DELETE, "/media")
        .add_value_to_context("isSecured", True)
    )
    print(f"Builder ready: {len(builder)} rules registered")

    # Step 2: Render for a principal
    response = builder.render("*")
    print(json.dumps(response.to_dict(), indent=2))

    # Step 3: Invalid input is rejected without touching the builder
    try:
        builder.allow_method(agp.HttpVerb.GET, "/media?page=1")
    except agp.InvalidResourcePathError as exc:
        print(f"\nRejected: {exc}")
    print(f"Still {len(builder)} rules registered")


if __name__ == "__main__":
    main()
