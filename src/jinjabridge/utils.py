# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Shared helpers for configuration and CLI handling."""

from __future__ import annotations

from typing import Any, Optional

import yaml


def coerce_bool(value: Optional[Any]) -> Optional[bool]:
    """Best-effort conversion of user input into booleans."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "on"}:
            return True
        if lowered in {"false", "0", "no", "off"}:
            return False
    return bool(value)


def cast_literal(s: str) -> Any:
    """Lightweight casting via YAML loader to get bool/int/float."""
    try:
        return yaml.safe_load(s)
    except yaml.YAMLError:
        return s


def assign_path(target: dict[str, Any], dotted_key: str, value: Any) -> None:
    parts = [p for p in dotted_key.split(".") if p]
    if not parts:
        return
    node = target
    for segment in parts[:-1]:
        next_node = node.setdefault(segment, {})
        if not isinstance(next_node, dict):
            next_node = {}
            node[segment] = next_node
        node = next_node
    node[parts[-1]] = value


def deep_merge(base: dict[str, Any], incoming: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def parse_cli_params(argv: list[str]) -> dict[str, Any]:
    """
    Parse command-line parameters in key=value format.

    Dotted keys build nested dicts, values are cast with cast_literal.

    Args:
        argv: List of key=value strings

    Returns:
        Dictionary of parsed parameters

    Raises:
        ValueError: If an item has no '=' or an empty key
    """
    cli_params: dict[str, Any] = {}
    for item in argv:
        if "=" not in item:
            raise ValueError(f"Invalid override '{item}'. Expected key=value.")
        key, val = item.split("=", 1)
        if not key.strip():
            raise ValueError(f"Invalid override '{item}'. Key cannot be empty.")
        assign_path(cli_params, key.strip(), cast_literal(val))
    return cli_params
