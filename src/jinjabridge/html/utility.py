# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Shared HTML helpers for class names, IDs and escaping."""

from __future__ import annotations

import re
from typing import Any, Optional

from markupsafe import Markup
from markupsafe import escape as _escape

DEFAULT_IDENTIFIER_FILTER = {
    " ": "-",
    "_": "-",
    "/": "-",
    "[": "-",
    "]": "",
}

# Hyphen, digits, ASCII letters, underscore and everything from U+00A1 upwards
_INVALID_IDENTIFIER_CHARS = re.compile("[^-0-9A-Z_a-z\u00a1-\uffff]")
_INVALID_ID_CHARS = re.compile(r"[^A-Za-z0-9\-_]")
_HYPHEN_RUNS = re.compile(r"-+")
_UNSAFE_ATTR_CHARS = re.compile(r"[^a-zA-Z0-9,._-]")
_ATTR_ENTITIES = {'"': "&quot;", "&": "&amp;", "<": "&lt;", ">": "&gt;"}


def escape(text: Any) -> Markup:
    """Escape text for HTML. Values already marked safe are kept as they are."""
    return _escape(text)


def _attr_entity(match: re.Match) -> str:
    char = match.group(0)
    code = ord(char)
    # Control characters that are not whitespace have no valid representation
    if (code <= 0x1F and char not in "\t\n\r") or 0x7F <= code <= 0x9F:
        return "&#xFFFD;"
    if char in _ATTR_ENTITIES:
        return _ATTR_ENTITIES[char]
    if code < 0x80:
        return f"&#x{code:02X};"
    return f"&#x{code:04X};"


def escape_html_attr(text: Any) -> Markup:
    """
    Escape text for an HTML attribute value, quoted or not.

    Everything outside [a-zA-Z0-9,._-] is replaced by a character reference.
    """
    return Markup(_UNSAFE_ATTR_CHARS.sub(_attr_entity, str(text)))


def _translate(value: str, replacements: dict[str, str]) -> str:
    # Longest keys first so "__" wins over "_"
    keys = sorted(replacements, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(k) for k in keys))
    return pattern.sub(lambda m: replacements[m.group(0)], value)


def clean_css_identifier(identifier: str, filter: Optional[dict[str, str]] = None) -> str:
    """
    Prepare a string for use as a valid CSS identifier (class name or ID).

    Args:
        identifier: The identifier to clean
        filter: Replacement map, defaults to DEFAULT_IDENTIFIER_FILTER

    Returns:
        The cleaned identifier
    """
    replacements = dict(DEFAULT_IDENTIFIER_FILTER if filter is None else filter)
    # Double underscores are a BEM separator; keep them
    if "__" in identifier and "_" in replacements:
        replacements.setdefault("__", "__")
    cleaned = _translate(identifier, replacements) if replacements else identifier
    cleaned = _INVALID_IDENTIFIER_CHARS.sub("", cleaned)
    # Identifiers cannot start with a digit, two hyphens, or a hyphen followed by a digit
    cleaned = re.sub(r"^[0-9]", "_", cleaned)
    cleaned = re.sub(r"^(-[0-9])|^(--)", "__", cleaned)
    return cleaned


def get_class(name: Any) -> str:
    """Lower-case and clean a CSS class name."""
    return clean_css_identifier(str(name).lower())


def get_id(name: Any) -> str:
    """Lower-case and clean an HTML ID."""
    value = _translate(str(name).lower(), {" ": "-", "_": "-", "[": "-", "]": ""})
    value = _INVALID_ID_CHARS.sub("", value)
    return _HYPHEN_RUNS.sub("-", value)
