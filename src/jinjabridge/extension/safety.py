# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Compile-time output safety for URL-generating template calls.

URL generation percent encodes every character that is special in HTML except
the ampersand separating query parameters. A generated URL therefore only
needs HTML escaping when it may carry more than one query parameter. That is
decided here from the parsed call, before the template ever runs:

    {{ path('route') }}                               safe
    {{ path('route', {'param': 'value'}) }}           safe
    {{ path('route', var) }}                          escaped
    {{ path('route', {'param': ['val1', 'val2']}) }}  escaped
    {{ path('route', {'a': 'value1', 'b': 'value2'}) }}  escaped

The last case would not need escaping when both parameters fill route
placeholders, but that is not known at compile time, so it stays escaped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from jinja2 import nodes
from jinja2.visitor import NodeTransformer

from .registry import SafeCallback

logger = logging.getLogger(__name__)

PARAMETERS_ARGUMENT = "parameters"


def url_parameters_node(call: nodes.Call) -> Optional[nodes.Expr]:
    """Return the route parameters argument of a url()/path() call, if any."""
    for keyword in call.kwargs:
        if keyword.key == PARAMETERS_ARGUMENT:
            return keyword.value
    if len(call.args) > 1:
        return call.args[1]
    return None


def is_url_generation_safe(call: nodes.Call) -> list[str]:
    """
    Determine at compile time whether the generated URL is safe for HTML.

    Args:
        call: Parsed url()/path() call

    Returns:
        ["html"] when the output can skip escaping, [] otherwise
    """
    if call.dyn_args is not None or call.dyn_kwargs is not None:
        return []

    parameters = url_parameters_node(call)
    if parameters is None:
        return ["html"]
    if isinstance(parameters, nodes.Dict) and len(parameters.items) <= 1:
        if not parameters.items or isinstance(parameters.items[0].value, nodes.Const):
            return ["html"]
    return []


def _called_name(call: nodes.Call) -> Optional[str]:
    if isinstance(call.node, nodes.Name):
        return call.node.name
    return None


class SafeCallTransformer(NodeTransformer):
    """Marks calls whose safe callback reports "html" as safe output."""

    def __init__(self, callbacks: Mapping[str, SafeCallback]):
        self.callbacks = callbacks

    def visit_Call(self, node: nodes.Call) -> nodes.Node:
        node = self.generic_visit(node)
        name = _called_name(node)
        callback = self.callbacks.get(name) if name else None
        if callback is None or "html" not in callback(node):
            return node
        logger.debug("Call to '%s' at line %s marked safe for html", name, node.lineno)
        return nodes.MarkSafeIfAutoescape(node, lineno=node.lineno)


def mark_safe_calls(template: nodes.Template, callbacks: Mapping[str, SafeCallback]) -> nodes.Template:
    """Apply SafeCallTransformer to a parsed template in place and return it."""
    if not callbacks:
        return template
    return SafeCallTransformer(callbacks).visit(template)
