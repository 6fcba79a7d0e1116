# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the compile-time URL safety classifier.
"""

import pytest
from jinja2 import Environment, nodes

from jinjabridge.extension.safety import (
    SafeCallTransformer,
    is_url_generation_safe,
    mark_safe_calls,
    url_parameters_node,
)


def _call(expression: str) -> nodes.Call:
    template = Environment().parse("{{ " + expression + " }}")
    return template.find(nodes.Call)


class TestUrlParametersNode:
    """Locating the route parameters argument."""

    def test_no_parameters(self):
        assert url_parameters_node(_call("path('route')")) is None

    def test_positional_parameters(self):
        node = url_parameters_node(_call("path('route', {'id': 5})"))
        assert isinstance(node, nodes.Dict)

    def test_named_parameters(self):
        node = url_parameters_node(_call("path('route', parameters=params)"))
        assert isinstance(node, nodes.Name)
        assert node.name == "params"

    def test_options_only_is_not_parameters(self):
        assert url_parameters_node(_call("path('route', options={'absolute': true})")) is None


class TestIsUrlGenerationSafe:
    """Safe when there are no parameters or a single constant one."""

    @pytest.mark.parametrize(
        "expression",
        [
            "path('route')",
            "path('route', {})",
            "path('route', {'id': 5})",
            "path('route', {'param': 'value'})",
            "url('route', parameters={'id': 5})",
            "path(name='route')",
            "path('route', options={'absolute': true})",
        ],
    )
    def test_safe(self, expression):
        assert is_url_generation_safe(_call(expression)) == ["html"]

    @pytest.mark.parametrize(
        "expression",
        [
            "path('route', var)",
            "path('route', {'id': x})",
            "path('route', {'a': 1, 'b': 2})",
            "path('route', {'param': ['val1', 'val2']})",
            "path('route', {'param': {'nested': 1}})",
            "url('route', parameters=var)",
            "path('route', *args)",
            "path('route', **kwargs)",
        ],
    )
    def test_unsafe(self, expression):
        assert is_url_generation_safe(_call(expression)) == []

    def test_multiple_placeholder_parameters_stay_unsafe(self):
        """Both values may fill route placeholders, but that is unknown at compile time."""
        assert is_url_generation_safe(_call("path('entity.node.revision', {'node': 1, 'revision': 2})")) == []


class TestSafeCallTransformer:
    """Wrapping safe calls in MarkSafeIfAutoescape."""

    def _transform(self, source: str) -> nodes.Template:
        template = Environment().parse(source)
        return SafeCallTransformer({"path": is_url_generation_safe}).visit(template)

    def test_safe_call_is_wrapped(self):
        template = self._transform("{{ path('route', {'id': 5}) }}")
        marked = template.find(nodes.MarkSafeIfAutoescape)
        assert marked is not None
        assert isinstance(marked.expr, nodes.Call)

    def test_unsafe_call_is_left_alone(self):
        template = self._transform("{{ path('route', var) }}")
        assert template.find(nodes.MarkSafeIfAutoescape) is None

    def test_unregistered_function_is_left_alone(self):
        template = self._transform("{{ other('route') }}")
        assert template.find(nodes.MarkSafeIfAutoescape) is None

    def test_nested_call_is_wrapped(self):
        template = self._transform("{{ path('route')|upper }}")
        assert template.find(nodes.MarkSafeIfAutoescape) is not None

    def test_mark_safe_calls_without_callbacks(self):
        template = Environment().parse("{{ path('route') }}")
        assert mark_safe_calls(template, {}) is template
        assert template.find(nodes.MarkSafeIfAutoescape) is None
