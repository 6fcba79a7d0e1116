# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end tests for templates rendered through the bridge environment.
"""

from jinja2 import nodes

from jinjabridge.config import BridgeConfig
from jinjabridge.extension import BridgeEnvironment, create_environment


class TestCompileTimeSafety:
    """url()/path() output escaping decided at compile time."""

    def test_environment_type(self, env):
        assert isinstance(env, BridgeEnvironment)

    def test_safe_call_is_marked_when_parsed(self, env):
        template = env.parse("{{ path('entity.node.canonical', {'node': 5}) }}")
        assert template.find(nodes.MarkSafeIfAutoescape) is not None

    def test_unsafe_call_is_not_marked(self, env):
        template = env.parse("{{ path('entity.node.canonical', params) }}")
        assert template.find(nodes.MarkSafeIfAutoescape) is None

    def test_safe_call_skips_escaping(self, render):
        assert render("{{ path('legacy.search') }}") == "/legacy?type=all&sort=asc"

    def test_variable_parameters_are_escaped(self, render):
        assert render("{{ path('legacy.search', params) }}", params={}) == "/legacy?type=all&amp;sort=asc"

    def test_multiple_parameters_are_escaped(self, render):
        assert render("{{ path('search.view', {'a': 1, 'b': 2}) }}") == "/search?a=1&amp;b=2"

    def test_single_constant_parameter(self, render):
        assert render("{{ path('search.view', {'q': 'x'}) }}") == "/search?q=x"

    def test_url_with_placeholder(self, render):
        assert render("{{ url('entity.node.canonical', {'node': 5}) }}") == "http://localhost/node/5"

    def test_named_parameters(self, render):
        output = render("{{ path('entity.node.edit_form', parameters={'node': 7}) }}")
        assert output == "/node/7/edit"


class TestPrintedValues:
    """Every printed value goes through render_var."""

    def test_none_prints_nothing(self, render):
        assert render("[{{ value }}]", value=None) == "[]"

    def test_undefined_prints_nothing(self, render):
        assert render("[{{ missing }}]") == "[]"

    def test_zero(self, render):
        assert render("{{ value }}", value=0) == "0"

    def test_strings_are_autoescaped(self, render):
        assert render("{{ value }}", value="<script>") == "&lt;script&gt;"

    def test_fragments_are_rendered(self, render):
        element = {"#markup": "<p>body</p>", "footer": {"#plain_text": "<small>"}}
        assert render("{{ element }}", element=element) == "<p>body</p>&lt;small&gt;"

    def test_children_printed_separately(self, render):
        element = {"title": {"#markup": "<h2>T</h2>"}, "body": {"#markup": "<p>B</p>"}}
        output = render("{{ element|without('title') }}|{{ element.title }}", element=element)
        assert output == "<p>B</p>|<h2>T</h2>"


class TestEnvironmentConfig:
    """create_environment settings."""

    def test_autoescape_disabled(self, services):
        env = create_environment(services, BridgeConfig(autoescape=False))
        assert env.from_string("{{ value }}").render(value="<b>") == "<b>"

    def test_templates_dir(self, services, tmp_path):
        (tmp_path / "page.html").write_text("<p>{{ 'Hello'|t }}</p>", encoding="utf-8")
        env = create_environment(services, BridgeConfig(templates_dir=str(tmp_path)))
        assert env.get_template("page.html").render() == "<p>Hallo</p>"

    def test_autoescape_by_extension(self, services, tmp_path):
        (tmp_path / "page.html").write_text("{{ value }}", encoding="utf-8")
        (tmp_path / "page.txt").write_text("{{ value }}", encoding="utf-8")
        env = create_environment(services, BridgeConfig(templates_dir=str(tmp_path), autoescape=["html"]))
        assert env.get_template("page.html").render(value="<b>") == "&lt;b&gt;"
        assert env.get_template("page.txt").render(value="<b>") == "<b>"

    def test_trim_blocks(self, services):
        env = create_environment(services, BridgeConfig(trim_blocks=True))
        assert env.from_string("{% if true %}\nx{% endif %}").render() == "x"

    def test_services_attached(self, env, services):
        assert env.bridge_services is services
