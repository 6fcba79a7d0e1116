# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the Attribute value object.
"""

import copy

from markupsafe import Markup

from jinjabridge.html import Attribute


class TestAttribute:
    def test_empty(self):
        assert str(Attribute()) == ""

    def test_render(self):
        attributes = Attribute({"id": "main", "class": ["a", "b"], "data-x": "1"})
        assert str(attributes) == ' id="main" class="a b" data-x="1"'

    def test_values_are_escaped(self):
        assert str(Attribute({"title": '"><script>'})) == ' title="&#34;&gt;&lt;script&gt;"'

    def test_boolean_values(self):
        assert str(Attribute({"disabled": True, "hidden": False})) == " disabled"

    def test_html_is_safe_output(self):
        assert isinstance(Attribute({"id": "x"}).__html__(), Markup)

    def test_class_string_is_split_and_deduplicated(self):
        attributes = Attribute({"class": "a b a"})
        assert attributes["class"] == ["a", "b"]

    def test_add_and_remove_class(self):
        attributes = Attribute().add_class("a", ["b", "c"]).remove_class("b")
        assert attributes["class"] == ["a", "c"]
        assert attributes.has_class("a")
        assert not attributes.has_class("b")

    def test_set_and_remove_attribute(self):
        attributes = Attribute().set_attribute("id", "x").set_attribute("title", "t")
        attributes.remove_attribute("title")
        assert attributes.has_attribute("id")
        assert not attributes.has_attribute("title")

    def test_merge(self):
        attributes = Attribute({"class": ["a"], "id": "x"}).merge({"class": ["b"], "id": "y"})
        assert attributes.to_dict() == {"class": ["a", "b"], "id": "y"}

    def test_copy_is_independent(self):
        attributes = Attribute({"class": ["a"]})
        duplicate = copy.copy(attributes)
        duplicate.add_class("b")
        assert attributes["class"] == ["a"]

    def test_empty_class_is_not_rendered(self):
        assert str(Attribute({"class": []})) == ""
