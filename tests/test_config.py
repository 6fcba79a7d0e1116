# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for configuration loading and CLI override parsing.
"""

import logging

import pytest

from jinjabridge.config import BridgeConfig, ThemeConfig, config_from_dict, load_config
from jinjabridge.utils import coerce_bool, deep_merge, parse_cli_params


class TestLoadConfig:
    def test_packaged_defaults(self):
        config = load_config()
        assert isinstance(config, BridgeConfig)
        assert config.autoescape is True
        assert config.templates_dir is None
        assert config.theme == ThemeConfig(name="stark", path="core/themes/stark")
        assert config.routes["entity.node.canonical"] == "/node/{node}"
        assert config.date_formats["html_date"] == "%Y-%m-%d"

    def test_overrides_are_merged(self):
        config = load_config(overrides={"theme": {"name": "olivero"}, "routes": {"custom": "/custom"}})
        assert config.theme.name == "olivero"
        assert config.theme.path == "core/themes/stark"
        assert config.routes["custom"] == "/custom"
        assert config.routes["user.login"] == "/user/login"

    def test_custom_file(self, tmp_path):
        path = tmp_path / "bridge.yaml"
        path.write_text("base_url: https://example.com/\ntrim_blocks: 'yes'\n", encoding="utf-8")
        config = load_config(str(path))
        assert config.base_url == "https://example.com/"
        assert config.trim_blocks is True
        assert config.routes == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(str(path))

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)) == BridgeConfig()


class TestConfigFromDict:
    def test_unknown_key_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="jinjabridge.config"):
            config = config_from_dict({"nonsense": 1, "timezone": "Europe/Berlin"})
        assert config.timezone == "Europe/Berlin"
        assert "nonsense" in caplog.text

    def test_theme_must_be_mapping(self):
        with pytest.raises(ValueError, match="'theme' must be a mapping"):
            config_from_dict({"theme": "olivero"})

    def test_routes_must_be_mapping(self):
        with pytest.raises(ValueError, match="'routes' must be a mapping"):
            config_from_dict({"routes": ["/a"]})

    def test_autoescape_extensions(self):
        assert config_from_dict({"autoescape": ["html", "twig"]}).autoescape == ["html", "twig"]

    def test_autoescape_string(self):
        assert config_from_dict({"autoescape": "off"}).autoescape is False


class TestUtils:
    @pytest.mark.parametrize(
        "value,expected",
        [(None, None), (True, True), ("Yes", True), ("off", False), ("0", False), (1, True), ("", False)],
    )
    def test_coerce_bool(self, value, expected):
        assert coerce_bool(value) is expected

    def test_deep_merge_does_not_mutate(self):
        base = {"a": {"b": 1, "c": 2}}
        merged = deep_merge(base, {"a": {"c": 3}})
        assert merged == {"a": {"b": 1, "c": 3}}
        assert base == {"a": {"b": 1, "c": 2}}

    def test_parse_cli_params(self):
        params = parse_cli_params(["theme.name=olivero", "trim_blocks=true", "routes.x=/x"])
        assert params == {"theme": {"name": "olivero"}, "trim_blocks": True, "routes": {"x": "/x"}}

    def test_parse_cli_params_missing_equals(self):
        with pytest.raises(ValueError, match="Expected key=value"):
            parse_cli_params(["theme.name"])

    def test_parse_cli_params_empty_key(self):
        with pytest.raises(ValueError, match="Key cannot be empty"):
            parse_cli_params(["=value"])
