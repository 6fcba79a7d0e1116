# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .utils import coerce_bool, deep_merge

logger = logging.getLogger(__name__)

_BASE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_FILE = str((_BASE_DIR / "data" / "bridge_config.yaml").resolve())


@dataclass
class ThemeConfig:
    """
    Active theme.
    """

    name: str = "stark"
    path: str = "core/themes/stark"


@dataclass
class BridgeConfig:
    """
    Template environment settings plus the data behind the static reference services.

    Attributes:
        templates_dir (str): directory for the FileSystemLoader, None for no loader
        autoescape (bool | list): True/False, or file extensions to autoescape
        trim_blocks (bool): remove the first newline after a block
        lstrip_blocks (bool): strip whitespace before a block
        base_url (str): scheme and host prefixed to absolute URLs
        files_base_url (str): public path of stored files
        routes (dict): route name -> path pattern with {placeholder} segments
        theme (ThemeConfig): active theme
        translations (dict): source string -> translated string
        date_formats (dict): date format type -> strftime pattern
        timezone (str): default timezone name for format_date
    """

    templates_dir: Optional[str] = None
    autoescape: Union[bool, list] = True
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    base_url: str = "http://localhost"
    files_base_url: str = "/sites/default/files"
    routes: dict[str, str] = field(default_factory=dict)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    translations: dict[str, str] = field(default_factory=dict)
    date_formats: dict[str, str] = field(default_factory=dict)
    timezone: str = "UTC"


_BOOL_FIELDS = {"trim_blocks", "lstrip_blocks"}
_DICT_FIELDS = {"routes", "translations", "date_formats"}


def _load_yaml_payload(path: str) -> Any:
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def config_from_dict(data: dict[str, Any]) -> BridgeConfig:
    """
    Build a BridgeConfig from a plain mapping.

    Unknown keys are ignored with a warning.

    Raises:
        ValueError: If a section has the wrong shape
    """
    known = {f.name for f in fields(BridgeConfig)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key '%s'", key)
            continue
        if key == "theme":
            if not isinstance(value, dict):
                raise ValueError(f"'theme' must be a mapping, got {type(value).__name__}")
            value = ThemeConfig(**{k: str(v) for k, v in value.items() if k in ("name", "path")})
        elif key in _DICT_FIELDS:
            if value is None:
                value = {}
            if not isinstance(value, dict):
                raise ValueError(f"'{key}' must be a mapping, got {type(value).__name__}")
            value = {str(k): str(v) for k, v in value.items()}
        elif key in _BOOL_FIELDS:
            value = coerce_bool(value)
        elif key == "autoescape" and not isinstance(value, list):
            value = coerce_bool(value)
        kwargs[key] = value
    return BridgeConfig(**kwargs)


def load_config(path: Optional[str] = None, overrides: Optional[dict[str, Any]] = None) -> BridgeConfig:
    """
    Load a YAML config file, apply overrides and build a BridgeConfig.

    Args:
        path: YAML file to read, defaults to the packaged bridge_config.yaml
        overrides: Nested values merged over the file content

    Returns:
        The loaded configuration

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the document is not a mapping
    """
    config_path = os.path.abspath(path) if path else DEFAULT_CONFIG_FILE
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")
    payload = _load_yaml_payload(config_path)
    if not isinstance(payload, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(payload).__name__}")
    if overrides:
        payload = deep_merge(payload, overrides)
    logger.debug("Loaded config from %s", config_path)
    return config_from_dict(payload)
