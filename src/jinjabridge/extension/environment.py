# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Environment wiring for the bridge extension."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from jinja2 import BaseLoader, Environment, FileSystemLoader, nodes, select_autoescape

from jinjabridge.config import BridgeConfig

from .safety import mark_safe_calls
from .services import FrameworkServices, ServiceBridgeExtension

if TYPE_CHECKING:
    from .base import BridgeExtension

logger = logging.getLogger(__name__)


class BridgeEnvironment(Environment):
    """Environment that applies compile-time output safety to parsed templates."""

    def _parse(self, source: str, name: Optional[str], filename: Optional[str]) -> nodes.Template:
        template = super()._parse(source, name, filename)
        return mark_safe_calls(template, getattr(self, "safe_callbacks", None) or {})


def _finalizer(extension: BridgeExtension) -> Callable[[Any], Any]:
    def finalize(value: Any) -> Any:
        rendered = extension.render_var(value)
        return "" if rendered is None else rendered

    return finalize


def _autoescape_setting(autoescape: Any) -> Any:
    if isinstance(autoescape, (list, tuple)):
        return select_autoescape(enabled_extensions=tuple(autoescape), default_for_string=True)
    return bool(autoescape)


def create_environment(
    services: Optional[FrameworkServices],
    config: Optional[BridgeConfig] = None,
    loader: Optional[BaseLoader] = None,
    extension: type[BridgeExtension] = ServiceBridgeExtension,
) -> BridgeEnvironment:
    """
    Build an environment with the bridge extension installed.

    Every printed value goes through the extension's render_var, so render-tree
    fragments are rendered and None prints nothing.

    Args:
        services: Framework services the extension delegates to
        config: Environment settings, defaults to BridgeConfig()
        loader: Template loader, defaults to a FileSystemLoader on config.templates_dir
        extension: Bridge extension class to install

    Returns:
        The configured environment
    """
    if config is None:
        config = BridgeConfig()
    if loader is None and config.templates_dir:
        loader = FileSystemLoader(config.templates_dir)

    env = BridgeEnvironment(
        loader=loader,
        autoescape=_autoescape_setting(config.autoescape),
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        extensions=[extension],
    )
    env.bridge_services = services
    env.finalize = _finalizer(env.extensions[extension.identifier])
    logger.debug("Created environment with %s (templates_dir=%s)", extension.__name__, config.templates_dir)
    return env
