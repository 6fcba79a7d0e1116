# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Framework service contracts and the extension that delegates to them.

A framework integration implements the contracts below and attaches a
FrameworkServices bundle to the environment (see create_environment).
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote
from typing import Any, Optional, Protocol

from jinja2 import Environment, Undefined
from markupsafe import Markup

from jinjabridge.html import Attribute, escape, escape_html_attr
from jinjabridge.url import Url

from .base import BridgeExtension

logger = logging.getLogger(__name__)

ESCAPE_STRATEGIES = ("html", "html_attr", "url")


class UnprintableObjectError(TypeError):
    """Raised when a value has no way of being converted to template output."""

    def __init__(self, value: Any):
        super().__init__(f"Object of type {type(value).__name__} cannot be printed.")
        self.value = value


@dataclass(frozen=True)
class Theme:
    name: str
    path: str


class UrlGenerator(Protocol):
    def generate_from_route(self, name: str, parameters: dict[str, Any], options: dict[str, Any]) -> str: ...


class Renderer(Protocol):
    def render(self, element: Any) -> str: ...


class LibraryAttacher(Protocol):
    def attach(self, library: str) -> None: ...


class ThemeManager(Protocol):
    def get_active_theme(self) -> Theme: ...


class Translator(Protocol):
    def translate(self, string: str, args: dict[str, Any], options: dict[str, Any]) -> str: ...


class DateFormatter(Protocol):
    def format(
        self,
        timestamp: Any,
        type: str = "medium",
        format: str = "",
        timezone: Optional[str] = None,
        langcode: Optional[str] = None,
    ) -> str: ...


class FileUrlGenerator(Protocol):
    def generate(self, uri: str) -> str: ...


@dataclass
class FrameworkServices:
    """Framework services the extension calls into."""

    url_generator: UrlGenerator
    renderer: Renderer
    library_attacher: LibraryAttacher
    theme_manager: ThemeManager
    translator: Translator
    date_formatter: DateFormatter
    file_url_generator: FileUrlGenerator


def _is_zero(arg: Any) -> bool:
    return not isinstance(arg, bool) and isinstance(arg, (int, float)) and arg == 0


def _is_empty(arg: Any) -> bool:
    if arg is None or arg is False:
        return True
    return isinstance(arg, (str, Mapping, list, tuple)) and len(arg) == 0


def _is_scalar(arg: Any) -> bool:
    return isinstance(arg, (str, numbers.Number))


def _scalar_text(arg: Any) -> str:
    # true prints as "1", false never gets here
    return "1" if arg is True else str(arg)


def _has_custom_str(arg: Any) -> bool:
    return type(arg).__str__ is not object.__str__


class ServiceBridgeExtension(BridgeExtension):
    """Bridge extension backed by the FrameworkServices attached to its environment."""

    @property
    def services(self) -> FrameworkServices:
        services = getattr(self.environment, "bridge_services", None)
        if services is None:
            raise RuntimeError("No framework services attached to the environment")
        return services

    def get_path(self, name: str, parameters: Optional[Mapping] = None, options: Optional[Mapping] = None) -> str:
        options = dict(options or {})
        options["absolute"] = False
        return self.services.url_generator.generate_from_route(name, dict(parameters or {}), options)

    def get_url(self, name: str, parameters: Optional[Mapping] = None, options: Optional[Mapping] = None) -> str:
        options = dict(options or {})
        options["absolute"] = True
        return self.services.url_generator.generate_from_route(name, dict(parameters or {}), options)

    def get_link(self, text: Any, url: Any, attributes: Any = None) -> dict[str, Any]:
        url = url.copy() if isinstance(url, Url) else Url.from_uri(str(url))
        if attributes:
            if isinstance(attributes, Attribute):
                attributes = attributes.to_dict()
            existing = url.get_option("attributes")
            if existing:
                attributes = {**existing, **attributes}
            url.set_option("attributes", dict(attributes))
        return {"#type": "link", "#title": text, "#url": url}

    def get_active_theme(self) -> str:
        return self.services.theme_manager.get_active_theme().name

    def get_active_theme_path(self) -> str:
        return self.services.theme_manager.get_active_theme().path

    def attach_library(self, library: str) -> None:
        if not isinstance(library, str):
            raise TypeError("Argument must be a string.")
        self.services.library_attacher.attach(library)
        logger.debug("Attached library %s", library)

    def file_url(self, uri: str) -> str:
        return self.services.file_url_generator.generate(uri)

    def format_date(
        self,
        timestamp: Any,
        type: str = "medium",
        format: str = "",
        timezone: Optional[str] = None,
        langcode: Optional[str] = None,
    ) -> str:
        return self.services.date_formatter.format(timestamp, type, format, timezone, langcode)

    def translate(self, string: Any, args: Optional[Mapping] = None, options: Optional[Mapping] = None) -> str:
        return self.services.translator.translate(string, dict(args or {}), dict(options or {}))

    def escape_placeholder(self, env: Environment, value: Any) -> Optional[Markup]:
        escaped = self.escape_filter(env, value)
        return Markup('<em class="placeholder">%s</em>') % ("" if escaped is None else escaped)

    def escape_filter(
        self,
        env: Environment,
        arg: Any,
        strategy: str = "html",
        charset: Optional[str] = None,
        autoescape: bool = False,
    ) -> Any:
        if isinstance(arg, Undefined):
            arg = str(arg)
        if _is_zero(arg):
            return 0
        if _is_empty(arg):
            return None
        # Keep safe output intact for auto-escaping
        if autoescape and hasattr(arg, "__html__"):
            return arg

        text: Optional[str] = None
        if _is_scalar(arg):
            text = _scalar_text(arg)
        elif isinstance(arg, Url):
            text = arg.to_string(self.services.url_generator)
        elif hasattr(arg, "__html__") or not isinstance(arg, (Mapping, list, tuple)):
            if hasattr(arg, "to_renderable"):
                arg = arg.to_renderable()
            elif _has_custom_str(arg):
                text = str(arg)
            elif hasattr(arg, "to_string"):
                text = arg.to_string()
            else:
                raise UnprintableObjectError(arg)

        if text is not None:
            return self._escape_text(text, strategy)

        # Render-tree fragments are safe by definition
        return self._render_fragment(arg)

    def render_var(self, arg: Any) -> Any:
        if isinstance(arg, Undefined):
            arg = str(arg)
        if hasattr(arg, "__html__"):
            return arg
        if _is_zero(arg):
            return 0
        if _is_empty(arg):
            return None
        if _is_scalar(arg):
            return _scalar_text(arg) if isinstance(arg, bool) else arg
        if isinstance(arg, Url):
            return arg.to_string(self.services.url_generator)
        if not isinstance(arg, (Mapping, list, tuple)):
            if hasattr(arg, "to_renderable"):
                arg = arg.to_renderable()
            elif _has_custom_str(arg):
                return str(arg)
            elif hasattr(arg, "to_string"):
                return arg.to_string()
            else:
                raise UnprintableObjectError(arg)
        return self._render_fragment(arg)

    def _escape_text(self, text: str, strategy: str) -> Any:
        if strategy == "html":
            return escape(text)
        if strategy == "html_attr":
            return escape_html_attr(text)
        if strategy == "url":
            return quote(text, safe="")
        raise ValueError(f'Invalid escaping strategy "{strategy}" (valid ones: {", ".join(ESCAPE_STRATEGIES)}).')

    def _render_fragment(self, element: Any) -> Markup:
        if isinstance(element, Mapping):
            # Pre-rendered elements are not rendered again
            markup = element.get("#markup")
            if element.get("#printed") and markup:
                return Markup(markup)
            element = dict(element)
            element["#printed"] = False
        return Markup(self.services.renderer.render(element))
