# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Static, in-memory implementations of the framework service contracts.

These back the CLI and the tests. They implement enough of a framework to
render real templates: a route table, a small render pipeline for
render-tree fragments, placeholder substitution for translations and
strftime based date formats.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime, timezone as dt_timezone
from typing import Any, Optional
from urllib.parse import quote, urlencode
from zoneinfo import ZoneInfo

from markupsafe import Markup, escape

from .config import BridgeConfig
from .extension.services import FrameworkServices, Theme
from .html import Attribute
from .url import Url

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")
_URI_SCHEME = re.compile(r"^([a-z][a-z0-9+.-]*)://(.*)$", re.IGNORECASE)
_WEB_SCHEMES = {"http", "https"}


class RouteNotFoundError(LookupError):
    """Raised when a route name is not in the route table."""


class StaticUrlGenerator:
    """Generates URLs from a table of route name -> path pattern."""

    def __init__(self, routes: Mapping[str, str], base_url: str = "http://localhost"):
        self.routes = dict(routes)
        self.base_url = base_url.rstrip("/")

    def generate_from_route(self, name: str, parameters: dict[str, Any], options: dict[str, Any]) -> str:
        pattern = self.routes.get(name)
        if pattern is None:
            raise RouteNotFoundError(f"Route '{name}' does not exist.")

        remaining = dict(parameters or {})

        def _fill(match: re.Match) -> str:
            key = match.group(1)
            if key not in remaining:
                raise ValueError(f"Missing parameter '{key}' for route '{name}'.")
            return quote(str(remaining.pop(key)), safe="")

        path = _PLACEHOLDER.sub(_fill, pattern)
        # Parameters without a placeholder end up in the query string
        query = dict(options.get("query") or {})
        query.update(remaining)
        if query:
            path += ("&" if "?" in path else "?") + urlencode(query, doseq=True)
        fragment = options.get("fragment")
        if fragment:
            path += "#" + quote(str(fragment), safe="")
        if options.get("absolute"):
            path = self.base_url + path
        return path


class StaticLibraryAttacher:
    """Collects attached asset libraries in attachment order."""

    def __init__(self):
        self.libraries: list[str] = []

    def attach(self, library: str) -> None:
        if library not in self.libraries:
            self.libraries.append(library)


class StaticRenderer:
    """
    Minimal render pipeline for render-tree fragments.

    Supported keys: '#markup' (trusted), '#plain_text' (escaped), '#type': 'link'
    with '#title' and '#url', '#attached' libraries, and child elements under
    keys without a '#' prefix, rendered in insertion order.
    """

    def __init__(self, url_generator: StaticUrlGenerator, library_attacher: StaticLibraryAttacher):
        self.url_generator = url_generator
        self.library_attacher = library_attacher

    def render(self, element: Any) -> Markup:
        if isinstance(element, (list, tuple)):
            return Markup("").join(self.render(child) for child in element)
        if not isinstance(element, Mapping):
            return escape(element)

        attached = element.get("#attached") or {}
        for library in attached.get("library", []):
            self.library_attacher.attach(library)

        if element.get("#type") == "link":
            output = self._render_link(element)
        elif "#markup" in element:
            output = Markup(element["#markup"])
        elif "#plain_text" in element:
            output = escape(element["#plain_text"])
        else:
            output = Markup("")

        children = [self.render(child) for key, child in element.items() if not str(key).startswith("#")]
        return output + Markup("").join(children)

    def _render_link(self, element: Mapping[str, Any]) -> Markup:
        url = element.get("#url")
        if not isinstance(url, Url):
            url = Url.from_uri(str(url))
        attributes = Attribute({"href": url.to_string(self.url_generator)})
        attributes.merge(url.get_option("attributes") or {})
        return Markup("<a{}>{}</a>").format(attributes, element.get("#title", ""))


class StaticThemeManager:
    def __init__(self, theme: Theme):
        self.theme = theme

    def get_active_theme(self) -> Theme:
        return self.theme


class StaticTranslator:
    """
    Looks strings up in a translation table and substitutes placeholders.

    Placeholders: '@name' is escaped, '%name' is escaped and wrapped in
    <em class="placeholder">, ':name' is an escaped URL.
    """

    def __init__(self, translations: Optional[Mapping[str, str]] = None):
        self.translations = dict(translations or {})

    def translate(self, string: str, args: dict[str, Any], options: dict[str, Any]) -> Markup:
        source = str(string)
        translated = self.translations.get(source, source)
        if options.get("context"):
            translated = self.translations.get(f"{options['context']}\x04{source}", translated)
        return format_string(translated, args)


def format_string(string: str, args: Mapping[str, Any]) -> Markup:
    """Substitute '@', '%' and ':' placeholders into a trusted string."""
    replacements: dict[str, str] = {}
    for key, value in args.items():
        if key.startswith("@") or key.startswith(":"):
            replacements[key] = str(escape(value))
        elif key.startswith("%"):
            replacements[key] = f'<em class="placeholder">{escape(value)}</em>'
        else:
            logger.warning("Invalid placeholder '%s' in string '%s'", key, string)
    if not replacements:
        return Markup(string)
    pattern = re.compile("|".join(re.escape(k) for k in sorted(replacements, key=len, reverse=True)))
    return Markup(pattern.sub(lambda m: replacements[m.group(0)], string))


class StaticDateFormatter:
    """Formats timestamps with strftime patterns keyed by format type."""

    def __init__(self, date_formats: Mapping[str, str], timezone: str = "UTC"):
        self.date_formats = dict(date_formats)
        self.timezone = timezone

    def format(
        self,
        timestamp: Any,
        type: str = "medium",
        format: str = "",
        timezone: Optional[str] = None,
        langcode: Optional[str] = None,
    ) -> str:
        if type == "custom":
            pattern = format
        else:
            pattern = self.date_formats.get(type) or self.date_formats.get("medium")
        if not pattern:
            raise ValueError(f"Unknown date format type '{type}'")
        zone = timezone or self.timezone
        tz = dt_timezone.utc if zone == "UTC" else ZoneInfo(zone)
        if isinstance(timestamp, datetime):
            moment = timestamp.astimezone(tz) if timestamp.tzinfo else timestamp.replace(tzinfo=tz)
        else:
            moment = datetime.fromtimestamp(float(timestamp), tz)
        return moment.strftime(pattern)


class StaticFileUrlGenerator:
    """Maps stream wrapper URIs (public://...) onto the public files path."""

    def __init__(self, files_base_url: str = "/sites/default/files"):
        self.files_base_url = files_base_url.rstrip("/")

    def generate(self, uri: str) -> str:
        match = _URI_SCHEME.match(uri)
        if match is None:
            return uri if uri.startswith("/") else "/" + uri
        scheme, target = match.group(1).lower(), match.group(2)
        if scheme in _WEB_SCHEMES:
            return uri
        if scheme == "public":
            return f"{self.files_base_url}/{quote(target)}"
        raise ValueError(f"Unsupported stream wrapper scheme '{scheme}' in '{uri}'")


def build_static_services(config: BridgeConfig) -> FrameworkServices:
    """Build the static reference services from a BridgeConfig."""
    url_generator = StaticUrlGenerator(config.routes, config.base_url)
    library_attacher = StaticLibraryAttacher()
    return FrameworkServices(
        url_generator=url_generator,
        renderer=StaticRenderer(url_generator, library_attacher),
        library_attacher=library_attacher,
        theme_manager=StaticThemeManager(Theme(name=config.theme.name, path=config.theme.path)),
        translator=StaticTranslator(config.translations),
        date_formatter=StaticDateFormatter(config.date_formats, config.timezone),
        file_url_generator=StaticFileUrlGenerator(config.files_base_url),
    )
