# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any, Optional

from jinja2 import Environment, nodes
from jinja2.ext import Extension
from markupsafe import Markup

from jinjabridge.html import Attribute, get_class, get_id

from .registry import FILTERS, FUNCTIONS, TemplateCallable, install
from .safety import is_url_generation_safe

logger = logging.getLogger(__name__)


class BridgeExtension(Extension, ABC):
    """
    Base class for framework bridge extensions.

    The extension registers template functions and filters on construction and
    routes them to hook methods. Framework integrations inherit from this class
    and implement the abstract hooks.

    Methods:
        get_functions / get_filters: the registration tables, shared by all integrations.
        is_url_generation_safe, safe_join, without_filter, create_attribute:
            framework independent, implemented in this class.
        get_path, get_url, get_link, get_active_theme, get_active_theme_path,
        attach_library, escape_placeholder, escape_filter, render_var, file_url,
        format_date, translate: framework specific, implemented in the subclass.
    """

    def __init__(self, environment: Environment):
        super().__init__(environment)
        environment.extend(safe_callbacks={}, bridge_services=None)
        install(environment, self.get_functions(), FUNCTIONS)
        install(environment, self.get_filters(), FILTERS)

    def get_functions(self) -> list[TemplateCallable]:
        return [
            # Receives a render-tree fragment when one is printed.
            TemplateCallable("render_var", self.render_var),
            TemplateCallable("url", self.get_url, is_safe_callback=self.is_url_generation_safe),
            TemplateCallable("path", self.get_path, is_safe_callback=self.is_url_generation_safe),
            TemplateCallable("link", self.get_link),
            TemplateCallable("file_url", self.file_url),
            TemplateCallable("attach_library", self.attach_library),
            TemplateCallable("active_theme_path", self.get_active_theme_path),
            TemplateCallable("active_theme", self.get_active_theme),
            TemplateCallable("create_attribute", self.create_attribute),
        ]

    def get_filters(self) -> list[TemplateCallable]:
        return [
            TemplateCallable("t", self.translate, is_safe=("html",)),
            TemplateCallable("trans", self.translate, is_safe=("html",)),
            # Distinguishable copy of escaping for translation placeholders.
            TemplateCallable("placeholder", self.escape_placeholder, is_safe=("html",), needs_environment=True),
            TemplateCallable("drupal_escape", self.escape_filter, needs_environment=True),
            TemplateCallable("safe_join", self.safe_join, is_safe=("html",), needs_environment=True),
            TemplateCallable("without", self.without_filter),
            TemplateCallable("clean_class", get_class),
            TemplateCallable("clean_id", get_id),
            TemplateCallable("render", self.render_var),
            TemplateCallable("format_date", self.format_date),
        ]

    @abstractmethod
    def get_path(self, name: str, parameters: Optional[Mapping] = None, options: Optional[Mapping] = None) -> str:
        """
        Generate a relative URL path from a route name and parameters.

        The 'absolute' option is forced to False.
        """

    @abstractmethod
    def get_url(self, name: str, parameters: Optional[Mapping] = None, options: Optional[Mapping] = None) -> str:
        """
        Generate an absolute URL from a route name and parameters.

        The 'absolute' option is forced to True.
        """

    @abstractmethod
    def get_link(self, text: Any, url: Any, attributes: Any = None) -> dict[str, Any]:
        """
        Build a render-tree fragment for a link.

        Args:
            text: The link text, usually a translated string
            url: Url object or URI string
            attributes: Optional dict or Attribute of link attributes

        Returns:
            Render-tree fragment representing the link
        """

    @abstractmethod
    def get_active_theme(self) -> str:
        """Return the name of the active theme."""

    @abstractmethod
    def get_active_theme_path(self) -> str:
        """Return the path of the active theme."""

    @abstractmethod
    def attach_library(self, library: str) -> None:
        """Attach an asset library to the template, and hence to the response."""

    @abstractmethod
    def escape_placeholder(self, env: Environment, value: Any) -> Optional[Markup]:
        """Escape a translation placeholder value and wrap it in placeholder markup."""

    @abstractmethod
    def escape_filter(
        self,
        env: Environment,
        arg: Any,
        strategy: str = "html",
        charset: Optional[str] = None,
        autoescape: bool = False,
    ) -> Any:
        """
        Replacement for the template language's escape filter.

        Args:
            env: Active environment
            arg: The value to escape
            strategy: Escaping strategy, defaults to 'html'
            charset: The charset
            autoescape: True when called by auto-escaping, False when called by
                the template author

        Returns:
            The escaped, rendered output, or None when there is no output

        Raises:
            UnprintableObjectError: arg is an object that cannot be converted to text
        """

    @abstractmethod
    def render_var(self, arg: Any) -> Any:
        """
        Render a printed value.

        Render-tree fragments go through the render pipeline, scalars are
        returned as they are, and safe output is returned intact.
        """

    @abstractmethod
    def file_url(self, uri: str) -> str:
        """Return a web-accessible URL for a stored file."""

    @abstractmethod
    def format_date(
        self,
        timestamp: Any,
        type: str = "medium",
        format: str = "",
        timezone: Optional[str] = None,
        langcode: Optional[str] = None,
    ) -> str:
        """Format a timestamp with a configured date format."""

    @abstractmethod
    def translate(self, string: Any, args: Optional[Mapping] = None, options: Optional[Mapping] = None) -> str:
        """Translate a string, substituting placeholder arguments."""

    def is_url_generation_safe(self, call: nodes.Call) -> list[str]:
        """Contexts in which the output of a url()/path() call needs no escaping."""
        return is_url_generation_safe(call)

    def safe_join(self, env: Environment, value: Any, glue: str = "") -> Markup:
        """
        Join several values together, escaping each one.

        Args:
            env: Active environment
            value: The pieces to join, any iterable (mappings contribute their values)
            glue: Delimiter, trusted as safe output. Never pass user data here.

        Returns:
            The joined string
        """
        if value is None:
            return Markup("")
        if isinstance(value, Mapping):
            items: Iterable[Any] = value.values()
        elif isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            items = [value]
        else:
            items = value

        pieces = []
        for item in items:
            # Items not marked safe are escaped.
            escaped = self.escape_filter(env, item, "html", None, True)
            pieces.append("" if escaped is None else str(escaped))
        return Markup(glue.join(pieces))

    def create_attribute(self, attributes: Optional[Mapping[str, Any]] = None) -> Attribute:
        """Create an Attribute object from a mapping of HTML attributes."""
        return Attribute(attributes)

    def without_filter(self, element: Any, *keys: Any) -> Any:
        """
        Remove child elements from a copy of a render-tree fragment.

        The original fragment stays untouched, so the template can still print
        the removed children on their own. Lists and tuples are filtered by
        index, keeping the order of the remaining items.

        Args:
            element: The parent fragment
            keys: Keys of the children to leave out

        Returns:
            The filtered copy, or element itself when it is neither a mapping
            nor a sequence
        """
        if isinstance(element, MutableMapping):
            filtered = copy.copy(element)
        elif isinstance(element, Mapping):
            filtered = dict(element)
        elif isinstance(element, (list, tuple)):
            indexes = {int(key) for key in keys if isinstance(key, int) or str(key).isdigit()}
            return type(element)(item for index, item in enumerate(element) if index not in indexes)
        else:
            return element
        for key in keys:
            if key in filtered:
                del filtered[key]
        return filtered
