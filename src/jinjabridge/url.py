# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from jinjabridge.extension.services import UrlGenerator


@dataclass
class Url:
    """
    A link target, either a named route or an external/internal URI.

    Attributes:
        route_name (str): route to generate the URL from, None for URIs
        route_parameters (dict): parameters filling the route placeholders
        options (dict): generation options, e.g. 'absolute', 'query', 'attributes'
        uri (str): literal URI when the target is not a route
    """

    route_name: Optional[str] = None
    route_parameters: dict[str, Any] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)
    uri: Optional[str] = None

    @classmethod
    def from_route(
        cls, route_name: str, route_parameters: Optional[dict[str, Any]] = None, options: Optional[dict[str, Any]] = None
    ) -> Url:
        return cls(route_name=route_name, route_parameters=dict(route_parameters or {}), options=dict(options or {}))

    @classmethod
    def from_uri(cls, uri: str, options: Optional[dict[str, Any]] = None) -> Url:
        if not isinstance(uri, str) or not uri:
            raise ValueError(f"A non-empty URI string is required, got {uri!r}")
        return cls(uri=uri, options=dict(options or {}))

    @property
    def is_routed(self) -> bool:
        return self.route_name is not None

    def get_option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)

    def set_option(self, name: str, value: Any) -> Url:
        self.options[name] = value
        return self

    def copy(self) -> Url:
        return copy.deepcopy(self)

    def to_string(self, generator: UrlGenerator) -> str:
        """Generate the URL string, using generator for routed targets."""
        if self.is_routed:
            return generator.generate_from_route(self.route_name, self.route_parameters, self.options)
        return self.uri
