# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Registration table for template functions and filters."""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, Optional

from jinja2 import Environment, nodes, pass_environment
from markupsafe import Markup

logger = logging.getLogger(__name__)

FUNCTIONS = "functions"
FILTERS = "filters"

SafeCallback = Callable[[nodes.Call], list[str]]


@dataclass(frozen=True)
class TemplateCallable:
    """
    One entry of the name -> handler table.

    Attributes:
        name (str): name the template uses to call the handler
        handler (Callable): callable invoked at render time
        is_safe (tuple[str, ...]): output contexts where the result never needs escaping
        is_safe_callback (Callable): compile-time classifier, receives the call node
            and returns the contexts in which that particular call is safe
        needs_environment (bool): pass the active Environment as first argument
    """

    name: str
    handler: Callable[..., Any]
    is_safe: tuple[str, ...] = ()
    is_safe_callback: Optional[SafeCallback] = None
    needs_environment: bool = False

    def template_handler(self) -> Callable[..., Any]:
        """Return the handler as Jinja2 should see it, with metadata applied."""
        handler = self.handler
        if "html" in self.is_safe:
            handler = _marking_safe(handler)
        if self.needs_environment:
            handler = pass_environment(_as_function(handler))
        return handler


def _mark_safe(value: Any) -> Any:
    if isinstance(value, str) and not hasattr(value, "__html__"):
        return Markup(value)
    return value


def _marking_safe(func: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(func)
    def call(*args, **kwargs):
        return _mark_safe(func(*args, **kwargs))

    return call


def _as_function(func: Callable[..., Any]) -> Callable[..., Any]:
    # pass_environment sets an attribute, which bound methods do not accept
    @functools.wraps(func)
    def call(*args, **kwargs):
        return func(*args, **kwargs)

    return call


def install(environment: Environment, callables: Iterable[TemplateCallable], target: str) -> None:
    """
    Install table entries into an environment.

    Args:
        environment: Environment receiving the handlers
        callables: Entries to install
        target: FUNCTIONS (environment globals) or FILTERS (environment filters)

    Raises:
        ValueError: If target is unknown, or a filter declares a safe callback
    """
    if target == FUNCTIONS:
        table = environment.globals
    elif target == FILTERS:
        table = environment.filters
    else:
        raise ValueError(f"Unknown registration target: {target}")

    if getattr(environment, "safe_callbacks", None) is None:
        environment.safe_callbacks = {}

    for entry in callables:
        if entry.is_safe_callback is not None:
            if target != FUNCTIONS:
                raise ValueError(f"Safe callbacks are only supported for functions, got filter '{entry.name}'")
            environment.safe_callbacks[entry.name] = entry.is_safe_callback
        table[entry.name] = entry.template_handler()
        logger.debug("Registered template %s '%s'", target[:-1], entry.name)
