# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Template extension package.

This module exposes a single import surface so callers do not need to know
where the registration table, safety analysis or service contracts live.
"""

from .base import BridgeExtension
from .environment import BridgeEnvironment, create_environment
from .registry import FILTERS, FUNCTIONS, TemplateCallable, install
from .safety import SafeCallTransformer, is_url_generation_safe, mark_safe_calls, url_parameters_node
from .services import (
    DateFormatter,
    FileUrlGenerator,
    FrameworkServices,
    LibraryAttacher,
    Renderer,
    ServiceBridgeExtension,
    Theme,
    ThemeManager,
    Translator,
    UnprintableObjectError,
    UrlGenerator,
)

__all__ = [
    "FILTERS",
    "FUNCTIONS",
    "BridgeEnvironment",
    "BridgeExtension",
    "DateFormatter",
    "FileUrlGenerator",
    "FrameworkServices",
    "LibraryAttacher",
    "Renderer",
    "SafeCallTransformer",
    "ServiceBridgeExtension",
    "TemplateCallable",
    "Theme",
    "ThemeManager",
    "Translator",
    "UnprintableObjectError",
    "UrlGenerator",
    "create_environment",
    "install",
    "is_url_generation_safe",
    "mark_safe_calls",
    "url_parameters_node",
]
